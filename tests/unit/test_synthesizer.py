"""
Unit tests for the pool topology synthesizer.
"""

import pytest

from conftest import make_bd
from kubepool.exceptions import (
    ConfigurationError,
    GroupArithmeticError,
    InsufficientDevicesError,
    InvalidSchemeError,
)
from kubepool.generate.eligibility import select_eligible
from kubepool.generate.serializer import from_yaml, to_yaml
from kubepool.generate.models import PoolRequest
from kubepool.generate.synthesizer import check_request, make_pools, synthesize, validate_request

NODES = ["node1", "node2", "node3"]

SINGLE_STRIPE_YAML = """apiVersion: cstor.openebs.io/v1
kind: CStorPoolCluster
metadata:
  namespace: openebs
  generateName: cstor
spec:
  pools:
  - nodeSelector:
      kubernetes.io/hostname: node1
    dataRaidGroups:
    - blockDevices:
      - blockDeviceName: bd-1-n1
    poolConfig:
      dataRaidGroupType: stripe
"""


@pytest.fixture
def device_map(good_bds):
    return select_eligible(NODES, good_bds)


def _groups(pool):
    return [group.names for group in pool.data_raid_groups]


class TestValidateRequest:
    """Tests for validate_request function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "pool_type,devices,size",
        [("stripe", 1, 1), ("stripe", 5, 1), ("mirror", 2, 2), ("mirror", 6, 2), ("raidz", 3, 3), ("raidz", 6, 3),
         ("raidz2", 4, 4), ("raidz2", 8, 4)],
    )
    def test_valid(self, pool_type, devices, size):
        assert validate_request(pool_type, devices) == size

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "pool_type,devices",
        [("mirror", 1), ("mirror", 3), ("raidz", 2), ("raidz", 4), ("raidz2", 3), ("raidz2", 6), ("stripe", 0),
         ("stripe", -2), ("mirror", 0)],
    )
    def test_group_arithmetic(self, pool_type, devices):
        with pytest.raises(GroupArithmeticError):
            validate_request(pool_type, devices)

    @pytest.mark.unit
    def test_invalid_scheme(self):
        with pytest.raises(InvalidSchemeError, match="invalid pool type 'striped'"):
            validate_request("striped", 1)

    @pytest.mark.unit
    def test_errors_are_configuration_errors(self):
        with pytest.raises(ConfigurationError):
            validate_request("lvm", 1)
        with pytest.raises(ConfigurationError):
            validate_request("mirror", 1)

    @pytest.mark.unit
    def test_non_integer_count(self):
        with pytest.raises(GroupArithmeticError):
            validate_request("stripe", True)
        with pytest.raises(GroupArithmeticError):
            validate_request("stripe", 1.0)


class TestCheckRequest:
    """Tests for check_request function."""

    @pytest.mark.unit
    def test_valid(self):
        assert check_request(PoolRequest("raidz", 6, ("node1", "node2"))) == 3

    @pytest.mark.unit
    def test_empty_nodes(self):
        with pytest.raises(ConfigurationError, match="nodes should not be empty"):
            check_request(PoolRequest("stripe", 1, ()))

    @pytest.mark.unit
    def test_duplicate_nodes(self):
        with pytest.raises(ConfigurationError, match="duplicate nodes"):
            check_request(PoolRequest("mirror", 2, ("node1", "node1")))

    @pytest.mark.unit
    def test_pool_type_checked_first(self):
        with pytest.raises(InvalidSchemeError):
            check_request(PoolRequest("Stripe", 1, ("node1", "node1")))


class TestMakePools:
    """Tests for make_pools function."""

    @pytest.mark.unit
    def test_stripe_three_nodes_two_disks(self, device_map):
        pools = make_pools("stripe", 2, device_map, NODES)

        assert [p.hostname for p in pools] == NODES
        assert _groups(pools[0]) == [["bd-1-n1"], ["bd-2-n1"]]
        assert _groups(pools[2]) == [["bd-1-n3"], ["bd-2-n3"]]
        assert all(p.pool_config.data_raid_group_type == "stripe" for p in pools)

    @pytest.mark.unit
    def test_mirror_three_nodes_two_disks(self, device_map):
        pools = make_pools("mirror", 2, device_map, NODES)

        assert len(pools) == 3
        for i, pool in enumerate(pools, start=1):
            assert _groups(pool) == [[f"bd-1-n{i}", f"bd-2-n{i}"]]

    @pytest.mark.unit
    def test_mirror_two_nodes_four_disks(self):
        bds = [make_bd(f"bd-{d}-n{n}", f"node{n}") for n in (1, 2) for d in range(1, 5)]
        bds += [make_bd("bd-1-n3", "node3"), make_bd("bd-2-n3", "node3")]
        device_map = select_eligible(NODES, bds)

        pools = make_pools("mirror", 4, device_map, ["node1", "node2"])

        assert len(pools) == 2
        assert _groups(pools[0]) == [["bd-1-n1", "bd-2-n1"], ["bd-3-n1", "bd-4-n1"]]
        assert _groups(pools[1]) == [["bd-1-n2", "bd-2-n2"], ["bd-3-n2", "bd-4-n2"]]

    @pytest.mark.unit
    def test_raidz_and_raidz2_groups(self):
        bds = [make_bd(f"bd{i}", "node1") for i in range(8)]
        device_map = select_eligible(["node1"], bds)

        raidz = make_pools("raidz", 6, device_map, ["node1"])
        assert _groups(raidz[0]) == [["bd0", "bd1", "bd2"], ["bd3", "bd4", "bd5"]]

        raidz2 = make_pools("raidz2", 8, device_map, ["node1"])
        assert _groups(raidz2[0]) == [["bd0", "bd1", "bd2", "bd3"], ["bd4", "bd5", "bd6", "bd7"]]

    @pytest.mark.unit
    def test_mirror_one_disk_fails(self, device_map):
        with pytest.raises(GroupArithmeticError):
            make_pools("mirror", 1, device_map, NODES)

    @pytest.mark.unit
    def test_extra_devices_unused(self):
        bds = [make_bd(f"bd{i}", "node1") for i in range(5)]
        pools = make_pools("stripe", 2, select_eligible(["node1"], bds), ["node1"])
        assert _groups(pools[0]) == [["bd0"], ["bd1"]]

    @pytest.mark.unit
    def test_one_short_node_fails_everything(self):
        bds = [make_bd(f"bd{i}-n1", "node1") for i in range(4)] + [make_bd("bd0-n2", "node2")]
        device_map = select_eligible(["node1", "node2"], bds)

        with pytest.raises(InsufficientDevicesError, match="node node2, want 2, found 1"):
            make_pools("mirror", 2, device_map, ["node1", "node2"])

    @pytest.mark.unit
    def test_node_missing_from_map(self, device_map):
        with pytest.raises(InsufficientDevicesError, match="node4"):
            make_pools("stripe", 1, device_map, ["node1", "node4"])

    @pytest.mark.unit
    def test_hosts_used_for_node_selector(self, device_map):
        pools = make_pools("stripe", 1, device_map, ["node1"], ["host-a"])
        assert pools[0].node_selector == {"kubernetes.io/hostname": "host-a"}

    @pytest.mark.unit
    def test_hosts_mismatch(self, device_map):
        with pytest.raises(ValueError, match="one to one"):
            make_pools("stripe", 1, device_map, ["node1", "node2"], ["node1"])

    @pytest.mark.unit
    def test_empty_nodes(self, device_map):
        with pytest.raises(ConfigurationError, match="nodes should not be empty"):
            make_pools("stripe", 1, device_map, [])

    @pytest.mark.unit
    def test_repeated_node_rejected(self, device_map):
        with pytest.raises(ConfigurationError, match=r"duplicate nodes \['node1'\]"):
            make_pools("stripe", 2, device_map, ["node1", "node2", "node1"])


class TestSynthesize:
    """Tests for synthesize function."""

    @pytest.mark.unit
    def test_single_node_single_device_stripe(self):
        device_map = select_eligible(["node1"], [make_bd("bd-1-n1", "node1")])

        result = synthesize("stripe", 1, device_map, ["node1"], "openebs")

        assert result.yaml == SINGLE_STRIPE_YAML
        pools = result.cspc.spec.pools
        assert len(pools) == 1
        assert _groups(pools[0]) == [["bd-1-n1"]]
        assert result.cspc.namespace == "openebs"
        assert result.cspc.pool_type == "stripe"

    @pytest.mark.unit
    def test_three_nodes_two_device_stripe(self, device_map):
        result = synthesize("stripe", 2, device_map, NODES, "openebs")
        assert [len(p.data_raid_groups) for p in result.cspc.spec.pools] == [2, 2, 2]
        assert all(len(g.block_devices) == 1 for p in result.cspc.spec.pools for g in p.data_raid_groups)

    @pytest.mark.unit
    def test_three_nodes_two_device_mirror(self, device_map):
        result = synthesize("mirror", 2, device_map, NODES, "openebs")
        assert [len(p.data_raid_groups) for p in result.cspc.spec.pools] == [1, 1, 1]
        assert all(len(p.data_raid_groups[0].block_devices) == 2 for p in result.cspc.spec.pools)

    @pytest.mark.unit
    def test_mirror_one_device_fails(self, device_map):
        with pytest.raises(GroupArithmeticError):
            synthesize("mirror", 1, device_map, NODES, "openebs")

    @pytest.mark.unit
    @pytest.mark.parametrize("pool_type,devices", [("stripe", 2), ("mirror", 2), ("stripe", 1)])
    def test_yaml_and_struct_agree(self, device_map, pool_type, devices):
        result = synthesize(pool_type, devices, device_map, NODES, "openebs")

        assert from_yaml(result.yaml) == result.cspc
        assert to_yaml(result.cspc) == result.yaml

    @pytest.mark.unit
    def test_generate_name(self, device_map):
        result = synthesize("stripe", 1, device_map, ["node1"], "openebs", generate_name="pool")
        assert result.cspc.metadata.generate_name == "pool"
        assert "generateName: pool\n" in result.yaml
