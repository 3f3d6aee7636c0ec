"""
Unit tests for pool cluster YAML rendering.
"""

import pytest

from kubepool.generate.models import (
    BlockDeviceRef,
    ClusterPoolSpecification,
    CStorPoolClusterSpec,
    ObjectMeta,
    PoolConfig,
    PoolSpec,
    RaidGroup,
)
from kubepool.generate.serializer import from_yaml, to_dict, to_yaml


@pytest.fixture
def cspc():
    return ClusterPoolSpecification(
        metadata=ObjectMeta(namespace="openebs"),
        spec=CStorPoolClusterSpec(
            pools=[
                PoolSpec(
                    node_selector={"kubernetes.io/hostname": "node1"},
                    data_raid_groups=[
                        RaidGroup(
                            block_devices=[
                                BlockDeviceRef(block_device_name="bd-1"),
                                BlockDeviceRef(block_device_name="bd-2"),
                            ]
                        )
                    ],
                    pool_config=PoolConfig(data_raid_group_type="mirror"),
                )
            ]
        ),
    )


@pytest.mark.unit
def test_to_dict_uses_api_field_names(cspc):
    data = to_dict(cspc)

    assert data["apiVersion"] == "cstor.openebs.io/v1"
    assert data["kind"] == "CStorPoolCluster"
    assert data["metadata"] == {"namespace": "openebs", "generateName": "cstor"}
    pool = data["spec"]["pools"][0]
    assert pool["poolConfig"] == {"dataRaidGroupType": "mirror"}
    assert pool["dataRaidGroups"][0]["blockDevices"][1] == {"blockDeviceName": "bd-2"}


@pytest.mark.unit
def test_yaml_key_order(cspc):
    lines = to_yaml(cspc).splitlines()
    assert lines[:4] == ["apiVersion: cstor.openebs.io/v1", "kind: CStorPoolCluster", "metadata:", "  namespace: openebs"]


@pytest.mark.unit
def test_from_yaml(cspc):
    assert from_yaml(to_yaml(cspc)) == cspc


@pytest.mark.unit
def test_from_yaml_rejects_unknown_pool_type(cspc):
    text = to_yaml(cspc).replace("dataRaidGroupType: mirror", "dataRaidGroupType: raid-z")
    with pytest.raises(ValueError):
        from_yaml(text)


@pytest.mark.unit
def test_from_yaml_rejects_non_mapping():
    with pytest.raises(ValueError, match="must be a mapping"):
        from_yaml("- a\n- b\n")


@pytest.mark.unit
def test_from_yaml_rejects_invalid_yaml():
    with pytest.raises(ValueError, match="Invalid YAML"):
        from_yaml("spec: [unclosed")
