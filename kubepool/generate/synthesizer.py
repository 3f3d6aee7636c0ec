"""
Pool topology synthesizer.

Turns the per-node eligible blockdevices into a CStorPoolCluster: every
requested node gets one pool whose first N devices are cut into consecutive
redundancy groups of the scheme's size.
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from kubepool.exceptions import (
    ConfigurationError,
    GroupArithmeticError,
    InsufficientDevicesError,
    InvalidSchemeError,
)
from kubepool.generate.models import (
    HOSTNAME_LABEL,
    BlockDevice,
    BlockDeviceRef,
    ClusterPoolSpecification,
    CStorPoolClusterSpec,
    ObjectMeta,
    PoolConfig,
    PoolRequest,
    PoolSpec,
    RaidGroup,
)
from kubepool.generate.pooltypes import group_size, is_pool_type_valid
from kubepool.generate.serializer import to_yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesisResult:
    """Structured pool cluster and its YAML text; two views of one result."""

    cspc: ClusterPoolSpecification
    yaml: str


def validate_request(pool_type: str, devices_per_pool: int) -> int:
    """
    Check the pool type and device count, returning the redundancy group size.

    Raises:
        InvalidSchemeError: If the pool type is not recognized
        GroupArithmeticError: If the device count is not a positive multiple of the group size
    """
    if not is_pool_type_valid(pool_type):
        raise InvalidSchemeError(pool_type=pool_type)
    size = group_size(pool_type)
    if (
        isinstance(devices_per_pool, bool)
        or not isinstance(devices_per_pool, int)
        or devices_per_pool <= 0
        or devices_per_pool % size != 0
    ):
        raise GroupArithmeticError(pool_type=pool_type, group_size=size, devices=devices_per_pool)
    return size


def check_request(request: PoolRequest) -> int:
    """
    Validate a whole pool request, returning the redundancy group size.

    Every node may appear once; a repeated node would claim its blockdevices twice.

    Raises:
        ConfigurationError: If nodes are empty or repeated
        InvalidSchemeError, GroupArithmeticError: See validate_request
    """
    size = validate_request(request.pool_type, request.devices_per_pool)
    if not request.nodes:
        raise ConfigurationError(details="nodes should not be empty")
    duplicates = sorted({n for n in request.nodes if request.nodes.count(n) > 1})
    if duplicates:
        raise ConfigurationError(details=f"duplicate nodes {duplicates}")
    return size


def _raid_groups(devices: Sequence[BlockDevice], size: int) -> List[RaidGroup]:
    return [
        RaidGroup(block_devices=[BlockDeviceRef(block_device_name=bd.name) for bd in devices[i:i + size]])
        for i in range(0, len(devices), size)
    ]


def make_pools(
    pool_type: str,
    devices_per_pool: int,
    device_map: Mapping[str, Sequence[BlockDevice]],
    nodes: Sequence[str],
    hosts: Optional[Sequence[str]] = None,
) -> List[PoolSpec]:
    """
    Build one PoolSpec per node.

    Args:
        pool_type: stripe, mirror, raidz or raidz2
        devices_per_pool: Devices to use on every node
        device_map: Eligible blockdevices per node name, in discovery order
        nodes: Node names, one pool each
        hosts: Hostname labels matching `nodes` for the node selector (defaults to `nodes`)

    Returns:
        List of PoolSpec in `nodes` order

    Raises:
        ConfigurationError, InvalidSchemeError, GroupArithmeticError, InsufficientDevicesError
    """
    size = check_request(PoolRequest(pool_type, devices_per_pool, tuple(nodes)))
    if hosts is None:
        hosts = nodes
    if len(hosts) != len(nodes):
        raise ValueError("hosts must match nodes one to one")

    pools: List[PoolSpec] = []
    for node, host in zip(nodes, hosts):
        available = device_map.get(node) or []
        if len(available) < devices_per_pool:
            raise InsufficientDevicesError(node=node, wanted=devices_per_pool, found=len(available))
        # extra devices on the node stay unused
        selected = list(available[:devices_per_pool])
        pools.append(
            PoolSpec(
                node_selector={HOSTNAME_LABEL: host},
                data_raid_groups=_raid_groups(selected, size),
                pool_config=PoolConfig(data_raid_group_type=pool_type),
            )
        )
        logger.debug("Node %s: %s pool on %s", node, pool_type, [bd.name for bd in selected])
    return pools


def synthesize(
    pool_type: str,
    devices_per_pool: int,
    device_map: Mapping[str, Sequence[BlockDevice]],
    nodes: Sequence[str],
    namespace: str,
    hosts: Optional[Sequence[str]] = None,
    generate_name: str = "cstor",
) -> SynthesisResult:
    """
    Synthesize a CStorPoolCluster for the given nodes.

    All or nothing: if any node cannot satisfy the request no specification is
    returned.

    Args:
        pool_type: stripe, mirror, raidz or raidz2
        devices_per_pool: Devices to use on every node
        device_map: Eligible blockdevices per node name
        nodes: Node names
        namespace: Namespace the pool cluster belongs to
        hosts: Hostname labels for the node selectors (defaults to `nodes`)
        generate_name: metadata.generateName of the pool cluster

    Returns:
        SynthesisResult holding the specification and its YAML
    """
    pools = make_pools(pool_type, devices_per_pool, device_map, nodes, hosts)
    cspc = ClusterPoolSpecification(
        metadata=ObjectMeta(namespace=namespace, generate_name=generate_name),
        spec=CStorPoolClusterSpec(pools=pools),
    )
    return SynthesisResult(cspc=cspc, yaml=to_yaml(cspc))
