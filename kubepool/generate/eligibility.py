"""
Blockdevice eligibility filter.
"""

import logging
from typing import Dict, Iterable, List

from kubepool.exceptions import NoEligibleDeviceError
from kubepool.generate.models import BlockDevice

logger = logging.getLogger(__name__)

NodeDeviceMap = Dict[str, List[BlockDevice]]


def is_eligible(bd: BlockDevice) -> bool:
    """A device can join a pool only if it is active, unclaimed and has no filesystem."""
    return bd.is_active and not bd.is_claimed and not bd.is_formatted


def select_eligible(nodes: Iterable[str], inventory: Iterable[BlockDevice]) -> NodeDeviceMap:
    """
    Group the eligible blockdevices of the requested nodes by node name.

    Node keys appear in the order their first device was seen and each node's
    list keeps the inventory order, so callers get a stable, discovery-ordered
    assignment. Capacity is not considered here.

    Args:
        nodes: Candidate node names
        inventory: Blockdevices visible in the cluster

    Returns:
        Mapping of node name to its eligible blockdevices

    Raises:
        NoEligibleDeviceError: If no requested node has any eligible device
    """
    wanted = list(nodes)
    node_set = set(wanted)
    node_to_bd: NodeDeviceMap = {}

    for bd in inventory:
        if bd.node_name not in node_set:
            continue
        if not is_eligible(bd):
            logger.debug(
                "Skipping blockdevice %s on %s (state=%s, claimState=%s, fsType=%r)",
                bd.name, bd.node_name, bd.state, bd.claim_state, bd.fs_type,
            )
            continue
        node_to_bd.setdefault(bd.node_name, []).append(bd)

    if not node_to_bd:
        raise NoEligibleDeviceError(nodes=wanted)

    logger.debug("Eligible blockdevices per node: %s", {n: len(b) for n, b in node_to_bd.items()})
    return node_to_bd
