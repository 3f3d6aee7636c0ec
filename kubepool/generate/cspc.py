"""
CStorPoolCluster generation against a live cluster.

Fetches the inventory snapshot from a resource store, then runs the
eligibility filter and the pool synthesizer over it.
"""

import logging
from typing import Optional, Sequence

from kubepool.client.base import ResourceStore
from kubepool.exceptions import (
    NodeNotFoundError,
    NoEligibleDeviceError,
    StorageEngineNotFoundError,
)
from kubepool.generate.eligibility import select_eligible
from kubepool.generate.models import PoolRequest
from kubepool.generate.synthesizer import SynthesisResult, check_request, synthesize

logger = logging.getLogger(__name__)


def resolve_namespace(store: ResourceStore, cas_type: str, placeholder: Optional[str] = None) -> str:
    """
    Find the namespace the storage engine is installed in.

    The namespace always comes from the engine's control-plane pod; a
    namespace passed by the caller is ignored.

    Raises:
        StorageEngineNotFoundError: If no control-plane pod exists
    """
    pods = store.get_control_plane_pods(cas_type)
    if not pods:
        raise StorageEngineNotFoundError(cas_type=cas_type)
    pod = pods[0]
    if placeholder and placeholder != pod.namespace:
        logger.debug("Ignoring namespace %s, %s is installed in %s", placeholder, cas_type, pod.namespace)
    if not any(p.ready for p in pods):
        logger.warning("%s control plane pod %s/%s is not ready", cas_type, pod.namespace, pod.name)
    return pod.namespace


def generate_cspc(
    store: ResourceStore,
    nodes: Sequence[str],
    devices: int,
    pool_type: str,
    namespace: Optional[str] = None,
    cas_type: str = "cstor",
    generate_name: str = "cstor",
) -> SynthesisResult:
    """
    Generate a CStorPoolCluster for the given nodes.

    Args:
        store: Resource store to read the cluster state from
        nodes: Node names, one pool each
        devices: Blockdevices per pool
        pool_type: stripe, mirror, raidz or raidz2
        namespace: Caller's namespace, replaced by the storage engine's namespace
        cas_type: Storage engine whose namespace holds the blockdevices
        generate_name: metadata.generateName of the pool cluster

    Returns:
        SynthesisResult with the specification and its YAML

    Raises:
        ConfigurationError: Empty or repeated nodes, invalid pool type or device count
        EligibilityError: Storage engine, nodes or eligible devices missing
        InsufficientDevicesError: A node lacks enough eligible devices
        ResourceStoreError: Kubernetes API failure
    """
    nodes = list(nodes)
    check_request(PoolRequest(pool_type, devices, tuple(nodes)))

    ns = resolve_namespace(store, cas_type, namespace)

    found = {n.name: n for n in store.get_nodes(nodes)}
    missing = [n for n in nodes if n not in found]
    if missing:
        raise NodeNotFoundError(missing=missing)
    hostnames = [found[n].hostname for n in nodes]

    bds = store.get_block_devices(ns, hostnames)
    if not bds:
        raise NoEligibleDeviceError(nodes=nodes)
    logger.debug("Found %d blockdevices in %s", len(bds), ns)

    device_map = select_eligible(nodes, bds)
    return synthesize(
        pool_type, devices, device_map, nodes, ns, hosts=hostnames, generate_name=generate_name
    )
