"""
Pytest configuration and fixtures.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

from kubepool.client.base import Node, ResourceStore
from kubepool.exceptions import VolumeNotFoundError
from kubepool.generate.models import BlockDevice, ClusterPoolSpecification
from kubepool.volume.models import JivaVolume, PersistentVolume, PersistentVolumeClaimInfo, PodInfo


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external collaborators")
    config.addinivalue_line("markers", "integration: CLI level tests")


def make_bd(name, node, capacity=10737418240, claim_state="Unclaimed", state="Active", fs_type=""):
    """Blockdevice record as the node disk manager would report it."""
    return BlockDevice(
        name=name,
        node_name=node,
        hostname=node,
        capacity=capacity,
        claim_state=claim_state,
        state=state,
        fs_type=fs_type,
    )


class FakeStore(ResourceStore):
    """In-memory resource store."""

    def __init__(
        self,
        control_plane: Optional[List[PodInfo]] = None,
        nodes: Optional[List[Node]] = None,
        block_devices: Optional[List[BlockDevice]] = None,
        pvs: Optional[List[PersistentVolume]] = None,
        jiva_volumes: Optional[List[JivaVolume]] = None,
        pods: Optional[List[PodInfo]] = None,
        pvcs: Optional[List[PersistentVolumeClaimInfo]] = None,
    ):
        self.control_plane = control_plane or []
        self.nodes = nodes or []
        self.block_devices = block_devices or []
        self.pvs = pvs or []
        self.jiva_volumes = jiva_volumes or []
        self.pods = pods or []
        self.pvcs = pvcs or []
        self.created: List[ClusterPoolSpecification] = []
        self.bd_queries: List[tuple] = []

    def get_control_plane_pods(self, cas_type: str) -> List[PodInfo]:
        return list(self.control_plane)

    def get_nodes(self, names: Sequence[str]) -> List[Node]:
        return [n for n in self.nodes if n.name in names]

    def get_block_devices(self, namespace: str, hostnames: Sequence[str]) -> List[BlockDevice]:
        self.bd_queries.append((namespace, tuple(hostnames)))
        return [bd for bd in self.block_devices if bd.hostname in hostnames]

    def create_pool_cluster(self, cspc: ClusterPoolSpecification) -> str:
        self.created.append(cspc)
        return f"{cspc.metadata.generate_name}-abcde"

    def list_persistent_volumes(self) -> List[PersistentVolume]:
        return list(self.pvs)

    def get_persistent_volume(self, name: str) -> PersistentVolume:
        for pv in self.pvs:
            if pv.name == name:
                return pv
        raise VolumeNotFoundError(name=name)

    def list_jiva_volumes(self) -> Dict[str, JivaVolume]:
        return {jv.name: jv for jv in self.jiva_volumes}

    def get_jiva_volume(self, name: str) -> Optional[JivaVolume]:
        return self.list_jiva_volumes().get(name)

    def get_volume_pods(self, volume: str) -> List[PodInfo]:
        return list(self.pods)

    def get_pvcs(self, namespace: str, label_selector: str) -> List[PersistentVolumeClaimInfo]:
        return [p for p in self.pvcs if p.namespace == namespace]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def cstor_pod():
    return PodInfo(
        name="openebs-cstor-csi-controller-0",
        namespace="openebs",
        node_name="node1",
        phase="Running",
        ready_containers=6,
        total_containers=6,
    )


@pytest.fixture
def three_nodes():
    return [Node(name=n, labels={"kubernetes.io/hostname": n}) for n in ("node1", "node2", "node3")]


@pytest.fixture
def good_bds():
    """Two eligible blockdevices on each of node1..node3, interleaved by node."""
    return [
        make_bd("bd-1-n1", "node1"),
        make_bd("bd-1-n2", "node2"),
        make_bd("bd-1-n3", "node3"),
        make_bd("bd-2-n1", "node1"),
        make_bd("bd-2-n2", "node2"),
        make_bd("bd-2-n3", "node3"),
    ]


@pytest.fixture
def fake_store(cstor_pod, three_nodes, good_bds):
    return FakeStore(control_plane=[cstor_pod], nodes=three_nodes, block_devices=good_bds)
