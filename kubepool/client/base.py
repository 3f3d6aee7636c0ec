"""Base class for resource stores."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from kubepool.generate.models import HOSTNAME_LABEL, BlockDevice, ClusterPoolSpecification
from kubepool.volume.models import JivaVolume, PersistentVolume, PersistentVolumeClaimInfo, PodInfo


@dataclass
class Node:
    """Cluster node.

    Attributes:
        name: Node object name
        labels: Node labels
    """

    name: str
    labels: Dict[str, str] = field(default_factory=dict)

    @property
    def hostname(self) -> str:
        return self.labels.get(HOSTNAME_LABEL) or self.name


class ResourceStore(ABC):
    """Abstract base class for cluster resource stores.

    A resource store is the only place kubepool talks to the cluster. The pool
    generator consumes a snapshot fetched through it and hands the result back
    for submission.
    """

    @abstractmethod
    def get_control_plane_pods(self, cas_type: str) -> List[PodInfo]:
        """Return the control-plane pods of a storage engine, in any namespace.

        Args:
            cas_type: Storage engine, e.g. "cstor" or "jiva"

        Raises:
            ResourceStoreError: API failure
        """

    @abstractmethod
    def get_nodes(self, names: Sequence[str]) -> List[Node]:
        """Return the nodes among `names` that exist in the cluster."""

    @abstractmethod
    def get_block_devices(self, namespace: str, hostnames: Sequence[str]) -> List[BlockDevice]:
        """Return blockdevices in `namespace` whose hostname label is in `hostnames`.

        The returned order is the inventory order and is preserved by callers.
        """

    @abstractmethod
    def create_pool_cluster(self, cspc: ClusterPoolSpecification) -> str:
        """Submit a pool cluster and return the name the cluster assigned to it."""

    @abstractmethod
    def list_persistent_volumes(self) -> List[PersistentVolume]:
        """Return every persistent volume in the cluster."""

    @abstractmethod
    def get_persistent_volume(self, name: str) -> PersistentVolume:
        """Return one persistent volume by name.

        Raises:
            VolumeNotFoundError: No such persistent volume
        """

    @abstractmethod
    def list_jiva_volumes(self) -> Dict[str, JivaVolume]:
        """Return all JivaVolumes keyed by name."""

    @abstractmethod
    def get_jiva_volume(self, name: str) -> Optional[JivaVolume]:
        """Return the JivaVolume named `name`, or None when it does not exist."""

    @abstractmethod
    def get_volume_pods(self, volume: str) -> List[PodInfo]:
        """Return the controller and replica pods of a volume."""

    @abstractmethod
    def get_pvcs(self, namespace: str, label_selector: str) -> List[PersistentVolumeClaimInfo]:
        """Return the PVCs in `namespace` matching `label_selector`."""
