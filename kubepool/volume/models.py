"""
Records for volume listing and description.

The resource store returns these instead of raw Kubernetes objects. The *Row
classes are the fixed columns of the tables printed by `kubepool volume`.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

JIVA_CSI_DRIVER = "jiva.csi.openebs.io"


@dataclass
class PersistentVolume:
    name: str
    capacity: str = ""
    storage_class: str = ""
    phase: str = ""
    access_modes: List[str] = field(default_factory=list)
    csi_driver: Optional[str] = None
    claim_name: Optional[str] = None

    @property
    def is_jiva(self) -> bool:
        return self.csi_driver == JIVA_CSI_DRIVER


@dataclass
class JivaReplicaStatus:
    address: str
    mode: str

    @property
    def ip(self) -> str:
        """Replica IP from an address such as `tcp://10.1.0.7:9502`."""
        host = self.address.split("://", 1)[-1]
        return host.rsplit(":", 1)[0] if ":" in host else host


@dataclass
class JivaVolume:
    name: str
    namespace: str
    node_id: str = ""
    status: str = ""
    version: str = ""
    replication_factor: Optional[int] = None
    policy: str = ""
    iqn: str = ""
    target_ip: str = ""
    target_port: str = ""
    replica_statuses: List[JivaReplicaStatus] = field(default_factory=list)

    @classmethod
    def from_resource(cls, obj: Dict[str, Any]) -> "JivaVolume":
        """Build from a `jivavolumes.openebs.io` custom object."""
        metadata = obj.get("metadata") or {}
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}
        iscsi = spec.get("iscsiSpec") or {}
        target = (spec.get("policy") or {}).get("target") or {}
        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            node_id=(metadata.get("labels") or {}).get("nodeID", ""),
            status=status.get("status", ""),
            version=((obj.get("versionDetails") or {}).get("status") or {}).get("current", ""),
            replication_factor=target.get("replicationFactor"),
            policy=(metadata.get("annotations") or {}).get("openebs.io/volume-policy", ""),
            iqn=iscsi.get("iqn", ""),
            target_ip=iscsi.get("targetIP", ""),
            target_port=str(iscsi.get("targetPort", "")),
            replica_statuses=[
                JivaReplicaStatus(address=r.get("address", ""), mode=r.get("mode", ""))
                for r in status.get("replicaStatus") or []
            ],
        )


@dataclass
class PodInfo:
    name: str
    namespace: str
    node_name: str = ""
    phase: str = ""
    pod_ip: str = ""
    ready_containers: int = 0
    total_containers: int = 0
    created: Optional[datetime] = None

    @property
    def ready(self) -> bool:
        return self.phase == "Running" and self.total_containers > 0 and self.ready_containers == self.total_containers


@dataclass
class PersistentVolumeClaimInfo:
    name: str
    namespace: str
    phase: str = ""
    volume_name: str = ""
    capacity: str = ""
    storage_class: str = ""
    volume_mode: str = ""
    created: Optional[datetime] = None


@dataclass
class JivaVolumeRow:
    namespace: str
    name: str
    status: str
    version: str
    capacity: str
    storage_class: str
    attached: str
    access_mode: str
    attached_node: str


@dataclass
class JivaPodRow:
    namespace: str
    name: str
    mode: str
    node: str
    status: str
    ip: str
    ready: str
    age: str


@dataclass
class JivaReplicaRow:
    name: str
    status: str
    volume: str
    capacity: str
    storage_class: str
    age: str
    volume_mode: str
