"""
Models for cStor pool cluster generation.

BlockDevice and PoolRequest are plain value objects. The CStorPoolCluster
hierarchy is modelled with pydantic so the structured result and its YAML text
share one schema; field aliases carry the Kubernetes camelCase keys.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubepool.generate.pooltypes import is_pool_type_valid

HOSTNAME_LABEL = "kubernetes.io/hostname"
CSPC_API_VERSION = "cstor.openebs.io/v1"
CSPC_KIND = "CStorPoolCluster"


@dataclass(frozen=True)
class BlockDevice:
    """A raw blockdevice as reported by the node disk manager."""

    name: str
    node_name: str
    hostname: str = ""
    capacity: int = 0
    claim_state: str = "Unclaimed"
    state: str = "Active"
    fs_type: str = ""

    @property
    def is_active(self) -> bool:
        return self.state == "Active"

    @property
    def is_claimed(self) -> bool:
        return self.claim_state != "Unclaimed"

    @property
    def is_formatted(self) -> bool:
        return bool(self.fs_type)

    @classmethod
    def from_resource(cls, obj: Dict[str, Any]) -> "BlockDevice":
        """
        Build a BlockDevice from a `blockdevices.openebs.io` custom object.

        Args:
            obj: Custom object as returned by the Kubernetes API

        Returns:
            BlockDevice
        """
        metadata = obj.get("metadata") or {}
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}
        labels = metadata.get("labels") or {}
        node_name = (spec.get("nodeAttributes") or {}).get("nodeName", "")
        return cls(
            name=metadata.get("name", ""),
            node_name=node_name,
            hostname=labels.get(HOSTNAME_LABEL, node_name),
            capacity=int((spec.get("capacity") or {}).get("storage") or 0),
            claim_state=status.get("claimState", ""),
            state=status.get("state", ""),
            fs_type=(spec.get("filesystem") or {}).get("fsType") or "",
        )


@dataclass(frozen=True)
class PoolRequest:
    """What the operator asked for."""

    pool_type: str
    devices_per_pool: int
    nodes: Tuple[str, ...]


class _CSPCModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")


class BlockDeviceRef(_CSPCModel):
    """Reference to a blockdevice inside a raid group."""

    block_device_name: str = Field(..., alias="blockDeviceName", min_length=1)


class RaidGroup(_CSPCModel):
    """Devices forming one fault-tolerance unit, all from the same node."""

    block_devices: List[BlockDeviceRef] = Field(..., alias="blockDevices", min_length=1)

    @property
    def names(self) -> List[str]:
        return [bd.block_device_name for bd in self.block_devices]


class PoolConfig(_CSPCModel):
    data_raid_group_type: str = Field(..., alias="dataRaidGroupType")

    @field_validator("data_raid_group_type")
    def validate_pool_type(cls, v: str) -> str:
        if not is_pool_type_valid(v):
            raise ValueError(f"Invalid pool type: {v}")
        return v


class PoolSpec(_CSPCModel):
    """Pool layout for a single node."""

    node_selector: Dict[str, str] = Field(..., alias="nodeSelector")
    data_raid_groups: List[RaidGroup] = Field(..., alias="dataRaidGroups", min_length=1)
    pool_config: PoolConfig = Field(..., alias="poolConfig")

    @property
    def hostname(self) -> Optional[str]:
        return self.node_selector.get(HOSTNAME_LABEL)


class ObjectMeta(_CSPCModel):
    namespace: str
    generate_name: str = Field("cstor", alias="generateName")


class CStorPoolClusterSpec(_CSPCModel):
    pools: List[PoolSpec] = Field(..., min_length=1)


class ClusterPoolSpecification(_CSPCModel):
    """A complete CStorPoolCluster, one pool per selected node."""

    api_version: str = Field(CSPC_API_VERSION, alias="apiVersion")
    kind: str = CSPC_KIND
    metadata: ObjectMeta
    spec: CStorPoolClusterSpec

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def pool_type(self) -> str:
        return self.spec.pools[0].pool_config.data_raid_group_type
