"""
Kubernetes-backed resource store.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from kubepool.client.base import Node, ResourceStore
from kubepool.exceptions import ResourceStoreError, VolumeNotFoundError
from kubepool.generate.models import HOSTNAME_LABEL, BlockDevice, ClusterPoolSpecification
from kubepool.generate.serializer import to_dict
from kubepool.volume.models import JivaVolume, PersistentVolume, PersistentVolumeClaimInfo, PodInfo

logger = logging.getLogger(__name__)

OPENEBS_GROUP = "openebs.io"
OPENEBS_VERSION = "v1alpha1"
CSTOR_GROUP = "cstor.openebs.io"
CSTOR_VERSION = "v1"

# Label selecting the CSI controller pod of each storage engine.
CONTROL_PLANE_SELECTORS = {
    "cstor": "openebs.io/component-name=openebs-cstor-csi-controller",
    "jiva": "openebs.io/component-name=openebs-jiva-csi-controller",
}


def _pod_from_k8s(pod: Any) -> PodInfo:
    statuses = pod.status.container_statuses or []
    return PodInfo(
        name=pod.metadata.name,
        namespace=pod.metadata.namespace,
        node_name=pod.spec.node_name or "",
        phase=pod.status.phase or "",
        pod_ip=pod.status.pod_ip or "",
        ready_containers=sum(1 for s in statuses if s.ready),
        total_containers=len(statuses),
        created=pod.metadata.creation_timestamp,
    )


def _pv_from_k8s(pv: Any) -> PersistentVolume:
    capacity = (pv.spec.capacity or {}).get("storage", "")
    return PersistentVolume(
        name=pv.metadata.name,
        capacity=str(capacity),
        storage_class=pv.spec.storage_class_name or "",
        phase=pv.status.phase or "",
        access_modes=list(pv.spec.access_modes or []),
        csi_driver=pv.spec.csi.driver if pv.spec.csi else None,
        claim_name=pv.spec.claim_ref.name if pv.spec.claim_ref else None,
    )


def _pvc_from_k8s(pvc: Any) -> PersistentVolumeClaimInfo:
    requests = (pvc.spec.resources.requests or {}) if pvc.spec.resources else {}
    return PersistentVolumeClaimInfo(
        name=pvc.metadata.name,
        namespace=pvc.metadata.namespace,
        phase=pvc.status.phase or "",
        volume_name=pvc.spec.volume_name or "",
        capacity=str(requests.get("storage", "")),
        storage_class=pvc.spec.storage_class_name or "",
        volume_mode=pvc.spec.volume_mode or "",
        created=pvc.metadata.creation_timestamp,
    )


class KubeClient(ResourceStore):
    """Resource store over the Kubernetes API."""

    def __init__(
        self,
        core_api: Optional[client.CoreV1Api] = None,
        custom_api: Optional[client.CustomObjectsApi] = None,
        kubeconfig: Optional[str] = None,
        context: Optional[str] = None,
    ):
        if core_api is None or custom_api is None:
            self._load_config(kubeconfig, context)
        self.core_api = core_api or client.CoreV1Api()
        self.custom_api = custom_api or client.CustomObjectsApi()

    @staticmethod
    def _load_config(kubeconfig: Optional[str], context: Optional[str]) -> None:
        if kubeconfig or context:
            config.load_kube_config(config_file=kubeconfig, context=context)
            return
        try:
            config.load_incluster_config()
        except config.ConfigException:
            config.load_kube_config()

    def get_control_plane_pods(self, cas_type: str) -> List[PodInfo]:
        selector = CONTROL_PLANE_SELECTORS.get(cas_type)
        if selector is None:
            raise ValueError(f"Unknown storage engine: {cas_type}")
        try:
            pods = self.core_api.list_pod_for_all_namespaces(label_selector=selector)
        except ApiException as e:
            raise ResourceStoreError(details=f"failed to list {cas_type} control plane pods: {e.reason}")
        return [_pod_from_k8s(p) for p in pods.items]

    def get_nodes(self, names: Sequence[str]) -> List[Node]:
        wanted = set(names)
        try:
            nodes = self.core_api.list_node()
        except ApiException as e:
            raise ResourceStoreError(details=f"unable to fetch nodes: {e.reason}")
        return [
            Node(name=n.metadata.name, labels=dict(n.metadata.labels or {}))
            for n in nodes.items
            if n.metadata.name in wanted
        ]

    def get_block_devices(self, namespace: str, hostnames: Sequence[str]) -> List[BlockDevice]:
        selector = f"{HOSTNAME_LABEL} in ({','.join(hostnames)})"
        try:
            result = self.custom_api.list_namespaced_custom_object(
                group=OPENEBS_GROUP,
                version=OPENEBS_VERSION,
                namespace=namespace,
                plural="blockdevices",
                label_selector=selector,
            )
        except ApiException as e:
            raise ResourceStoreError(details=f"failed to list blockdevices: {e.reason}")
        return [BlockDevice.from_resource(item) for item in result.get("items", [])]

    def create_pool_cluster(self, cspc: ClusterPoolSpecification) -> str:
        try:
            created = self.custom_api.create_namespaced_custom_object(
                group=CSTOR_GROUP,
                version=CSTOR_VERSION,
                namespace=cspc.namespace,
                plural="cstorpoolclusters",
                body=to_dict(cspc),
            )
        except ApiException as e:
            raise ResourceStoreError(details=f"failed to create CStorPoolCluster: {e.reason}")
        name = (created.get("metadata") or {}).get("name", "")
        logger.info("Created CStorPoolCluster %s/%s", cspc.namespace, name)
        return name

    def list_persistent_volumes(self) -> List[PersistentVolume]:
        try:
            pvs = self.core_api.list_persistent_volume()
        except ApiException as e:
            raise ResourceStoreError(details=f"failed to list persistent volumes: {e.reason}")
        return [_pv_from_k8s(pv) for pv in pvs.items]

    def get_persistent_volume(self, name: str) -> PersistentVolume:
        try:
            pv = self.core_api.read_persistent_volume(name)
        except ApiException as e:
            if e.status == 404:
                raise VolumeNotFoundError(name=name)
            raise ResourceStoreError(details=f"failed to get persistent volume {name}: {e.reason}")
        return _pv_from_k8s(pv)

    def _list_jiva_objects(self) -> List[Dict[str, Any]]:
        try:
            result = self.custom_api.list_cluster_custom_object(
                group=OPENEBS_GROUP, version=OPENEBS_VERSION, plural="jivavolumes"
            )
        except ApiException as e:
            raise ResourceStoreError(details=f"failed to list JivaVolumes: {e.reason}")
        return result.get("items", [])

    def list_jiva_volumes(self) -> Dict[str, JivaVolume]:
        volumes = [JivaVolume.from_resource(item) for item in self._list_jiva_objects()]
        return {jv.name: jv for jv in volumes}

    def get_jiva_volume(self, name: str) -> Optional[JivaVolume]:
        # JivaVolumes live in the jiva namespace, which is not known up front
        return self.list_jiva_volumes().get(name)

    def get_volume_pods(self, volume: str) -> List[PodInfo]:
        try:
            pods = self.core_api.list_pod_for_all_namespaces(
                label_selector=f"openebs.io/persistent-volume={volume}"
            )
        except ApiException as e:
            raise ResourceStoreError(details=f"failed to list pods of {volume}: {e.reason}")
        return [_pod_from_k8s(p) for p in pods.items]

    def get_pvcs(self, namespace: str, label_selector: str) -> List[PersistentVolumeClaimInfo]:
        try:
            pvcs = self.core_api.list_namespaced_persistent_volume_claim(namespace, label_selector=label_selector)
        except ApiException as e:
            raise ResourceStoreError(details=f"failed to list PVCs in {namespace}: {e.reason}")
        return [_pvc_from_k8s(p) for p in pvcs.items]
