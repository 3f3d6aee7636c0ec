"""
Jiva volume listing and description.
"""

import logging
from typing import Dict, List, Optional, Sequence

from kubepool.cli.lib.printer import render_table, render_template
from kubepool.cli.lib.units import age, to_ibytes
from kubepool.client.base import ResourceStore
from kubepool.exceptions import VolumeNotFoundError
from kubepool.volume.models import (
    JivaPodRow,
    JivaReplicaRow,
    JivaVolume,
    JivaVolumeRow,
    PersistentVolume,
)

logger = logging.getLogger(__name__)

JIVA_VOLUME_INFO_TEMPLATE = """
{{ name }} Details :
-----------------
NAME            : {{ name }}
ACCESS MODE     : {{ access_mode }}
CSI DRIVER      : {{ csi_driver }}
STORAGE CLASS   : {{ storage_class }}
VOLUME PHASE    : {{ phase }}
VERSION         : {{ version }}
JVP             : {{ policy }}
SIZE            : {{ size }}
STATUS          : {{ status }}
REPLICA COUNT   : {{ replica_count }}
"""

JIVA_PORTAL_TEMPLATE = """
Portal Details :
------------------
IQN              :  {{ jv.iqn }}
VOLUME NAME      :  {{ jv.name }}
TARGET NODE NAME :  {{ jv.node_id }}
PORTAL           :  {{ jv.target_ip }}:{{ jv.target_port }}
"""

VOLUME_LIST_HEADERS = [
    "Namespace", "Name", "Status", "Version", "Capacity", "StorageClass", "Attached", "Access Mode", "Attached Node",
]
POD_HEADERS = ["Namespace", "Name", "Mode", "Node", "Status", "IP", "Ready", "Age"]
REPLICA_PVC_HEADERS = ["Name", "Status", "Volume", "Capacity", "StorageClass", "Age", "VolumeMode"]


def get_jiva_rows(
    store: ResourceStore, pvs: Sequence[PersistentVolume], openebs_ns: Optional[str] = None
) -> List[JivaVolumeRow]:
    """
    Build the `volume list` rows for Jiva persistent volumes.

    Args:
        store: Resource store
        pvs: Persistent volumes to consider; non-Jiva volumes are skipped
        openebs_ns: Only show volumes whose JivaVolume lives in this namespace

    Returns:
        One row per Jiva volume
    """
    jv_map: Dict[str, JivaVolume] = store.list_jiva_volumes()
    rows: List[JivaVolumeRow] = []
    for pv in pvs:
        if not pv.is_jiva:
            continue
        jv = jv_map.get(pv.name)
        if jv is None:
            logger.warning("couldn't find JivaVolume %s", pv.name)
            jv = JivaVolume(name=pv.name, namespace="")
        if openebs_ns and openebs_ns != jv.namespace:
            continue
        rows.append(
            JivaVolumeRow(
                namespace=jv.namespace,
                name=pv.name,
                status=jv.status,
                version=jv.version,
                capacity=to_ibytes(pv.capacity),
                storage_class=pv.storage_class,
                attached=pv.phase,
                access_mode=pv.access_modes[0] if pv.access_modes else "",
                attached_node=jv.node_id,
            )
        )
    return rows


def _pod_rows(store: ResourceStore, jv: JivaVolume) -> List[JivaPodRow]:
    mode_by_ip = {r.ip: r.mode for r in jv.replica_statuses}
    rows: List[JivaPodRow] = []
    for pod in store.get_volume_pods(jv.name):
        if "-ctrl-" in pod.name:
            mode = jv.status
        elif pod.pod_ip in mode_by_ip:
            mode = mode_by_ip[pod.pod_ip]
        else:
            continue
        rows.append(
            JivaPodRow(
                namespace=pod.namespace,
                name=pod.name,
                mode=mode,
                node=pod.node_name,
                status=pod.phase,
                ip=pod.pod_ip,
                ready=f"{pod.ready_containers}/{pod.total_containers}",
                age=age(pod.created),
            )
        )
    return rows


def describe_jiva_volume(store: ResourceStore, pv: PersistentVolume) -> str:
    """
    Describe a Jiva persistent volume.

    Returns:
        Volume details, iSCSI portal, controller/replica pods and replica PVCs

    Raises:
        VolumeNotFoundError: If the volume is not a Jiva volume or has no JivaVolume
    """
    if not pv.is_jiva:
        raise VolumeNotFoundError(message=f"{pv.name} is not a Jiva volume")
    jv = store.get_jiva_volume(pv.name)
    if jv is None:
        raise VolumeNotFoundError(message=f"failed to get JivaVolume for {pv.name}")

    sections = [
        render_template(
            JIVA_VOLUME_INFO_TEMPLATE,
            name=jv.name,
            access_mode=", ".join(pv.access_modes),
            csi_driver=pv.csi_driver,
            storage_class=pv.storage_class,
            phase=pv.phase,
            version=jv.version,
            policy=jv.policy,
            size=to_ibytes(pv.capacity),
            status=jv.status,
            replica_count="" if jv.replication_factor is None else jv.replication_factor,
        ),
        render_template(JIVA_PORTAL_TEMPLATE, jv=jv),
        "",
        "Controller and Replica Pod Details :",
        "-----------------------------------",
    ]

    pod_rows = _pod_rows(store, jv)
    if pod_rows:
        sections.append(render_table(POD_HEADERS, pod_rows))
    else:
        sections.append("No Controller and Replica pod exists for the JivaVolume")

    selector = f"openebs.io/component=jiva-replica,openebs.io/persistent-volume={jv.name}"
    pvcs = store.get_pvcs(jv.namespace, selector)
    sections.extend(["", "Replica Data Volume Details :", "-----------------------------"])
    if pvcs:
        rows = [
            JivaReplicaRow(
                name=pvc.name,
                status=pvc.phase,
                volume=pvc.volume_name,
                capacity=to_ibytes(pvc.capacity),
                storage_class=pvc.storage_class,
                age=age(pvc.created),
                volume_mode=pvc.volume_mode,
            )
            for pvc in pvcs
        ]
        sections.append(render_table(REPLICA_PVC_HEADERS, rows))
    else:
        sections.append(f"No replicas found for the JivaVolume {jv.name}")

    return "\n".join(sections)
