"""
Resource store construction for CLI commands.
"""

from typing import Any, Dict

import typer

from kubepool.cli.lib.config import KubepoolConfig, load_config
from kubepool.client.base import ResourceStore
from kubepool.client.kube import KubeClient


def get_config(ctx: typer.Context) -> KubepoolConfig:
    obj: Dict[str, Any] = ctx.obj or {}
    return obj.get("config") or load_config()


def get_store(ctx: typer.Context) -> ResourceStore:
    """
    Build the Kubernetes resource store, command line flags taking precedence over config.
    """
    obj: Dict[str, Any] = ctx.obj or {}
    cfg = get_config(ctx)
    return KubeClient(
        kubeconfig=obj.get("kubeconfig") or cfg.kubeconfig,
        context=obj.get("context") or cfg.context,
    )
