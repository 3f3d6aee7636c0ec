"""
YAML rendering of pool cluster specifications.
"""

from typing import Any, Dict

import yaml

from kubepool.generate.models import ClusterPoolSpecification


def to_dict(cspc: ClusterPoolSpecification) -> Dict[str, Any]:
    """Kubernetes object form of a pool cluster, keyed by the API field names."""
    return cspc.model_dump(by_alias=True)


def to_yaml(cspc: ClusterPoolSpecification) -> str:
    """
    Render a pool cluster as YAML.

    Keys keep the schema's field order and the output is deterministic, so the
    same specification always renders to the same text.
    """
    return yaml.safe_dump(to_dict(cspc), default_flow_style=False, sort_keys=False)


def from_yaml(text: str) -> ClusterPoolSpecification:
    """
    Parse YAML produced by `to_yaml` (or written by hand) back into a specification.

    Raises:
        ValueError: If the text is not a valid CStorPoolCluster
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML: {e}")
    if not isinstance(data, dict):
        raise ValueError("CStorPoolCluster YAML must be a mapping")
    return ClusterPoolSpecification.model_validate(data)
