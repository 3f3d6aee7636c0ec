"""
Input validation functions.
"""

import re
from typing import List

# RFC 1123 subdomain, as used for Kubernetes node names
_DNS_SUBDOMAIN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")


def validate_name(name: str) -> None:
    """
    Validate a Kubernetes object name (node, volume, etc.).

    Args:
        name: Name to validate

    Raises:
        ValueError: If name is invalid
    """
    if not name:
        raise ValueError("Name cannot be empty")

    if len(name) > 253:
        raise ValueError("Name must be at most 253 characters")

    if not _DNS_SUBDOMAIN.match(name):
        raise ValueError(
            f"Invalid name {name!r}: must consist of lower case alphanumeric characters, '-' or '.', "
            "and must start and end with an alphanumeric character"
        )


def parse_nodes(raw: str) -> List[str]:
    """
    Parse a comma separated node list.

    Args:
        raw: Node names, e.g. "node1,node2"

    Returns:
        Node names in the given order, duplicates removed

    Raises:
        ValueError: If the list is empty or a name is invalid
    """
    nodes: List[str] = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        validate_name(token)
        if token not in nodes:
            nodes.append(token)

    if not nodes:
        raise ValueError("At least one node is required")
    return nodes


def validate_device_count(count: int) -> None:
    """
    Validate the number of devices per pool.

    Raises:
        ValueError: If count is not positive
    """
    if count < 1:
        raise ValueError("Number of devices must be at least 1")
