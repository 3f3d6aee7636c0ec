"""
Redundancy schemes supported by cStor pools.
"""

from enum import Enum


class PoolType(str, Enum):
    """Data raid group types."""

    STRIPE = "stripe"
    MIRROR = "mirror"
    RAIDZ = "raidz"
    RAIDZ2 = "raidz2"


# Devices per redundancy group.
GROUP_SIZES = {
    PoolType.STRIPE: 1,
    PoolType.MIRROR: 2,
    PoolType.RAIDZ: 3,
    PoolType.RAIDZ2: 4,
}


def is_pool_type_valid(name: str) -> bool:
    """
    Check whether a pool type name is recognized.

    The match is exact: no case folding, trimming or aliases ("striped",
    "raid-z" and "Mirror" are all rejected).
    """
    return isinstance(name, str) and name in {p.value for p in PoolType}


def group_size(pool_type: str) -> int:
    """
    Number of devices in one redundancy group of the given pool type.

    Raises:
        ValueError: If the pool type is not recognized
    """
    if not is_pool_type_valid(pool_type):
        raise ValueError(f"Unknown pool type: {pool_type}")
    return GROUP_SIZES[PoolType(pool_type)]
