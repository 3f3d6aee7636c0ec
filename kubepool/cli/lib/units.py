"""
Human readable sizes and ages.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional, Union

from kubernetes.utils import parse_quantity

IEC_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]


def to_ibytes(quantity: Union[str, int]) -> str:
    """
    Convert a Kubernetes quantity to IEC units.

    Examples: "5Gi" -> "5.0GiB", "5G" -> "4.7GiB", 512 -> "512B".
    Values that are not quantities are returned unchanged.
    """
    if quantity in ("", None):
        return ""
    try:
        value = Decimal(parse_quantity(quantity))
    except (ValueError, TypeError):
        return str(quantity)

    idx = 0
    while value >= 1024 and idx < len(IEC_UNITS) - 1:
        value /= 1024
        idx += 1
    if idx == 0:
        return f"{int(value)}B"
    return f"{float(value):.1f}{IEC_UNITS[idx]}"


def duration(delta: timedelta) -> str:
    """Compact duration such as `45s`, `12m`, `5h3m` or `2d4h`."""
    seconds = int(delta.total_seconds())
    if seconds < 0:
        seconds = 0
    if seconds < 60:
        return f"{seconds}s"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"
    hours = minutes // 60
    if hours < 24:
        rest = minutes % 60
        return f"{hours}h{rest}m" if rest else f"{hours}h"
    days = hours // 24
    rest = hours % 24
    return f"{days}d{rest}h" if rest else f"{days}d"


def age(created: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Age of an object given its creation timestamp."""
    if created is None:
        return "<unknown>"
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return duration(now - created)
