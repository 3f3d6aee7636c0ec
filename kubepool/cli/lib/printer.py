"""
Table and template output.
"""

from dataclasses import astuple
from typing import Any, List, Sequence

from jinja2 import Template


def render_table(headers: Sequence[str], rows: Sequence[Any]) -> str:
    """
    Render dataclass rows as a left aligned, kubectl style table.

    Args:
        headers: Column titles, one per dataclass field
        rows: Dataclass instances

    Returns:
        Table text without a trailing newline
    """
    cells: List[List[str]] = [[str(h).upper() for h in headers]]
    for row in rows:
        values = [("" if v is None else str(v)) for v in astuple(row)]
        if len(values) != len(headers):
            raise ValueError(f"Row has {len(values)} columns, expected {len(headers)}")
        cells.append(values)

    widths = [max(len(r[i]) for r in cells) for i in range(len(headers))]
    lines = []
    for r in cells:
        lines.append("   ".join(v.ljust(widths[i]) for i, v in enumerate(r)).rstrip())
    return "\n".join(lines)


def render_template(template: str, **context: Any) -> str:
    """Render a jinja2 template string."""
    return Template(template).render(**context)
