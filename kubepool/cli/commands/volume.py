"""
Volume inspection commands.
"""

from typing import Optional

import typer

from kubepool.cli.lib.printer import render_table
from kubepool.cli.lib.store import get_store
from kubepool.cli.lib.validators import validate_name
from kubepool.volume.jiva import VOLUME_LIST_HEADERS, describe_jiva_volume, get_jiva_rows

app = typer.Typer(help="Volume inspection commands")


@app.command()
def list(
    ctx: typer.Context,
    openebs_namespace: Optional[str] = typer.Option(
        None, "--openebs-namespace", help="Only show volumes of this OpenEBS namespace"
    ),
):
    """
    List Jiva volumes.

    Shows every Jiva backed persistent volume with its status and attachment.
    """
    try:
        store = get_store(ctx)
        rows = get_jiva_rows(store, store.list_persistent_volumes(), openebs_namespace)
        if not rows:
            typer.echo("No volumes found")
            return
        typer.echo(render_table(VOLUME_LIST_HEADERS, rows))

    except Exception as e:
        typer.echo(f"Error listing volumes: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def describe(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Persistent volume name"),
):
    """
    Describe a Jiva volume.

    Shows volume details, the iSCSI portal, controller and replica pods, and the replica PVCs.
    """
    try:
        validate_name(name)
        store = get_store(ctx)
        pv = store.get_persistent_volume(name)
        typer.echo(describe_jiva_volume(store, pv))

    except Exception as e:
        typer.echo(f"Error describing volume: {e}", err=True)
        raise typer.Exit(1)
