"""
Resource generation commands.
"""

import typer

from kubepool.cli.lib.store import get_config, get_store
from kubepool.cli.lib.validators import parse_nodes, validate_device_count
from kubepool.generate.cspc import generate_cspc

app = typer.Typer(help="Generate storage resource specifications")


@app.command()
def cspc(
    ctx: typer.Context,
    nodes: str = typer.Option(..., "--nodes", help="Comma separated node names (e.g., node1,node2)"),
    devices: int = typer.Option(1, "--number-of-devices", help="Blockdevices per pool (default: 1)"),
    raidtype: str = typer.Option("stripe", "--raidtype", help="Pool type: stripe, mirror, raidz or raidz2"),
    apply: bool = typer.Option(False, "--apply", help="Create the CStorPoolCluster instead of only printing it"),
):
    """
    Generate a CStorPoolCluster.

    Picks active, unclaimed, unformatted blockdevices on every node and prints
    the pool cluster YAML.
    """
    try:
        node_names = parse_nodes(nodes)
        validate_device_count(devices)

        cfg = get_config(ctx)
        store = get_store(ctx)
        result = generate_cspc(
            store,
            node_names,
            devices,
            raidtype,
            namespace=(ctx.obj or {}).get("namespace"),
            cas_type="cstor",
            generate_name=cfg.generate_name,
        )
        typer.echo(result.yaml, nl=False)

        if apply:
            name = store.create_pool_cluster(result.cspc)
            typer.echo(f"CStorPoolCluster {name} created in namespace {result.cspc.namespace}", err=True)

    except Exception as e:
        typer.echo(f"Error generating cspc: {e}", err=True)
        raise typer.Exit(1)
