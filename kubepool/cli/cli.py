#!/usr/bin/env python3
"""
Main CLI entry point using Typer.
"""

import logging
import sys
from typing import Optional

import typer

from kubepool.cli.commands import generate, volume
from kubepool.cli.lib.config import load_config

app = typer.Typer(
    name="kubepool",
    help="OpenEBS storage pool and volume tool",
    add_completion=False,
)

# Add command groups
app.add_typer(generate.app, name="generate", help="Generate storage resource specifications")
app.add_typer(volume.app, name="volume", help="Volume inspection commands")


@app.callback()
def root(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace (storage engine commands resolve their own)"),
    kubeconfig: Optional[str] = typer.Option(None, "--kubeconfig", help="Path to kubeconfig"),
    context: Optional[str] = typer.Option(None, "--context", help="Kubeconfig context"),
):
    """Configure logging and cluster access shared by all commands."""
    cfg = load_config()
    logging.basicConfig(
        level=logging.DEBUG if verbose else cfg.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = {"config": cfg, "namespace": namespace, "kubeconfig": kubeconfig, "context": context}


def main() -> int:
    """Main entry point."""
    try:
        app()
        return 0
    except KeyboardInterrupt:
        typer.echo("\nOperation cancelled by user", err=True)
        return 130
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
