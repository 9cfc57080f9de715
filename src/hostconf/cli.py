"""hostconf command-line interface.

Prints the effective settings of every application in a configuration
tree, either as the runtime would see them (with built-in defaults) or
limited to what the tree declares explicitly.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final

import typer
import yaml

from hostconf.errors import HostConfError
from hostconf.settings import resolve_application_settings
from hostconf.tree import ConfigTree, TreeLoader

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Hierarchical application settings resolver", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "hostconf.cli"

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    dir_okay=False,
    help="Tree file (default: $HOSTCONF_CONFIG or hostconf.yaml)",
)
DEFAULTS_OPTION = typer.Option(
    True,
    "--defaults/--no-defaults",
    help="Fill undeclared timeouts with built-in defaults",
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _load(path: Path | None) -> ConfigTree:
    try:
        return TreeLoader.load(path)
    except (HostConfError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def effective_settings(tree: ConfigTree, provide_defaults: bool) -> list[dict[str, Any]]:
    """Resolve every application node of ``tree`` into a printable entry."""
    return [
        {
            "path": node.path,
            "values": dict(node.values),
            "settings": resolve_application_settings(node, provide_defaults).to_dict(),
        }
        for node in tree.applications()
    ]


@app.command()
def resolve(
    config: Path | None = CONFIG_OPTION,
    defaults: bool = DEFAULTS_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Print the effective settings of each application in the tree."""
    _configure_logging(debug)
    tree = _load(config)

    try:
        entries = effective_settings(tree, defaults)
    except HostConfError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if not entries:
        typer.secho("No application nodes found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    logger.debug("Resolved %d application(s)", len(entries))
    typer.echo(yaml.safe_dump(entries, sort_keys=False), nl=False)


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML tree file against the node schema."""
    tree = _load(file)
    count = sum(1 for _ in tree.walk())
    typer.echo(f"✅ Config valid ({count} nodes, {len(tree.applications())} applications)")


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
