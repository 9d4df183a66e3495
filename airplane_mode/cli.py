"""CLI entry point for Airplane Mode."""

from __future__ import annotations

import shutil
from pathlib import Path

import click

from airplane_mode import __version__

BANNER = """\
╔══════════════════════════════════════╗
║  AIRPLANE MODE — local-only policy   ║
╚══════════════════════════════════════╝"""

OPERATOR_ID = "cli"


def _find_template() -> Path:
    return Path(__file__).parent / "config.cp.yaml"


def _gate(ctx: click.Context):
    """Load config, logging and storage, then build the gate."""
    from airplane_mode.config import load_config
    from airplane_mode.database import init_db
    from airplane_mode.logging_config import setup_logging
    from airplane_mode.plugin import build_plugin

    config = load_config(ctx.obj.get("config_path"))
    setup_logging()
    init_db()
    return build_plugin(config).gate


def _switch(ctx: click.Context, state: str) -> None:
    from airplane_mode.config import get_config
    from airplane_mode.core.protocols import Principal

    gate = _gate(ctx)
    config = get_config()
    operator = Principal(id=OPERATOR_ID, capabilities=frozenset({config.policy.capability}))
    token = gate.nonces.create(config.nonce.action, operator.id)
    if not gate.toggle(state, operator, token):
        raise click.ClickException(f"Could not switch Airplane Mode {state}.")
    click.echo(f"Airplane Mode: {state.upper()}")


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              default=None, help="Path to a config.yaml file.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """Airplane Mode — block outbound network access while working locally."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite existing config file.")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Initialize config in ~/.airplane-mode/ and create the setting."""
    from airplane_mode.config import _default_data_dir

    config_dir = _default_data_dir()
    config_dest = config_dir / "config.yaml"

    click.echo(BANNER)
    click.echo()

    config_dir.mkdir(parents=True, exist_ok=True)
    click.echo(f"  [ok] Directory ready: {config_dir}")

    if config_dest.exists() and not force:
        click.echo(f"  [--] Config already exists: {config_dest}")
        click.echo("       Use --force to overwrite.")
    else:
        shutil.copy2(_find_template(), config_dest)
        click.echo(f"  [ok] Config created: {config_dest}")

    gate = _gate(ctx)
    gate.create_setting()
    click.echo(f"  [ok] Setting ready: Airplane Mode is {gate.state().value.upper()}")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show whether Airplane Mode is on."""
    gate = _gate(ctx)
    click.echo(f"Airplane Mode: {gate.state().value.upper()}")


@cli.command()
@click.pass_context
def on(ctx: click.Context) -> None:
    """Turn Airplane Mode on."""
    _switch(ctx, "on")


@cli.command()
@click.pass_context
def off(ctx: click.Context) -> None:
    """Turn Airplane Mode off."""
    _switch(ctx, "off")


@cli.command()
@click.argument("url")
@click.pass_context
def check(ctx: click.Context, url: str) -> None:
    """Show whether a request to URL would be allowed."""
    gate = _gate(ctx)
    verdict = gate.decide_network(url)
    if verdict is False:
        click.echo(f"allow  {url}")
    else:
        click.echo(f"deny   {url}  ({verdict.message})")


@cli.command()
@click.pass_context
def uninstall(ctx: click.Context) -> None:
    """Delete the stored setting."""
    gate = _gate(ctx)
    gate.remove_setting()
    click.echo("Setting removed.")


@cli.command()
def version() -> None:
    """Show version information."""
    click.echo(f"airplane-mode v{__version__}")
