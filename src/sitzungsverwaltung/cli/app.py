"""Main CLI application wiring for Sitzungsverwaltung.

  sitzungsverwaltung tui            # interactive client (default)
  sitzungsverwaltung login          # run the sign-in flow only
  sitzungsverwaltung sitzungen      # list sessions
"""

from pathlib import Path
from typing import Optional

import typer

from sitzungsverwaltung.config import configure_logging, logging_config_from

app = typer.Typer(add_completion=False, help="Sitzungsverwaltung: sessions, TOPs and motions")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yml"),
):
    """Sitzungsverwaltung CLI."""
    ctx.obj = {"config_path": config}
    if ctx.invoked_subcommand is None:
        tui(ctx)


# =============================================================================
# Register commands
# =============================================================================

from sitzungsverwaltung.cli import listing as listing_cmd
from sitzungsverwaltung.cli import login as login_cmd

listing_cmd.register(app)
login_cmd.register(app)


@app.command()
def tui(ctx: typer.Context):
    """Launch the TUI."""
    from sitzungsverwaltung.cli.common import acquire_token, build_gateway, config_from_ctx
    from sitzungsverwaltung.errors import AuthError
    from sitzungsverwaltung.tui.app import SitzungsApp

    cfg = config_from_ctx(ctx)
    configure_logging(logging_config_from(cfg))

    try:
        token = acquire_token(cfg)
    except AuthError as e:
        print(f"Login failed: {e}")
        raise typer.Exit(1)

    SitzungsApp(build_gateway(cfg, token)).run()
