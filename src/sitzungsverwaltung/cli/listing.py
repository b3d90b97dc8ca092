"""Read-only listings: sitzungsverwaltung sitzungen|tops|antraege"""

from __future__ import annotations

import sys

import typer

from sitzungsverwaltung.cli.common import build_gateway, config_from_ctx
from sitzungsverwaltung.errors import DecodeError, TransportError
from sitzungsverwaltung.models import ResourceKind


def _print_list(ctx: typer.Context, kind: ResourceKind, scope: str | None, empty: str) -> None:
    gateway = build_gateway(config_from_ctx(ctx))
    try:
        items = gateway.fetch_list(kind, scope)
    except (TransportError, DecodeError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not items:
        print(empty)
        return

    for i, item in enumerate(items, 1):
        print(f"  [{i}] {item.label}  ({item.id})")


def register(app: typer.Typer):
    @app.command()
    def sitzungen(ctx: typer.Context):
        """List all sessions."""
        _print_list(ctx, ResourceKind.SESSION, None, "No sessions yet.")

    @app.command()
    def tops(ctx: typer.Context, session_id: str):
        """List the agenda items of a session."""
        _print_list(ctx, ResourceKind.AGENDA_ITEM, session_id, "No agenda items.")

    @app.command()
    def antraege(ctx: typer.Context, top_id: str):
        """List the motions of an agenda item."""
        _print_list(ctx, ResourceKind.MOTION, top_id, "No motions.")
