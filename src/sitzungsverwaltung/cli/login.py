"""Auth command: sitzungsverwaltung login"""

from __future__ import annotations

import sys

import typer

from sitzungsverwaltung.cli.common import acquire_token, config_from_ctx
from sitzungsverwaltung.errors import AuthError


def register(app: typer.Typer):
    @app.command()
    def login(
        ctx: typer.Context,
        show: bool = typer.Option(False, "--show", help="Print the access token"),
    ):
        """Sign in against the identity provider and check the token."""
        try:
            token = acquire_token(config_from_ctx(ctx))
        except AuthError as e:
            print(f"Login failed: {e}")
            sys.exit(1)

        print("✓ Signed in")
        if show:
            print(token)
