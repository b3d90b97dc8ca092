"""Shared wiring for CLI commands: config, gateway, token."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from sitzungsverwaltung.api import TopManagerApi
from sitzungsverwaltung.auth import provider_from_config
from sitzungsverwaltung.config import api_config_from, auth_config_from, load_config


def config_from_ctx(ctx: typer.Context) -> dict:
    path: Optional[Path] = (ctx.obj or {}).get("config_path")
    try:
        return load_config(path)
    except RuntimeError as e:
        print(str(e))
        raise typer.Exit(1)


def build_gateway(cfg: dict, token: Optional[str] = None) -> TopManagerApi:
    api_cfg = api_config_from(cfg)
    return TopManagerApi(api_cfg.base_url, token=token, timeout=api_cfg.timeout)


def acquire_token(cfg: dict) -> str:
    """Run the configured auth flow once. Raises AuthError on failure."""
    provider = provider_from_config(auth_config_from(cfg), timeout=api_config_from(cfg).timeout)
    return provider.get_access_token()
