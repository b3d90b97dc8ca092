"""Client configuration.

Configuration lives in a single YAML file:

    api:
      base_url: http://localhost:8080/
      timeout: 10
    auth:
      issuer: https://id.example.org/realms/fs
      client_id: sitzungsverwaltung
      scope: openid
      token: null          # pre-issued token, skips the device flow
    logging:
      file: ~/.cache/sitzungsverwaltung/tui.log
      level: DEBUG

A missing file is not an error; every key has a default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml


CONFIG_ENV = "SITZUNGSVERWALTUNG_CONFIG"
TOKEN_ENV = "SITZUNGSVERWALTUNG_TOKEN"

DEFAULT_CONFIG_PATH = Path("~/.config/sitzungsverwaltung/config.yml")
DEFAULT_BASE_URL = "http://localhost:8080/"
DEFAULT_LOG_FILE = Path("~/.cache/sitzungsverwaltung/tui.log")


@dataclass(frozen=True)
class ApiConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0


@dataclass(frozen=True)
class AuthConfig:
    issuer: str | None = None
    client_id: str | None = None
    scope: str = "openid"
    token: str | None = None


@dataclass(frozen=True)
class LoggingConfig:
    file: Path = DEFAULT_LOG_FILE
    level: str = "DEBUG"


def config_path(explicit: Path | None = None) -> Path:
    """Resolve which config file to read: argument, environment, default."""
    if explicit is not None:
        return explicit.expanduser()
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def load_config(path: Path | None = None) -> dict:
    cfg_path = config_path(path)
    if not cfg_path.exists():
        return {}
    cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise RuntimeError(f"Invalid config file {cfg_path} (expected a mapping)")
    return cfg


def api_config_from(cfg: dict) -> ApiConfig:
    api = cfg.get("api") or {}
    base_url = api.get("base_url", DEFAULT_BASE_URL)
    if not base_url.endswith("/"):
        base_url += "/"
    return ApiConfig(base_url=base_url, timeout=float(api.get("timeout", 10.0)))


def auth_config_from(cfg: dict) -> AuthConfig:
    auth = cfg.get("auth") or {}
    return AuthConfig(
        issuer=auth.get("issuer"),
        client_id=auth.get("client_id"),
        scope=auth.get("scope", "openid"),
        token=os.environ.get(TOKEN_ENV) or auth.get("token"),
    )


def logging_config_from(cfg: dict) -> LoggingConfig:
    log = cfg.get("logging") or {}
    return LoggingConfig(
        file=Path(log.get("file", DEFAULT_LOG_FILE)).expanduser(),
        level=str(log.get("level", "DEBUG")).upper(),
    )


def configure_logging(log_cfg: LoggingConfig) -> None:
    """Send all log output to a file; the terminal belongs to the UI."""
    log_cfg.file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_cfg.file,
        level=getattr(logging, log_cfg.level, logging.DEBUG),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
