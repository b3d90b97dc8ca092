"""Tests for config loading and typed views."""

from pathlib import Path

import pytest

from sitzungsverwaltung.config import (
    CONFIG_ENV,
    DEFAULT_BASE_URL,
    TOKEN_ENV,
    api_config_from,
    auth_config_from,
    config_path,
    load_config,
    logging_config_from,
)


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.yml")
    assert cfg == {}
    assert api_config_from(cfg).base_url == DEFAULT_BASE_URL
    assert auth_config_from(cfg).scope == "openid"


def test_load_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(TOKEN_ENV, raising=False)
    path = tmp_path / "config.yml"
    path.write_text(
        "api:\n"
        "  base_url: https://sitzungen.example.org\n"
        "  timeout: 3\n"
        "auth:\n"
        "  issuer: https://id.example.org\n"
        "  client_id: cli\n"
        "logging:\n"
        "  file: log/tui.log\n"
        "  level: info\n"
    )

    cfg = load_config(path)

    api = api_config_from(cfg)
    assert api.base_url == "https://sitzungen.example.org/"
    assert api.timeout == 3.0
    auth = auth_config_from(cfg)
    assert (auth.issuer, auth.client_id, auth.token) == ("https://id.example.org", "cli", None)
    log = logging_config_from(cfg)
    assert log.file == Path("log/tui.log")
    assert log.level == "INFO"


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("")
    assert load_config(path) == {}


def test_non_mapping_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(RuntimeError, match="expected a mapping"):
        load_config(path)


def test_env_selects_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "other.yml"))
    assert config_path() == tmp_path / "other.yml"
    assert config_path(tmp_path / "explicit.yml") == tmp_path / "explicit.yml"


def test_token_env_overrides_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(TOKEN_ENV, "from-env")
    assert auth_config_from({"auth": {"token": "from-file"}}).token == "from-env"
