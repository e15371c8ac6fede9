from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_log_gelf import cli as cli_module
from lib_log_gelf import config as gelf_config


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> None:
    """Reset shared dotenv state around each test."""

    gelf_config._reset_dotenv_state_for_testing()
    yield
    gelf_config._reset_dotenv_state_for_testing()


@pytest.fixture(autouse=True)
def _clear_gelf_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GELF_ADDRESS", "GELF_APP_NAME", "GELF_ENVIRONMENT", "GELF_VERSION", "GELF_META", "GELF_HOST_NAME"):
        monkeypatch.delenv(name, raising=False)


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values without overriding call arguments."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("GELF_APP_NAME=dotenv-app\n")
    monkeypatch.chdir(nested)

    loaded = gelf_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ["GELF_APP_NAME"] == "dotenv-app"
    assert gelf_config.load_settings().app_name == "dotenv-app"
    assert gelf_config.load_settings(app_name="explicit").app_name == "explicit"

    os.environ.pop("GELF_APP_NAME", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / ".env").write_text("GELF_APP_NAME=dotenv-app\n")
    monkeypatch.chdir(nested)
    monkeypatch.setenv("GELF_APP_NAME", "real-app")

    result = gelf_config.enable_dotenv()

    assert result is not None
    assert os.environ["GELF_APP_NAME"] == "real-app"


def test_enable_dotenv_without_file_returns_none(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(gelf_config, "find_dotenv", lambda **_: "")

    assert gelf_config.enable_dotenv() is None


def test_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GELF_ADDRESS", "graylog.local:12201")
    monkeypatch.setenv("GELF_ENVIRONMENT", "staging")
    monkeypatch.setenv("GELF_VERSION", "2")
    monkeypatch.setenv("GELF_HOST_NAME", "worker07")
    monkeypatch.setenv("GELF_META", "_team=core,_region=eu")

    settings = gelf_config.load_settings(meta={"_region": "us"})

    assert settings.address == "graylog.local:12201"
    assert settings.environment == "staging"
    assert settings.version == "2"
    assert settings.host_name == "worker07"
    assert settings.app_name is None
    assert settings.meta == {"_team": "core", "_region": "us"}


def test_load_settings_defaults_host_name_to_short_hostname(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gelf_config.socket, "gethostname", lambda: "api01.example.internal")

    assert gelf_config.load_settings().host_name == "api01"


def test_parse_meta_rejects_entries_without_separator() -> None:
    with pytest.raises(ValueError, match="key=value"):
        gelf_config.parse_meta("_team")


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()

    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(gelf_config, "enable_dotenv", record_enable)
    monkeypatch.delenv(gelf_config.DOTENV_ENV_VAR, raising=False)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    env = {gelf_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["info"], env=env)
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env=env)
    assert result.exit_code == 0
    assert calls == []
