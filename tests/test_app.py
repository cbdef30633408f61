"""Tests for startup wiring and the command line entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import yaml

from consolebrand.__main__ import main
from consolebrand.app import create_branding_manager
from consolebrand.config.settings import EngineSettings


def _install_theme(etc_dir: Path, name: str, bundle: dict[str, str], version: int = 1) -> None:
    theme_dir = etc_dir / "branding" / name
    theme_dir.mkdir(parents=True)
    (theme_dir / "branding.yaml").write_text(yaml.safe_dump({"version": version}), encoding="utf-8")
    (theme_dir / "messages.yaml").write_text(yaml.safe_dump(bundle), encoding="utf-8")


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("CONSOLEBRAND_CONFIG", str(tmp_path / "absent.yaml"))
    monkeypatch.delenv("CONSOLEBRAND_ETC_DIR", raising=False)
    monkeypatch.setenv("CONSOLEBRAND_LOG_DIR", str(tmp_path / "logs"))
    yield
    logger = logging.getLogger("consolebrand")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_create_branding_manager_scans_at_startup(tmp_path: Path) -> None:
    _install_theme(tmp_path, "00-base.brand", {"obrand.common.welcome": "Hello"})
    settings = EngineSettings(tmp_path / "absent.yaml", environ={"CONSOLEBRAND_ETC_DIR": str(tmp_path)})

    manager = create_branding_manager(settings)
    assert manager.registry.scan_count == 1
    assert manager.get_message("obrand.login.welcome") == "Hello"


def test_create_branding_manager_without_configuration(tmp_path: Path) -> None:
    manager = create_branding_manager(EngineSettings(tmp_path / "absent.yaml", environ={}))

    assert manager.root_path is None
    assert manager.list_themes() == ()
    assert manager.get_message("obrand.common.welcome") == ""


def test_cli_messages_prints_json(tmp_path: Path, capsys) -> None:
    _install_theme(tmp_path, "00-base.brand", {"obrand.common.welcome": "Hello", "obrand.login.title": "Sign In"})

    assert main(["--etc-dir", str(tmp_path), "messages", "login"]) == 0
    assert json.loads(capsys.readouterr().out) == {"welcome": "Hello", "title": "Sign In"}


def test_cli_message_and_themes(tmp_path: Path, capsys) -> None:
    _install_theme(tmp_path, "a.brand", {"obrand.common.welcome": "Hello"})
    _install_theme(tmp_path, "b.brand", {"obrand.common.welcome": "Howdy"})

    assert main(["--etc-dir", str(tmp_path), "message", "obrand.login.welcome"]) == 0
    assert capsys.readouterr().out.strip() == "Howdy"

    assert main(["--etc-dir", str(tmp_path), "themes"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [Path(line).name for line in lines] == ["a.brand", "b.brand"]


def test_cli_reports_missing_messages(tmp_path: Path, capsys) -> None:
    assert main(["--etc-dir", str(tmp_path), "messages", "login"]) == 1
    assert main(["--etc-dir", str(tmp_path), "message", "not.a.brand.key"]) == 2
    assert "obrand.<scope>.<name>" in capsys.readouterr().err


@pytest.mark.parametrize("content", ["log_dir: 5\n", "etc_dir: [unclosed\n", "- not\n- a mapping\n"])
def test_cli_survives_invalid_config_file(tmp_path: Path, monkeypatch, capsys, content: str) -> None:
    config = tmp_path / "consolebrand.yaml"
    config.write_text(content, encoding="utf-8")
    monkeypatch.setenv("CONSOLEBRAND_CONFIG", str(config))
    monkeypatch.delenv("CONSOLEBRAND_LOG_DIR", raising=False)

    assert main(["themes"]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "log directory unavailable" in captured.err


def test_cli_survives_unwritable_log_dir(tmp_path: Path, monkeypatch, capsys) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setenv("CONSOLEBRAND_LOG_DIR", str(blocker / "logs"))
    _install_theme(tmp_path, "a.brand", {"obrand.common.welcome": "Hello"})

    assert main(["--etc-dir", str(tmp_path), "message", "obrand.login.welcome"]) == 0
    captured = capsys.readouterr()
    assert captured.out.strip() == "Hello"
    assert "LOG_DIR_UNWRITABLE" in captured.err
