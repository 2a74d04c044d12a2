"""Tests for deskimage.cli"""

import os
import stat

import pytest

from deskimage import cli, config, system


@pytest.fixture()
def cli_env(home, tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setattr(system, "refresh_desktop_database", lambda d: True)
    monkeypatch.setattr(system, "refresh_icon_cache", lambda d: True)
    return home


def test_creates_entry(cli_env, appimage, capsys):
    assert cli.main(["--skip-install-check", str(appimage)]) == 0

    desktop = cli_env / ".local" / "share" / "applications" / "Editor.desktop"
    exec_target = cli_env / ".local" / "bin" / "Editor"
    assert "Name=Editor\n" in desktop.read_text(encoding="utf-8")
    assert stat.S_IMODE(exec_target.stat().st_mode) == 0o755
    assert f"Desktop entry created at: {desktop}" in capsys.readouterr().out


def test_with_icon(cli_env, appimage, tmp_path, capsys):
    icon = tmp_path / "editor.svg"
    icon.write_text("<svg/>", encoding="utf-8")

    assert cli.main(["--skip-install-check", "--icon", str(icon), str(appimage)]) == 0

    desktop = cli_env / ".local" / "share" / "applications" / "Editor.desktop"
    installed_icon = cli_env / ".local" / "share" / "icons" / "editor.svg"
    assert f"Icon={installed_icon}\n" in desktop.read_text(encoding="utf-8")


def test_missing_source(cli_env, tmp_path, capsys):
    assert cli.main(["--skip-install-check", str(tmp_path / "Nope.AppImage")]) == 1
    assert "ERROR: File not found" in capsys.readouterr().err


def test_prompts_for_path(cli_env, appimage, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda: str(appimage))

    assert cli.main(["--skip-install-check"]) == 0
    out = capsys.readouterr().out
    assert "Enter path to your AppImage file:" in out
    assert "Desktop entry created at:" in out


def test_empty_prompt_fails(cli_env, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda: "")

    assert cli.main(["--skip-install-check"]) == 1
    assert "No AppImage selected." in capsys.readouterr().err


def test_offers_global_install(cli_env, monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(system, "is_globally_installed", lambda exe, target: False)
    monkeypatch.setattr("builtins.input", lambda: "y")
    monkeypatch.setattr(
        system,
        "install_globally",
        lambda exe, target, elevate: calls.append((target, elevate)) or (True, "Installed."),
    )

    assert cli.main([]) == 0
    assert calls == [(config.GLOBAL_INSTALL_PATH, config.CLI_ELEVATION_COMMAND)]
    assert "Installed." in capsys.readouterr().out


def test_declined_install_continues(cli_env, appimage, monkeypatch, capsys):
    answers = iter(["n", str(appimage)])
    monkeypatch.setattr(system, "is_globally_installed", lambda exe, target: False)
    monkeypatch.setattr("builtins.input", lambda: next(answers))

    def no_install(*args, **kwargs):
        raise AssertionError("install should not run")

    monkeypatch.setattr(system, "install_globally", no_install)

    assert cli.main([]) == 0
    assert "Desktop entry created at:" in capsys.readouterr().out


def test_non_utf8_file_name(cli_env, tmp_path, capsys):
    source = tmp_path / os.fsdecode(b"Caf\xe9-1.0.AppImage")
    source.write_bytes(b"#!/bin/sh\n")

    assert cli.main(["--skip-install-check", str(source)]) == 0
    assert "Desktop entry created at:" in capsys.readouterr().out
