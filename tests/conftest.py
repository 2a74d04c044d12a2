import pytest

from deskimage.paths import XdgPathResolver


@pytest.fixture()
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture()
def resolver(home):
    return XdgPathResolver(home=home, environ={})


@pytest.fixture()
def appimage(tmp_path):
    """A fake, non-executable AppImage."""
    p = tmp_path / "Editor-2.0.AppImage"
    p.write_bytes(b"#!/bin/sh\necho editor\n")
    p.chmod(0o644)
    return p
