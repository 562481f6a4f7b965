"""Shared fixtures for the formschema test-suite."""

from __future__ import annotations

import pytest

from formschema import FileDescriptor
from formschema.schema_files import SCHEMA_FILE_ENV


@pytest.fixture(autouse=True)
def _silence_logging(caplog):  # noqa: D401
    """Reduce noise – most tests assert behaviour, not log output."""
    caplog.set_level("WARNING")
    yield


@pytest.fixture(autouse=True)
def _isolated_schema_lookup(tmp_path_factory, monkeypatch):
    """Keep schema-file lookup away from the developer's real config directory."""
    monkeypatch.delenv(SCHEMA_FILE_ENV, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    yield


@pytest.fixture()
def jpeg_upload() -> dict:
    return {"name": "a.jpg", "size": 10, "type": "image/jpeg"}


@pytest.fixture()
def png_upload() -> FileDescriptor:
    return FileDescriptor(name="avatar.png", size=2048, type="image/png")


@pytest.fixture()
def signup_schema() -> dict:
    def password_strength(value, data):
        if len(value) < 8:
            return "Password is too short!"
        return None

    return {
        "login": {"required": "Required", "min": [4, "Too short"], "max": [16, "Too long"]},
        "email": {"required": "Email required", "pattern": ["email", "Invalid email"]},
        "password": {"required": "Password required", "validator": password_strength},
        "confirm": {"equalField": ["password", "Passwords must match"]},
        "age": {"gte": [18, "Adults only"], "pattern": ["integer", "Whole years"]},
        "avatar": {"extAllowed": [["png", "jpg"], "Images only"], "sizeLte": [1_000_000, "Too large"]},
    }
