"""CLI fixtures: project config files and isolated logging."""

import json
from unittest.mock import patch

import pytest

from asset_guard import config as config_module


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch):
    """Keep CLI runs from reconfiguring global loguru sinks or reusing cached settings."""
    monkeypatch.setattr(config_module, "_settings_cache", None)
    with patch("asset_guard.cli._common.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def write_config(tmp_path):
    """Write a JSON config for a project rooted at ``tmp_path``."""

    def write(**sections):
        sections.setdefault("version_control", {})
        sections["version_control"].setdefault("project_root", str(tmp_path))
        sections.setdefault("processors", {}).setdefault("entry_point_group", None)
        path = tmp_path / "asset-guard.json"
        path.write_text(json.dumps(sections))
        return path

    return write
