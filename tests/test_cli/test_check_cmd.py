"""Tests for the check command."""

import os
import stat

from typer.testing import CliRunner

from asset_guard.cli import app

runner = CliRunner()


def test_all_editable(write_config):
    config = write_config()

    result = runner.invoke(app, ["check", "Assets/a.png", "Assets/b.png", "--config", str(config)])

    assert result.exit_code == 0
    assert "All assets are open for edit" in result.stdout


def test_read_only_folder_reported(write_config):
    config = write_config(version_control={"read_only_folders": ["Packages"]})

    result = runner.invoke(app, ["check", "Packages/a.asset", "Assets/b.png", "-c", str(config)])

    assert result.exit_code == 1
    assert "read-only folder" in result.stdout
    assert "1 asset(s) not open for edit" in result.stdout


def test_locked_file_reported(write_config, tmp_path):
    assets = tmp_path / "Assets"
    assets.mkdir()
    locked = assets / "hero.png"
    locked.write_text("")
    os.chmod(locked, stat.S_IRUSR)
    config = write_config(version_control={"backend": "file_permissions"})

    try:
        result = runner.invoke(app, ["check", "Assets/hero.png", "--force", "-c", str(config)])
    finally:
        os.chmod(locked, stat.S_IRUSR | stat.S_IWUSR)

    assert result.exit_code == 1
    assert "1 asset(s) not open for edit" in result.stdout


def test_unlicensed_processor_is_a_check_failure(write_config, tmp_path, monkeypatch):
    (tmp_path / "cli_license_processors.py").write_text(
        "from asset_guard.core import AssetModificationProcessor\n"
        "\n"
        "\n"
        "class CliLicenseProbe(AssetModificationProcessor):\n"
        "    @staticmethod\n"
        "    def is_open_for_edit(path: str, message: str) -> tuple[bool, str]:\n"
        "        return True, message\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    config = write_config(
        processors={"modules": ["cli_license_processors"]},
        license={"has_team_license": False},
    )

    result = runner.invoke(app, ["check", "Assets/a.png", "-c", str(config)])

    assert result.exit_code == 2
    assert "Check failed" in result.stdout


def test_settings_drive_logging(write_config, isolated_cli):
    config = write_config(logging={"log_level": "debug"})

    runner.invoke(app, ["check", "Assets/a.png", "-c", str(config)])

    isolated_cli.assert_called_once_with(log_level="DEBUG", log_dir=None)
