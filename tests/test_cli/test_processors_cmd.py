"""Tests for the processors command."""

from typer.testing import CliRunner

from asset_guard import pipeline
from asset_guard.cli import app

runner = CliRunner()


def test_lists_processors_with_callbacks(write_config, tmp_path, monkeypatch):
    (tmp_path / "cli_sample_processors.py").write_text(
        "from asset_guard.core import AssetModificationProcessor\n"
        "\n"
        "\n"
        "class TextureGuard(AssetModificationProcessor):\n"
        "    @staticmethod\n"
        "    def on_will_create_asset(path: str) -> None:\n"
        "        pass\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    config = write_config(processors={"modules": ["cli_sample_processors"]})

    result = runner.invoke(app, ["processors", "--config", str(config)])

    assert result.exit_code == 0
    assert "TextureGuard" in result.stdout
    assert "on_will_create_asset" in result.stdout


def test_no_processors(write_config, monkeypatch):
    monkeypatch.setattr(pipeline, "find_processor_types", lambda *args, **kwargs: ())
    config = write_config()

    result = runner.invoke(app, ["processors", "-c", str(config)])

    assert result.exit_code == 0
    assert "No asset modification processors found" in result.stdout


def test_unimportable_module(write_config):
    config = write_config(processors={"modules": ["definitely_missing_processors"]})

    result = runner.invoke(app, ["processors", "-c", str(config)])

    assert result.exit_code == 1
    assert "Discovery failed" in result.stdout
