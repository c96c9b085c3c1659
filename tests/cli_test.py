"""Test that the CLI works."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from volumeset.cli import main

from .support.data import config_path, read_output_json


def test_build() -> None:
    runner = CliRunner()
    config_file = config_path("standard")

    result = runner.invoke(
        main, ["build", "-c", str(config_file), "--validate"]
    )

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(result.output) == read_output_json(
        "standard", "pod"
    )


def test_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VOLUMESET_CONFIG_FILE", str(config_path("minimal")))
    runner = CliRunner()

    result = runner.invoke(main, ["build"])

    assert result.exit_code == 0, result.output
    output = yaml.safe_load(result.output)
    assert [v["name"] for v in output["volumes"]] == [
        "config-data",
        "config-data-custom",
        "logs",
        "scripts",
    ]
    assert output["volumes"][0]["secret"]["secretName"] == (
        "glance-external-config-data"
    )


def test_validate() -> None:
    runner = CliRunner()
    config_file = config_path("collision")

    result = runner.invoke(main, ["build", "-c", str(config_file)])
    assert result.exit_code == 0

    result = runner.invoke(
        main, ["build", "-c", str(config_file), "--validate"]
    )
    assert result.exit_code != 0
    assert "Multiple volumes with the same name" in result.output


def test_bad_config_file(tmp_path: Path) -> None:
    runner = CliRunner()
    missing = tmp_path / "missing.yaml"

    result = runner.invoke(main, ["build", "-c", str(missing)])

    assert result.exit_code != 0


def test_help() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["help", "build"])
    assert result.exit_code == 0
    assert "--config-file" in result.output
