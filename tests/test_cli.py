"""Tests for the seedgraph CLI."""

import json
import sys

import pytest
from click.testing import CliRunner

from seedgraph.cli import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CLI runner in an empty directory, with seed modules re-imported per test."""
    monkeypatch.chdir(tmp_path)
    for module in ("cli_seeds", "cli_cyclic_seeds"):
        monkeypatch.delitem(sys.modules, module, raising=False)
    return CliRunner()


def test_order(runner):
    result = runner.invoke(cli, ["order", "cli_seeds"])

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert "Part (PartSeed) count=4 depends_on: -" in lines[0]
    assert "Widget (WidgetSeed) count=20 depends_on: Part" in lines[1]


def test_generate(runner):
    result = runner.invoke(cli, ["generate", "cli_seeds", "--seed", "1", "--count", "6"])

    assert result.exit_code == 0, result.output
    assert "Part: 4" in result.output
    assert "Widget: 6" in result.output
    assert "total: 10" in result.output


def test_generate_json(runner):
    result = runner.invoke(cli, ["generate", "cli_seeds", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"Part": 4, "Widget": 20}


def test_generate_with_config(runner, tmp_path):
    config_path = tmp_path / "custom.toml"
    config_path.write_text("[generation.counts]\nWidget = 2\n")

    result = runner.invoke(cli, ["generate", "cli_seeds", "--config", str(config_path), "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"Part": 4, "Widget": 2}


def test_cycle_exits_with_error(runner):
    result = runner.invoke(cli, ["order", "cli_cyclic_seeds"])

    assert result.exit_code == 1
    assert "Circular dependency" in result.output


def test_unknown_module_exits_with_error(runner):
    result = runner.invoke(cli, ["generate", "no_such_seed_module"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "no_such_seed_module" in result.output


def test_invalid_config_exits_with_error(runner, tmp_path):
    config_path = tmp_path / "bad.toml"
    config_path.write_text("[generation]\ndefault_count = -1\n")

    result = runner.invoke(cli, ["generate", "cli_seeds", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "Error: Invalid configuration" in result.output


def test_malformed_config_exits_with_error(runner, tmp_path):
    config_path = tmp_path / "broken.toml"
    config_path.write_text("[generation\n")

    result = runner.invoke(cli, ["order", "cli_seeds", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "Error: Invalid configuration" in result.output


def test_unknown_table_mapping_is_reported(runner, tmp_path, caplog):
    config_path = tmp_path / "tables.toml"
    config_path.write_text(
        '[database]\nurl = "postgresql://localhost/unused"\n\n'
        '[database.tables]\nGadget = "tb_gadget"\n'
    )

    with caplog.at_level("WARNING", logger="seedgraph.cli"):
        result = runner.invoke(
            cli, ["generate", "cli_seeds", "--config", str(config_path), "--json"]
        )

    # No mapping left, so no connection is attempted
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"Part": 4, "Widget": 20}
    assert any("Gadget" in record.getMessage() for record in caplog.records)
