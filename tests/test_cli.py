"""
CLI tests
"""
import json

import pytest
import yaml
from click.testing import CliRunner

from fsm_engine.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def template_file(tmp_path, sample_definition):
    path = tmp_path / "orders.yaml"
    path.write_text(yaml.safe_dump(sample_definition, sort_keys=False), encoding="utf-8")
    return path


def test_validate(runner, template_file):
    result = runner.invoke(cli, ["validate", str(template_file)])

    assert result.exit_code == 0
    assert "5 states, 4 transitions" in result.output
    assert "initial state: new" in result.output
    assert "final states: shipped, rejected" in result.output


def test_validate_reports_missing_initial_state(runner, tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("states:\n  - name: a\n", encoding="utf-8")
    result = runner.invoke(cli, ["validate", str(path)])

    assert result.exit_code == 1
    assert "There is no initial state" in result.output


def test_validate_reports_unknown_state(runner, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({
        "states": [{"name": "a", "initial": True}],
        "transitions": [{"from": "a", "to": "b"}]
    }), encoding="utf-8")
    result = runner.invoke(cli, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Cannot transition to unknown state b" in result.output


def test_draw_to_stdout(runner, template_file):
    result = runner.invoke(cli, ["draw", str(template_file)])

    assert result.exit_code == 0
    assert result.output.startswith("digraph {")
    assert 'checking -> rejected [label="!in_stock"]' in result.output


def test_draw_to_file(runner, template_file, tmp_path):
    output = tmp_path / "orders.dot"
    result = runner.invoke(cli, ["draw", str(template_file), "-o", str(output)])

    assert result.exit_code == 0
    assert output.read_text(encoding="utf-8").startswith("digraph {")


def test_export_json(runner, template_file, sample_definition):
    result = runner.invoke(cli, ["export", str(template_file), "--format", "json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == sample_definition


def test_export_uses_configured_format(runner, template_file, monkeypatch):
    monkeypatch.setenv("FSM_ENGINE_EXPORT_FORMAT", "json")
    result = runner.invoke(cli, ["export", str(template_file)])

    assert result.exit_code == 0
    assert json.loads(result.output)["template"]["name"] == "orders"
