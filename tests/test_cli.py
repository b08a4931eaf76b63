"""Tests for the vocabulary parser command-line interface."""

import json
import sys
import types

import pytest
from typer.testing import CliRunner

from interfaces.cli import app

runner = CliRunner()

AS_URI = "https://www.w3.org/ns/activitystreams"


@pytest.fixture(autouse=True)
def configured_ontologies(monkeypatch, activity_streams, tmp_path):
    module = types.ModuleType("cli_test_ontologies")
    module.ActivityStreams = type(activity_streams)
    monkeypatch.setitem(sys.modules, "cli_test_ontologies", module)
    monkeypatch.setenv("VOCAB_PARSER_CONFIG_PATH", str(tmp_path / "absent.yaml"))
    monkeypatch.setenv("VOCAB_PARSER_ONTOLOGIES", "cli_test_ontologies:ActivityStreams")
    monkeypatch.setenv("VOCAB_PARSER_LOG_LEVEL", "WARNING")


@pytest.fixture
def write_document(tmp_path):
    def _write(document, name="vocab.json"):
        path = tmp_path / name
        path.write_text(json.dumps(document))
        return path
    return _write


def test_parse_prints_vocabulary(write_document):
    path = write_document({"@context": AS_URI, "@type": "Object", "name": "Note"})

    result = runner.invoke(app, ["parse", str(path)])

    assert result.exit_code == 0
    assert "Type Note:" in result.output


def test_parse_summary(write_document):
    path = write_document({"@context": AS_URI, "@type": "Object", "name": "Note"})

    result = runner.invoke(app, ["parse", str(path), "--summary"])

    assert result.exit_code == 0
    assert json.loads(result.output)["vocab"]["types"] == 1


def test_parse_failure_exits_nonzero(write_document):
    path = write_document({"@context": AS_URI, "colour": "red"})

    result = runner.invoke(app, ["parse", str(path)])

    assert result.exit_code == 1
    assert "colour" in result.output


def test_parse_missing_file(tmp_path):
    result = runner.invoke(app, ["parse", str(tmp_path / "missing.json")])

    assert result.exit_code == 1
    assert "cannot read" in result.output


def test_parse_invalid_utf8(tmp_path):
    path = tmp_path / "bad.json"
    path.write_bytes(b"\xff\xfe{}")

    result = runner.invoke(app, ["parse", str(path)])

    assert result.exit_code == 1
    assert "cannot read" in result.output


def test_parse_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{\"@context\": ")

    result = runner.invoke(app, ["parse", str(path)])

    assert result.exit_code == 1
    assert "cannot read" in result.output


def test_parse_with_config_file(write_document, tmp_path, monkeypatch):
    monkeypatch.delenv("VOCAB_PARSER_ONTOLOGIES")
    config_path = tmp_path / "vocab_parser.yaml"
    config_path.write_text("ontologies:\n  - cli_test_ontologies:ActivityStreams\n")
    path = write_document({"@context": AS_URI, "@type": "Object", "name": "Note"})

    result = runner.invoke(app, ["parse", str(path), "--config", str(config_path), "--summary"])

    assert result.exit_code == 0


def test_ontologies_lists_registered_names():
    result = runner.invoke(app, ["ontologies"])

    assert result.exit_code == 0
    assert AS_URI in result.output


def test_ontologies_with_bad_configuration(monkeypatch):
    monkeypatch.setenv("VOCAB_PARSER_ONTOLOGIES", "cli_test_ontologies:Missing")

    result = runner.invoke(app, ["ontologies"])

    assert result.exit_code == 1
    assert "Error" in result.output
