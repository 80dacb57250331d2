"""Tests for the command-line entry point."""

import json

import pytest

from catalog_ingest import cli


def test_cli_maps_local_file(tmp_path, capsys, sample_json_payload):
    feed = tmp_path / "feed.json"
    feed.write_bytes(sample_json_payload)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["json", "--file", str(feed), "--quiet-products"])

    out = capsys.readouterr().out
    assert excinfo.value.code == 0
    assert "Info: Product data downloaded successfully." in out
    assert out.strip().endswith("Successfully mapped 2 products.")


def test_cli_output_json(tmp_path, capsys, sample_xml_payload):
    feed = tmp_path / "feed.xml"
    feed.write_bytes(sample_xml_payload)

    with pytest.raises(SystemExit):
        cli.main(["xml", "--file", str(feed), "--quiet-products", "--output-json"])

    out = capsys.readouterr().out
    products = json.loads(out[out.index("["):])
    assert products[0]["id"] == "X1"
    assert products[0]["sales_price"] == {"currency": "USD", "amount": "19.99"}


def test_cli_failure_exit_code(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["text", "--file", str(tmp_path / "missing.txt")])

    assert excinfo.value.code == 1
    assert "Warning: HTTP request error: Could not read" in capsys.readouterr().out


def test_cli_leaves_no_files_behind(tmp_path, monkeypatch, capsys, sample_text_payload):
    """Products only ever go to stdout."""
    feed = tmp_path / "raw.txt"
    feed.write_text(sample_text_payload)
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["text", "--file", str(feed), "--output-json"])

    assert excinfo.value.code == 0
    assert [p.name for p in tmp_path.iterdir()] == ["raw.txt"]
    out = capsys.readouterr().out
    assert json.loads(out[out.index("["):])[0]["id"] == "P2"


def test_cli_rejects_save_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["text", "--save"])

    assert excinfo.value.code == 2
    assert "unrecognized arguments: --save" in capsys.readouterr().err
