from __future__ import annotations

import json
import logging

from propman import cli

TEXT = "# sample\ntimeout = 30\nstatic field Config.Name = a\\nb\n"


def test_show(write_props, capsys):
    path = write_props(TEXT)
    assert cli.main(["show", str(path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["timeout = 30", "static field Config.Name = a\\nb"]


def test_show_json(write_props, capsys):
    path = write_props(TEXT)
    assert cli.main(["show", str(path), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data[0] == {
        "path": "timeout",
        "kind": "int",
        "value": 30,
        "is_static": False,
        "is_field": False,
    }
    assert data[1]["is_static"] and data[1]["is_field"]


def test_get(write_props, capsys):
    path = write_props(TEXT)
    assert cli.main(["get", str(path), "timeout", "--type", "int"]) == 0
    assert capsys.readouterr().out.strip() == "30"


def test_get_type_mismatch(write_props, capsys):
    path = write_props(TEXT)
    assert cli.main(["get", str(path), "timeout", "--type", "bool"]) == 1
    assert "propman:" in capsys.readouterr().err


def test_get_missing_key(write_props, capsys):
    assert cli.main(["get", str(write_props(TEXT)), "missing"]) == 1
    assert "missing" in capsys.readouterr().err


def test_set_then_get(write_props, capsys):
    path = write_props(TEXT)
    assert cli.main(["set", str(path), "timeout", "60"]) == 0
    assert path.read_text(encoding="utf-8") == TEXT.replace("30", "60")
    assert cli.main(["get", str(path), "timeout"]) == 0
    assert capsys.readouterr().out.strip() == "60"


def test_set_wrong_kind(write_props):
    path = write_props(TEXT)
    assert cli.main(["set", str(path), "timeout", "soon"]) == 1
    assert path.read_text(encoding="utf-8") == TEXT


def test_unknown_store(tmp_path, capsys):
    assert cli.main(["show", str(tmp_path / "settings.xml")]) == 1
    assert cli.main(["show", str(tmp_path / "absent.properties")]) == 1


def test_comment_sign_option(write_props, capsys):
    path = write_props("; note\nx = 1\n")
    assert cli.main(["show", str(path), "--comment-sign", ";"]) == 0
    assert capsys.readouterr().out.strip() == "x = 1"


def test_debug_env_adds_handler(monkeypatch):
    logger = logging.getLogger("propman")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "level", logging.NOTSET)
    monkeypatch.setenv(cli.DEBUG_ENV, "1")
    cli._enable_debug_logging()
    assert logger.handlers
    assert logger.level == logging.DEBUG


def test_set_reads_value_as_stored_kind(write_props, capsys):
    path = write_props("ratio = 0.5\n")
    assert cli.main(["set", str(path), "ratio", "5"]) == 0
    assert path.read_text(encoding="utf-8") == "ratio = 5.0\n"
    assert cli.main(["get", str(path), "ratio", "--type", "float"]) == 0
    assert capsys.readouterr().out.strip() == "5.0"
