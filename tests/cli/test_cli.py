from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import yaml

from fileconf.cli import main
from fileconf.utils.io import load_file_to_map


def test_cli_show_json_output(tmp_path: Path, capsys) -> None:
    src = tmp_path / "api.yaml"
    src.write_text("openapi: 3.0.0\ninfo:\n  title: Merchant API\n", encoding="utf-8")
    rc = main(["show", str(src)])
    assert rc == 0
    out = capsys.readouterr().out
    assert json.loads(out) == {"openapi": "3.0.0", "info": {"title": "Merchant API"}}


def test_cli_show_yaml_output(tmp_path: Path, capsys) -> None:
    src = tmp_path / "conf.json"
    src.write_text('{"name": "John", "version": 1}', encoding="utf-8")
    rc = main(["show", str(src), "--format", "yaml"])
    assert rc == 0
    assert yaml.safe_load(capsys.readouterr().out) == {"name": "John", "version": 1}


def test_cli_convert_yaml_to_json(tmp_path: Path) -> None:
    src = tmp_path / "in.yml"
    src.write_text("key1: value1\nkey2:\n  nestedKey: nestedValue\n", encoding="utf-8")
    dst = tmp_path / "out" / "result.json"
    log = tmp_path / "events.jsonl"
    rc = main(["--log", str(log), "convert", str(src), str(dst)])
    assert rc == 0
    assert load_file_to_map(dst) == {"key1": "value1", "key2": {"nestedKey": "nestedValue"}}
    events = [json.loads(line)["event"] for line in log.read_text(encoding="utf-8").splitlines()]
    assert events == ["load", "write"]


def test_cli_reports_errors_with_exit_code(tmp_path: Path, capsys) -> None:
    src = tmp_path / "conf.yaml"
    src.write_text("key: value\n", encoding="utf-8")
    log = tmp_path / "events.jsonl"
    rc = main(["--log", str(log), "convert", str(src), str(tmp_path / "out.txt")])
    assert rc == 2
    assert "Unsupported file format" in capsys.readouterr().err
    events = [json.loads(line)["event"] for line in log.read_text(encoding="utf-8").splitlines()]
    assert events == ["load", "error"]


def test_cli_missing_file(capsys) -> None:
    rc = main(["show", "/path/to/nonexistent/file.json"])
    assert rc == 2
    assert "Nonexisting file path provided" in capsys.readouterr().err


def test_cli_module_help_exits_zero() -> None:
    src = Path(__file__).resolve().parents[2] / "src"
    env = {**os.environ, "PYTHONPATH": os.pathsep.join([str(src), os.environ.get("PYTHONPATH", "")])}
    out = subprocess.run(
        [sys.executable, "-m", "fileconf", "--help"], capture_output=True, env=env
    )
    assert out.returncode == 0
    assert b"JSON/YAML configuration files" in out.stdout + out.stderr


def test_cli_convert_yaml_with_dates_and_numeric_keys(tmp_path: Path) -> None:
    src = tmp_path / "api.yaml"
    src.write_text(
        "released: 2024-01-01\nresponses:\n  200:\n    description: OK\n", encoding="utf-8"
    )
    dst = tmp_path / "api.json"
    rc = main(["convert", str(src), str(dst)])
    assert rc == 0
    assert json.loads(dst.read_text(encoding="utf-8")) == {
        "released": "2024-01-01",
        "responses": {"200": {"description": "OK"}},
    }
