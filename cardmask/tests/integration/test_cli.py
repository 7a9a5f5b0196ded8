from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

pytest.importorskip("typer")


def _run_cli(
    *args: str, cwd: Path, input_data: bytes | None = None
) -> subprocess.CompletedProcess[bytes]:
    command = [sys.executable, "-m", "cardmask.cli", *args]
    env = os.environ.copy()
    module_root = Path(__file__).resolve().parents[2] / "src"
    env["PYTHONPATH"] = (
        f"{module_root}{os.pathsep}{env['PYTHONPATH']}"
        if env.get("PYTHONPATH")
        else str(module_root)
    )
    env["XDG_CONFIG_HOME"] = str(cwd / "xdg")
    return subprocess.run(
        command,
        check=False,
        input=input_data,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=cwd,
        env=env,
    )


def test_cli_reports_version(tmp_path: Path) -> None:
    result = _run_cli("version", cwd=tmp_path)
    assert result.returncode == 0
    assert result.stdout.decode("utf-8").strip() == "0.1.0"


def test_cli_filters_stdin_to_stdout(tmp_path: Path) -> None:
    result = _run_cli(
        "redact",
        cwd=tmp_path,
        input_data=b"card 4111-1111-1111-1111 ok\nref 12345\n",
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout == b"card XXXX-XXXX-XXXX-XXXX ok\nref 12345\n"


def test_cli_filters_file_to_file(tmp_path: Path) -> None:
    source = tmp_path / "in.txt"
    source.write_bytes(b"amex 378282246310005 end")
    target = tmp_path / "out.txt"
    result = _run_cli("redact", str(source), "-o", str(target), cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert result.stdout == b""
    assert target.read_bytes() == b"amex XXXXXXXXXXXXXXX end"


def test_cli_window_overrides(tmp_path: Path) -> None:
    result = _run_cli("redact", "--min-length", "2", "--max-length", "2", cwd=tmp_path, input_data=b"a18b")
    assert result.returncode == 0, result.stderr
    assert result.stdout == b"aXXb"


def test_cli_rejects_inverted_window(tmp_path: Path) -> None:
    result = _run_cli("redact", "--min-length", "5", "--max-length", "3", cwd=tmp_path, input_data=b"")
    assert result.returncode == 2
    assert b"Invalid window bounds" in result.stderr


def test_cli_reports_io_failure(tmp_path: Path) -> None:
    result = _run_cli("redact", str(tmp_path / "missing.txt"), cwd=tmp_path)
    assert result.returncode == 1
    assert b"cardmask:" in result.stderr


def test_cli_check(tmp_path: Path) -> None:
    valid = _run_cli("check", "4111 1111 1111 1111", cwd=tmp_path)
    assert valid.returncode == 0
    assert valid.stdout.decode("utf-8").strip() == "valid"
    invalid = _run_cli("check", "4111111111111112", cwd=tmp_path)
    assert invalid.returncode == 1
    assert invalid.stdout.decode("utf-8").strip() == "invalid"


def test_cli_config_round_trip(tmp_path: Path) -> None:
    target = tmp_path / "config.yaml"
    created = _run_cli("config-init", str(target), cwd=tmp_path)
    assert created.returncode == 0, created.stderr
    assert target.is_file()
    shown = _run_cli("--config", str(target), "config-show", cwd=tmp_path)
    assert shown.returncode == 0, shown.stderr
    payload = json.loads(shown.stdout.decode("utf-8"))
    assert payload["window"] == {"min_length": 14, "max_length": 16}


def test_cli_uses_configured_window(tmp_path: Path) -> None:
    target = tmp_path / "config.yaml"
    target.write_text("window:\n  min_length: 2\n  max_length: 3\n", encoding="utf-8")
    result = _run_cli("--config", str(target), "redact", cwd=tmp_path, input_data=b"x 1-8 y")
    assert result.returncode == 0, result.stderr
    assert result.stdout == b"x X-X y"


def test_cli_rejects_invalid_config(tmp_path: Path) -> None:
    target = tmp_path / "config.yaml"
    target.write_text("window:\n  min_length: 16\n  max_length: 14\n", encoding="utf-8")
    result = _run_cli("--config", str(target), "redact", cwd=tmp_path, input_data=b"")
    assert result.returncode == 2
    assert b"Invalid configuration" in result.stderr


def test_cli_logs_json_to_stderr(tmp_path: Path) -> None:
    target = tmp_path / "config.yaml"
    target.write_text("logging:\n  level: info\n", encoding="utf-8")
    result = _run_cli(
        "--config", str(target), "redact", cwd=tmp_path, input_data=b"4111111111111111\n"
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout == b"XXXXXXXXXXXXXXXX\n"
    records = [json.loads(line) for line in result.stderr.decode("utf-8").splitlines() if line.strip()]
    complete = [record for record in records if record["msg"] == "stream.complete"]
    assert complete
    assert complete[0]["windows_redacted"] == 1
    assert complete[0]["level"] == "info"
    assert "4111" not in result.stderr.decode("utf-8")
