from __future__ import annotations

import gzip
import json
from pathlib import Path

import pytest

from p2000_viewer.cli import EXIT_FAILURE, EXIT_OK, main


def test_cli_list(tmp_path: Path, write_sample_log, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "p2000.log"
    write_sample_log(path)

    assert main([str(path), "--list"]) == EXIT_OK

    out = capsys.readouterr().out
    assert "[P2] BDH-07 -: Ongeval (los object) Gangetje Leiden 169252" in out
    assert "Found 5 matching messages." in out


def test_cli_json_with_priority_filter(
    tmp_path: Path, write_sample_log, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "p2000.log"
    write_sample_log(path)

    assert main([str(path), "--json", "--priority", "a1"]) == EXIT_OK

    doc = json.loads(capsys.readouterr().out)
    assert doc["count"] == 2
    assert [m["line_no"] for m in doc["messages"]] == [2, 8]


def test_cli_search_and_hour_window(
    tmp_path: Path, write_sample_log, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "p2000.log"
    write_sample_log(path)

    assert main([str(path), "--json", "--search", "RIT", "--hour", "2026-01-01T20"]) == EXIT_OK

    doc = json.loads(capsys.readouterr().out)
    assert [m["line_no"] for m in doc["messages"]] == [2]


def test_cli_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "missing.log"

    assert main([str(path), "--list"]) == EXIT_FAILURE

    assert "missing.log" in capsys.readouterr().err


def test_cli_invalid_window(tmp_path: Path, write_sample_log, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "p2000.log"
    write_sample_log(path)

    assert main([str(path), "--list", "--hour", "yesterday"]) == EXIT_FAILURE
    assert "Error:" in capsys.readouterr().err


def test_cli_invalid_priority_exits() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["x.log", "--priority", "P9"])
    assert excinfo.value.code == 2


def test_cli_empty_input_has_nothing_to_display(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "empty.log"
    path.write_text("\n# nothing\n", encoding="utf-8")

    assert main([str(path)]) == EXIT_OK
    assert "No messages to display" in capsys.readouterr().err


def test_cli_truncated_gzip(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "p2000.log.gz"
    line = "FLEX|2026-01-01 20:14:32|1600/2/K/A|03.091|000120901|ALN|A1 Dam Amsterdam rit {n}\n"
    data = gzip.compress("".join(line.format(n=i) for i in range(2000)).encode("utf-8"))
    path.write_bytes(data[: len(data) // 2])

    assert main([str(path), "--list"]) == EXIT_FAILURE
    assert f"Failed to read {path}" in capsys.readouterr().err
