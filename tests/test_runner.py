from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from asf_lint.diagnostics import MISSING_SEMICOLON_MSG
from asf_lint.runner import _load_source, check, main


def test_literal_source_with_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["let x = 1"]) == 1

    out = capsys.readouterr().out.strip()
    assert out == f"<source>:1:9: error: {MISSING_SEMICOLON_MSG} [missing-semicolon]"


def test_clean_source_prints_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["let x = 1;"]) == 0
    assert capsys.readouterr().out == ""


def test_file_argument(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "demo.asf"
    path.write_text("let arr = [1; 2];\n", encoding="utf-8")

    assert main([str(path)]) == 1

    out = capsys.readouterr().out
    assert out.startswith(f"{path}:1:13: error: Unexpected ';' inside array elements.")


def test_json_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "demo.asf"
    path.write_text("print(x)\n", encoding="utf-8")

    assert main(["--json", str(path)]) == 1

    payload = json.loads(capsys.readouterr().out)
    assert payload == [
        {
            "range": {"startLine": 1, "startColumn": 8, "endLine": 1, "endColumn": 9},
            "message": MISSING_SEMICOLON_MSG,
            "severity": "error",
            "source": "ASF",
            "code": "missing-semicolon",
            "file": str(path),
        }
    ]


def test_json_output_when_clean(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--json", "let x = 1;"]) == 0
    assert json.loads(capsys.readouterr().out) == []


def test_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("let x = 1"))

    assert main([]) == 1
    assert capsys.readouterr().out.startswith("<stdin>:1:9:")


def test_load_source_dash_reads_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("x;"))
    assert _load_source("-") == ("<stdin>", "x;")


def test_multiple_sources_keep_order() -> None:
    results = check([("a", "let x = 1"), ("b", "let y = [1; 2];"), ("c", "ok;")])
    assert [(name, diag.code) for name, diag in results] == [
        ("a", "missing-semicolon"),
        ("b", "unexpected-semicolon"),
    ]


def test_unknown_flag() -> None:
    with pytest.raises(SystemExit):
        main(["--nope"])
