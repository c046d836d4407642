"""Driver and command-line tests."""

import io

import pytest

import tinyrd
from driver import SourceChecker
from my_types import VarType

PROGRAM = """begin
  total := 0;
  for (i := 1; i <= 10; i := i + 1) do
    total := total + i
  end loop;
  msg := "done"
end
"""

BAD_PROGRAM = """begin
  msg := "done";
  half := msg / 2
end
"""


@pytest.fixture
def program_file(tmp_path):
    path = tmp_path / "sum.txt"
    path.write_text(PROGRAM, encoding="utf-8")
    return path


@pytest.fixture
def bad_file(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text(BAD_PROGRAM, encoding="utf-8")
    return path


def test_check_file_uses_file_name(program_file):
    checker = SourceChecker()
    result = checker.check_file(program_file)
    assert result.ok
    assert {v.identifier: v.type for v in result.variables} == {
        "total": VarType.NUMBER,
        "msg": VarType.STRING,
    }
    assert checker.recorder.is_well_nested()


def test_check_file_diagnostic_names_source(bad_file):
    result = SourceChecker().check_file(bad_file)
    assert not result.ok
    assert result.diagnostic.line == 3
    assert result.diagnostic.message == "line 3 in bad.txt: Invalid operation '/' on string variable: msg"


def test_source_name_from_config(bad_file):
    result = SourceChecker({"source_name": "main.prog"}).check_file(bad_file)
    assert result.diagnostic.message.startswith("line 3 in main.prog:")


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        SourceChecker().check_file(tmp_path / "missing.txt")


def test_trace_and_tree_output():
    out = io.StringIO()
    checker = SourceChecker({"trace": True, "tree": True, "output": out})
    result = checker.check_source("begin x := 1 end", "inline")
    assert result.ok
    text = out.getvalue()
    assert "rggBEGIN StatementPart" in text
    assert "rggSUCCESS" in text
    assert "/* declare x: Number */" in text


def test_quiet_by_default():
    out = io.StringIO()
    SourceChecker({"output": out}).check_source("begin x := 1 end")
    assert out.getvalue() == ""


# ==================== 命令行 ====================

def test_cli_success(program_file, capsys):
    assert tinyrd.main([str(program_file)]) == 0
    out = capsys.readouterr().out
    assert "✓" in out
    assert "total: Number" in out
    assert "msg: String" in out


def test_cli_failure(bad_file, capsys):
    assert tinyrd.main([str(bad_file)]) == 1
    out = capsys.readouterr().out
    assert "line 3 in bad.txt: Invalid operation '/' on string variable: msg" in out


def test_cli_trace_mode(program_file, capsys):
    assert tinyrd.main([str(program_file), "trace"]) == 0
    out = capsys.readouterr().out
    assert "rggDECL total Number" in out
    assert "rggDECL i Number" in out


def test_cli_usage(capsys):
    assert tinyrd.main([]) == 1
    assert "用法" in capsys.readouterr().out


def test_cli_unknown_mode(program_file, capsys):
    assert tinyrd.main([str(program_file), "loud"]) == 1
    assert "loud" in capsys.readouterr().out


def test_cli_missing_file(tmp_path, capsys):
    assert tinyrd.main([str(tmp_path / "nope.txt")]) == 1
    assert "nope.txt" in capsys.readouterr().out
