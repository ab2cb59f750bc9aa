"""
Integration Tests for the CLI entry point.

Verifies:
1. `check` on files and directories, in table and JSON mode.
2. Level and `--config` overrides reaching the engine.
3. Keyword, search, rules, platform and keyboard commands.
"""

import json

import pytest
from rich.console import Console

from qb_lint import __version__
from qb_lint.cli.__main__ import main
from qb_lint.cli.handlers.check import collect_source_files, read_source
from qb_lint.utils.console import get_console, set_console


@pytest.fixture
def recorder():
  """Routes console and log output into a wide in-memory console."""
  capture = Console(record=True, width=300)
  set_console(capture)
  return capture


@pytest.fixture
def write_source(tmp_path):
  def _write(name, code):
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(code, encoding="utf-8")
    return path

  return _write


def test_check_valid_file(write_source, recorder):
  path = write_source("ok.bas", "SUB Foo\nPRINT 1\nEND SUB\n")

  assert main(["check", str(path)]) == 0

  output = recorder.export_text()
  assert "valid, score 100/100" in output
  assert "All 1 file(s) passed." in output


def test_check_invalid_file(write_source, recorder):
  path = write_source("bad.bas", "FOR i = 1 TO 10\nPRINT i\n")

  assert main(["check", str(path)]) == 1

  output = recorder.export_text()
  assert "Unclosed FOR loop" in output
  assert "invalid" in output


def test_check_json_output(write_source, capsys):
  path = write_source("cfg.bas", "$CONSOLE:OFF\n")

  assert main(["check", str(path), "--json"]) == 1

  payload = json.loads(capsys.readouterr().out)
  assert len(payload) == 1
  assert payload[0]["file"] == str(path)
  report = payload[0]["report"]
  assert report["is_valid"] is False
  assert report["compatibility_issues"][0]["category"] == "console_directives"


def test_check_json_keeps_warnings_off_stdout(tmp_path, capsys):
  path = tmp_path / "dos.bas"
  path.write_bytes(b'PRINT "caf\xe9"\n')

  assert main(["check", str(path), "--json"]) == 0

  captured = capsys.readouterr()
  payload = json.loads(captured.out)
  assert payload[0]["report"]["is_valid"] is True
  assert "Latin-1" in captured.err


def test_check_json_with_data_load_warning(write_source, tmp_path, capsys):
  path = write_source("ok.bas", "PRINT 1\n")
  missing = tmp_path / "missing-keywords.json"

  main(["check", str(path), "--json", "--config", f"keywords_path={missing}"])

  captured = capsys.readouterr()
  assert json.loads(captured.out)[0]["file"] == str(path)
  assert "disabled" in captured.err


def test_check_json_empty_directory(tmp_path, capsys):
  assert main(["check", str(tmp_path), "--json"]) == 0
  assert json.loads(capsys.readouterr().out) == []


def test_check_json_restores_console(write_source, recorder):
  path = write_source("ok.bas", "PRINT 1\n")

  main(["check", str(path), "--json"])

  assert get_console() is recorder


def test_check_level_option(write_source, capsys):
  path = write_source("menu.bas", "GOSUB Menu\nEND\nMenu:\nRETURN\n")

  main(["check", str(path), "--json", "--level", "strict"])

  report = json.loads(capsys.readouterr().out)[0]["report"]
  assert report["check_level"] == "strict"
  assert any(w["rule"] == "deprecated-construct" for w in report["warnings"])


def test_check_config_overrides(write_source, recorder):
  path = write_source("cfg.bas", "$CONSOLE:OFF\n")
  assert main(["check", str(path), "--config", "disabled_rules=console_directives"]) == 0


def test_check_invalid_config(write_source, recorder):
  path = write_source("ok.bas", "PRINT 1\n")

  assert main(["check", str(path), "--config", "max_line_length=0"]) == 1
  assert "Invalid configuration" in recorder.export_text()


def test_check_pyproject_settings(tmp_path, write_source, capsys):
  (tmp_path / "pyproject.toml").write_text('[tool.qb_lint]\ncheck_level = "best-practices"\n', encoding="utf-8")
  path = write_source("prog.bas", "PRINT 12345\n")

  main(["check", str(path), "--json"])

  report = json.loads(capsys.readouterr().out)[0]["report"]
  assert report["check_level"] == "best-practices"
  assert any(w["rule"] == "magic-number" for w in report["warnings"])


def test_check_directory(tmp_path, write_source, capsys):
  write_source("main.bas", "PRINT 1\n")
  write_source("lib/util.BM", "SUB Helper\nEND SUB\n")
  write_source("lib/broken.bi", "DO\n")
  write_source("notes.txt", "FOR\n")

  assert main(["check", str(tmp_path), "--json"]) == 1

  payload = json.loads(capsys.readouterr().out)
  files = [entry["file"] for entry in payload]
  assert files == [str(tmp_path / "lib" / "broken.bi"), str(tmp_path / "lib" / "util.BM"), str(tmp_path / "main.bas")]


def test_check_missing_path(tmp_path, recorder):
  assert main(["check", str(tmp_path / "nope.bas")]) == 1
  assert "Path not found" in recorder.export_text()


def test_check_empty_directory(tmp_path, recorder):
  assert main(["check", str(tmp_path)]) == 0
  assert "No QB64PE source files found" in recorder.export_text()


def test_check_empty_file_is_valid(write_source, recorder):
  path = write_source("empty.bas", "")
  assert main(["check", str(path)]) == 0


def test_collect_source_files(tmp_path, write_source):
  single = write_source("odd.txt", "PRINT 1")
  assert collect_source_files(single) == [single]

  write_source("b.bas", "")
  write_source("a/c.bi", "")
  assert collect_source_files(tmp_path) == [tmp_path / "a" / "c.bi", tmp_path / "b.bas"]


def test_read_source_latin1_fallback(tmp_path, recorder):
  path = tmp_path / "dos.bas"
  path.write_bytes(b'PRINT "caf\xe9"\n')

  assert read_source(path) == 'PRINT "café"\n'
  assert "decoding as Latin-1" in recorder.export_text()


def test_keyword_lookup(recorder):
  assert main(["keyword", "_keyhit"]) == 0
  output = recorder.export_text()
  assert "_KEYHIT" in output
  assert "QB64" in output


def test_keyword_unknown(recorder):
  assert main(["keyword", "_KEYHI"]) == 1
  output = recorder.export_text()
  assert "Unknown keyword" in output
  assert "Did you mean" in output
  assert "_KEYHIT" in output


def test_keyword_deprecated_warns(recorder):
  assert main(["keyword", "TRON"]) == 0
  assert "TRON is deprecated" in recorder.export_text()


def test_search(recorder):
  assert main(["search", "_KEY", "--limit", "3"]) == 0
  assert "Keywords matching '_KEY'" in recorder.export_text()


def test_search_without_results(recorder):
  assert main(["search", "zzqqxx"]) == 1


def test_rules_listing(recorder):
  assert main(["rules"]) == 0
  output = recorder.export_text()
  assert "function_return_types" in output
  assert "Best practices" in output


def test_rules_query(recorder):
  assert main(["rules", "--query", "console"]) == 0
  assert "Console Mode Directives" in recorder.export_text()

  assert main(["rules", "--query", "zzqqxx"]) == 1


def test_platform(recorder):
  assert main(["platform", "linux"]) == 0
  output = recorder.export_text()
  assert "linux" in output
  assert "LPRINT" in output


def test_keyboard_command(write_source, recorder):
  risky = write_source("keys.bas", "IF _KEYDOWN(27) THEN\n  EXIT SUB\nEND IF\n")
  safe = write_source("safe.bas", "k$ = INKEY$\n")

  assert main(["keyboard", str(risky)]) == 1
  assert "_KEYDOWN(27)" in recorder.export_text()
  assert main(["keyboard", str(safe)]) == 0


def test_keyboard_missing_file(tmp_path, recorder):
  assert main(["keyboard", str(tmp_path / "nope.bas")]) == 1
  assert "File not found" in recorder.export_text()


def test_invalid_level_is_rejected_by_argparse(write_source):
  path = write_source("ok.bas", "PRINT 1\n")
  with pytest.raises(SystemExit) as excinfo:
    main(["check", str(path), "--level", "pedantic"])
  assert excinfo.value.code == 2


def test_version(capsys):
  with pytest.raises(SystemExit):
    main(["--version"])
  assert __version__ in capsys.readouterr().out
