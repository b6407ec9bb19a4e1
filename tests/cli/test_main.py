"""
Tests for the CLI Entry Point.

Verifies:
1. Argument parsing dispatches to the command facade.
2. `generate` writes artifacts and exits non-zero on error diagnostics.
3. `--json` emits a parseable payload on stdout.
4. `analyze` runs the key analyzer only.
"""

import json
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from blazorgen import __version__
from blazorgen.cli.__main__ import main


@pytest.fixture
def snapshot_copy(tmp_path, fixtures_dir):
  """Copies a fixture into tmp_path, away from the repository pyproject.toml."""

  def _copy(name: str) -> Path:
    target = tmp_path / name
    shutil.copy(fixtures_dir / name, target)
    return target

  return _copy


@patch("blazorgen.cli.commands.handle_generate")
def test_generate_arguments(mock_handle):
  mock_handle.return_value = 0
  assert main(["generate", "snap.json", "--out", "gen", "--config", "max_inline_depth=2"]) == 0

  args = mock_handle.call_args[0]
  assert args[0] == Path("snap.json")
  assert args[1] == Path("gen")
  assert args[2] is False
  assert args[3] == {"max_inline_depth": 2}


@patch("blazorgen.cli.commands.handle_analyze")
def test_analyze_arguments(mock_handle):
  mock_handle.return_value = 0
  main(["analyze", "snap.json", "--json"])

  args = mock_handle.call_args[0]
  assert args[0] == Path("snap.json")
  assert args[1] is True
  assert args[2] == {}


def test_version(capsys):
  with pytest.raises(SystemExit) as exc:
    main(["--version"])
  assert exc.value.code == 0
  assert __version__ in capsys.readouterr().out


def test_generate_writes_files(snapshot_copy, tmp_path, recording_console, golden):
  snapshot = snapshot_copy("positive.json")
  out_dir = tmp_path / "generated"

  assert main(["generate", str(snapshot), "--out", str(out_dir)]) == 0

  written = sorted(p.name for p in out_dir.iterdir())
  assert written == [
    "GenerateSetParametersAsyncAttribute.cs",
    "Testing.Positive.Component_implementation.cs",
    "Testing.Positive.Component_override.cs",
  ]
  golden.assert_match(
    "Testing.Positive.Component_override.cs",
    (out_dir / "Testing.Positive.Component_override.cs").read_text(encoding="utf-8"),
  )
  assert "Generation Summary" in recording_console.export_text()


def test_generate_reports_conflicts(snapshot_copy, recording_console):
  snapshot = snapshot_copy("conflicts.json")

  assert main(["generate", str(snapshot)]) == 1

  output = recording_console.export_text()
  assert "BB0001" in output
  assert "Title conflicts with title" in output


def test_generate_json(snapshot_copy, capsys):
  snapshot = snapshot_copy("conflicts.json")

  exit_code = main(["generate", str(snapshot), "--json"])
  payload = json.loads(capsys.readouterr().out)

  assert exit_code == 1
  assert payload["success"] is False
  assert [d["id"] for d in payload["diagnostics"]] == ["BB0001", "BB0001"]
  assert payload["diagnostics"][0]["severity"] == "error"
  assert "switch (name)" in payload["artifacts"][2]["content"]


def test_generate_json_with_out_omits_content(snapshot_copy, tmp_path, capsys):
  snapshot = snapshot_copy("positive.json")
  out_dir = tmp_path / "out"

  assert main(["generate", str(snapshot), "--json", "--out", str(out_dir)]) == 0
  payload = json.loads(capsys.readouterr().out)

  assert payload["artifacts"][0] == {"name": "GenerateSetParametersAsyncAttribute"}
  assert (out_dir / "GenerateSetParametersAsyncAttribute.cs").exists()


def test_analyze_json(snapshot_copy, capsys):
  snapshot = snapshot_copy("render_loops.json")

  assert main(["analyze", str(snapshot), "--json"]) == 0
  payload = json.loads(capsys.readouterr().out)

  assert payload["artifacts"] == []
  assert [d["locations"][0]["line"] for d in payload["diagnostics"]] == [20, 30, 50]
  assert {d["id"] for d in payload["diagnostics"]} == {"BB0003"}


def test_analyze_respects_config_override(snapshot_copy, capsys):
  snapshot = snapshot_copy("render_loops.json")

  main(["analyze", str(snapshot), "--json", "--config", "max_inline_depth=0"])
  payload = json.loads(capsys.readouterr().out)

  assert [d["locations"][0]["line"] for d in payload["diagnostics"]] == [20, 50]


def test_missing_snapshot(tmp_path, recording_console):
  assert main(["generate", str(tmp_path / "nope.json")]) == 1
  assert "Snapshot not found" in recording_console.export_text()


def test_invalid_snapshot(tmp_path, recording_console):
  bad = tmp_path / "bad.json"
  bad.write_text('{"types": [{"kind": "class"}]}', encoding="utf-8")

  assert main(["analyze", str(bad)]) == 1
  assert "Invalid compilation snapshot" in recording_console.export_text()


def test_invalid_config(snapshot_copy, recording_console):
  snapshot = snapshot_copy("positive.json")
  assert main(["generate", str(snapshot), "--config", "max_inline_depth=-2"]) == 1
  assert "validation failed" in recording_console.export_text()
