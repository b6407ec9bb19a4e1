"""
Analyze Command Handler.

Implements ``blazorgen analyze``: runs the render-tree key analyzer alone,
without emitting any artifact.
"""

from pathlib import Path
from typing import Any, Dict

from blazorgen.cli.handlers.generate import run_engine
from blazorgen.cli.handlers.report import print_diagnostics, print_json
from blazorgen.utils.console import use_stderr


def handle_analyze(snapshot_path: Path, json_mode: bool, settings: Dict[str, Any]) -> int:
  """
  Handles the 'analyze' command execution.

  Args:
      snapshot_path: Path to the JSON snapshot.
      json_mode: If True, print the result as JSON instead of tables.
      settings: CLI configuration overrides.

  Returns:
      int: Exit code (1 if loading failed or an error diagnostic was reported).
  """
  if json_mode:
    use_stderr()

  overrides = {**settings, "generate_dispatch": False, "analyze_keys": True}
  result = run_engine(snapshot_path, overrides)
  if result is None:
    return 1

  if json_mode:
    print_json(result)
  else:
    print_diagnostics(result, f"Key Analysis Summary for {snapshot_path.name}")

  return 0 if result.success else 1
