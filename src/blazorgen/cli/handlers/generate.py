"""
Generate Command Handler.

Implements ``blazorgen generate``:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Snapshot loading and validation.
3. Both generator passes via the Engine.
4. Artifact writing and diagnostic reporting.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from rich.markup import escape

from blazorgen.cli.handlers.report import print_diagnostics, print_json, write_artifacts
from blazorgen.config import GeneratorConfig
from blazorgen.core.engine import GenerationResult, GeneratorEngine
from blazorgen.errors import SnapshotError
from blazorgen.model.loader import load_snapshot
from blazorgen.utils.console import log_error, use_stderr


def run_engine(snapshot_path: Path, settings: Dict[str, Any]) -> Optional[GenerationResult]:
  """
  Loads configuration and snapshot, then runs the engine.

  Failures are logged; nothing is raised.

  Args:
      snapshot_path: Path to the JSON snapshot.
      settings: CLI configuration overrides.

  Returns:
      The result, or None if configuration or snapshot loading failed.
  """
  if not snapshot_path.exists():
    log_error(f"Snapshot not found: {snapshot_path}")
    return None

  try:
    config = GeneratorConfig.load(overrides=settings, search_path=snapshot_path.resolve().parent)
  except ValueError as e:
    log_error(escape(str(e)))
    return None

  try:
    compilation = load_snapshot(snapshot_path)
  except SnapshotError as e:
    log_error(escape(str(e)))
    return None

  return GeneratorEngine(config=config).run(compilation)


def handle_generate(
  snapshot_path: Path,
  out_dir: Optional[Path],
  json_mode: bool,
  settings: Dict[str, Any],
) -> int:
  """
  Handles the 'generate' command execution.

  Args:
      snapshot_path: Path to the JSON snapshot.
      out_dir: Directory receiving ``.cs`` files; names are only listed when None.
      json_mode: If True, print the result as JSON instead of tables.
      settings: CLI configuration overrides.

  Returns:
      int: Exit code (1 if loading failed or an error diagnostic was reported).
  """
  if json_mode:
    use_stderr()

  result = run_engine(snapshot_path, settings)
  if result is None:
    return 1

  write_artifacts(result, out_dir)

  if json_mode:
    # Sources already on disk are not repeated in the payload.
    print_json(result, include_content=out_dir is None)
  else:
    print_diagnostics(result, f"Generation Summary for {snapshot_path.name}")

  return 0 if result.success else 1
