"""
Snapshot File Loading.

Reads a JSON compilation snapshot from disk and validates it against the
pydantic schema.
"""

import json
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from blazorgen.errors import SnapshotError
from blazorgen.model.compilation import Compilation, CompilationSnapshot


def parse_snapshot(data: Dict[str, Any]) -> Compilation:
  """
  Validates raw snapshot data and wraps it in a provider.

  Args:
      data: Decoded JSON content.

  Returns:
      Compilation: The indexed provider.

  Raises:
      SnapshotError: If the data does not match the schema.
  """
  try:
    snapshot = CompilationSnapshot.model_validate(data)
  except ValidationError as e:
    raise SnapshotError(f"Invalid compilation snapshot: {e}") from e
  return Compilation(snapshot)


def load_snapshot(path: Path) -> Compilation:
  """
  Loads a compilation snapshot file.

  Args:
      path: Path to a JSON snapshot.

  Returns:
      Compilation: The indexed provider.

  Raises:
      SnapshotError: If the file is missing, not JSON, or fails validation.
  """
  try:
    with open(path, "r", encoding="utf-8") as f:
      content = json.load(f)
  except OSError as e:
    raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e
  except json.JSONDecodeError as e:
    raise SnapshotError(f"Snapshot {path} is not valid JSON: {e}") from e

  if not isinstance(content, dict):
    raise SnapshotError(f"Snapshot {path} must contain a JSON object at the top level.")

  return parse_snapshot(content)
