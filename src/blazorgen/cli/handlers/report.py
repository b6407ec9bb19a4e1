"""
Result Reporting Helpers.

Shared rendering for the ``generate`` and ``analyze`` commands: a Rich
diagnostics table, a summary, JSON output, and artifact writing.
"""

import json
from pathlib import Path
from typing import Optional

from rich.table import Table

from blazorgen.core.engine import GenerationResult
from blazorgen.enums import Severity
from blazorgen.utils.console import console, log_info, log_success

_SEVERITY_STYLES = {
  Severity.ERROR: "error",
  Severity.WARNING: "warning",
  Severity.INFO: "info",
}


def print_json(result: GenerationResult, include_content: bool = True) -> None:
  """
  Prints the result as pure JSON on stdout.

  Args:
      result: The generation result.
      include_content: If False, artifact texts are omitted (names only).
  """
  payload = result.model_dump(mode="json")
  if not include_content:
    payload["artifacts"] = [{"name": a["name"]} for a in payload["artifacts"]]
  print(json.dumps(payload, indent=2))


def print_diagnostics(result: GenerationResult, title: str) -> None:
  """
  Renders diagnostics as a table followed by summary counts.

  Args:
      result: The generation result.
      title: Summary heading.
  """
  if result.diagnostics:
    table = Table(title="Diagnostics")
    table.add_column("Id", style="code")
    table.add_column("Severity")
    table.add_column("Location", style="path")
    table.add_column("Message")

    for diagnostic in result.diagnostics:
      style = _SEVERITY_STYLES.get(diagnostic.severity, "")
      table.add_row(
        diagnostic.id,
        f"[{style}]{diagnostic.severity.value}[/{style}]",
        str(diagnostic.location),
        diagnostic.message,
      )
    console.print(table)

  console.print(f"[bold]{title}[/bold]")
  console.print(f"Artifacts:  {len(result.artifacts)}")
  console.print(f"Errors:     [red]{len(result.errors)}[/red]")
  console.print(f"Warnings:   [yellow]{len(result.warnings)}[/yellow]")


def write_artifacts(result: GenerationResult, out_dir: Optional[Path]) -> int:
  """
  Writes each artifact as ``<name>.cs``, or lists the names when no directory is given.

  Args:
      result: The generation result.
      out_dir: Destination directory (created if missing).

  Returns:
      int: Number of files written.
  """
  if out_dir is None:
    for artifact in result.artifacts:
      log_info(f"Generated [path]{artifact.filename}[/path]")
    return 0

  out_dir.mkdir(parents=True, exist_ok=True)
  for artifact in result.artifacts:
    (out_dir / artifact.filename).write_text(artifact.content, encoding="utf-8")
  log_success(f"Wrote {len(result.artifacts)} files to [path]{out_dir}[/path]")
  return len(result.artifacts)
