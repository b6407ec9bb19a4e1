"""
Main Entry Point for the blazorgen CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `blazorgen.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from blazorgen import __version__
from blazorgen.cli import commands
from blazorgen.config import parse_cli_key_values


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="blazorgen: SetParametersAsync generator and render-tree key analyzer")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: GENERATE ---
  cmd_gen = subparsers.add_parser("generate", help="Run both passes on a compilation snapshot")
  cmd_gen.add_argument("snapshot", type=Path, help="JSON compilation snapshot")
  cmd_gen.add_argument("--out", type=Path, default=None, help="Directory receiving the generated .cs files")
  cmd_gen.add_argument("--json", action="store_true", help="Print the result as JSON")
  cmd_gen.add_argument(
    "--config",
    nargs="*",
    help="Configuration overrides in key=value format (e.g. max_inline_depth=2 builder_markers=builder,b)",
  )

  # --- Command: ANALYZE ---
  cmd_an = subparsers.add_parser("analyze", help="Run only the render-tree key analyzer")
  cmd_an.add_argument("snapshot", type=Path, help="JSON compilation snapshot")
  cmd_an.add_argument("--json", action="store_true", help="Print the result as JSON")
  cmd_an.add_argument("--config", nargs="*", help="Configuration overrides in key=value format")

  args = parser.parse_args(argv)
  settings = parse_cli_key_values(args.config)

  if args.command == "generate":
    return commands.handle_generate(args.snapshot, args.out, args.json, settings)

  elif args.command == "analyze":
    return commands.handle_analyze(args.snapshot, args.json, settings)

  return 0


if __name__ == "__main__":
  sys.exit(main())
