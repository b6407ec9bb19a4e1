"""
CLI Command Handlers Facade.

Re-exports the handlers from `blazorgen.cli.handlers` so the entry point
dispatches through a single module (and tests patch a single target).
"""

from blazorgen.cli.handlers.analyze import handle_analyze
from blazorgen.cli.handlers.generate import handle_generate

__all__ = [
  "handle_analyze",
  "handle_generate",
]
