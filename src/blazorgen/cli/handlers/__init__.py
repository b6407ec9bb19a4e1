from .analyze import handle_analyze
from .generate import handle_generate, run_engine

__all__ = [
  "handle_analyze",
  "handle_generate",
  "run_engine",
]
