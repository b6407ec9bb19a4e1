"""
Compilation Snapshot Model.

The symbol/tree provider consumed by the generator passes.

Modules:
    - ``symbols``: Resolved types, properties, attributes and locations.
    - ``syntax``: Declarations, statements and expressions.
    - ``compilation``: The snapshot root and the in-memory provider.
    - ``loader``: JSON file loading and validation.
"""

from blazorgen.model.compilation import Compilation, CompilationSnapshot, SymbolProvider
from blazorgen.model.loader import load_snapshot, parse_snapshot

__all__ = [
  "Compilation",
  "CompilationSnapshot",
  "SymbolProvider",
  "load_snapshot",
  "parse_snapshot",
]
