"""
blazorgen Package.

Compile-time passes for Blazor-style component code:

- A ``SetParametersAsync`` generator that replaces reflection-based parameter
  assignment with a generated two-tier name dispatcher, and reports
  parameters whose names collide case-insensitively (``BB0001``).
- A render-tree key analyzer that reports loops rendering top-level elements
  or components without ``SetKey`` (``BB0003``).

Both passes read a compilation snapshot (declared types and syntax trees)
produced by a host front-end.

Usage
-----

.. code-block:: python

    from pathlib import Path
    import blazorgen

    result = blazorgen.generate(Path("snapshot.json"))
    for artifact in result.artifacts:
        print(artifact.filename)
    for diagnostic in result.diagnostics:
        print(diagnostic)
"""

from pathlib import Path
from typing import Optional, Union

from blazorgen.config import GeneratorConfig
from blazorgen.core.engine import GenerationResult, GeneratorEngine
from blazorgen.model.compilation import Compilation, SymbolProvider
from blazorgen.model.loader import load_snapshot

__version__ = "0.1.0"


def generate(
  source: Union[Path, str, SymbolProvider],
  config: Optional[GeneratorConfig] = None,
) -> GenerationResult:
  """
  Runs both generator passes.

  Args:
      source: A snapshot file path, or an already-built provider.
      config: Generator configuration (defaults when None).

  Returns:
      GenerationResult: Generated artifacts and diagnostics.

  Raises:
      SnapshotError: If a snapshot path cannot be loaded.
  """
  compilation = load_snapshot(Path(source)) if isinstance(source, (str, Path)) else source
  return GeneratorEngine(config=config).run(compilation)


__all__ = [
  "Compilation",
  "GenerationResult",
  "GeneratorConfig",
  "GeneratorEngine",
  "generate",
  "__version__",
]
