"""
SetParametersAsync Dispatch Generation Pass.

For every candidate class: linearize the hierarchy, extract the parameters,
report case-insensitive name conflicts, and emit the override and
implementation artifacts.

A class whose names or types cannot be emitted safely is skipped with a
logged warning; the remaining classes are still processed. A class without
parameters still receives both artifacts.
"""

from typing import Optional, Sequence

from rich.markup import escape

from blazorgen.config import GeneratorConfig
from blazorgen.core.artifacts import ArtifactSink
from blazorgen.core.diagnostics import DiagnosticSink
from blazorgen.core.emitter import emit_dispatch_artifacts
from blazorgen.core.hierarchy import linearize
from blazorgen.core.parameters import ClassInfo, conflict_diagnostics, extract_parameters, find_name_conflicts
from blazorgen.core.tracer import TraceLogger
from blazorgen.errors import EmitterError
from blazorgen.model.compilation import SymbolProvider
from blazorgen.model.symbols import TypeSymbol
from blazorgen.utils.console import log_warning


class DispatchGenerator:
  """
  Runs the dispatch pipeline over candidate classes.
  """

  def __init__(
    self,
    provider: SymbolProvider,
    config: GeneratorConfig,
    diagnostics: DiagnosticSink,
    artifacts: ArtifactSink,
    tracer: Optional[TraceLogger] = None,
  ):
    self.provider = provider
    self.config = config
    self.diagnostics = diagnostics
    self.artifacts = artifacts
    self.tracer = tracer or TraceLogger()

  def run(self, classes: Sequence[TypeSymbol]) -> int:
    """
    Processes every candidate class.

    Args:
        classes: Candidate classes from the collector.

    Returns:
        int: Number of classes for which artifacts were emitted.
    """
    generated = 0
    for symbol in classes:
      if self.generate_for(symbol):
        generated += 1
    return generated

  def generate_for(self, symbol: TypeSymbol) -> bool:
    """
    Runs linearize -> extract -> detect conflicts -> emit for one class.

    Args:
        symbol: A candidate class.

    Returns:
        bool: False if the class was skipped.
    """
    chain = linearize(symbol, self.provider)
    class_info = ClassInfo.from_chain(chain)
    parameters = extract_parameters(chain, self.config)
    self.tracer.log_inspection(
      class_info.qualified_name,
      outcome=f"{len(parameters)} parameters",
      detail=" -> ".join(class_info.hierarchy),
    )

    for diagnostic in conflict_diagnostics(find_name_conflicts(parameters)):
      self.diagnostics.report(diagnostic)
      self.tracer.log_diagnostic(diagnostic.id, diagnostic.message, str(diagnostic.location))

    try:
      override, implementation = emit_dispatch_artifacts(class_info, parameters)
    except EmitterError as e:
      log_warning(f"Skipping dispatch generation for '{class_info.qualified_name}': {escape(str(e))}")
      self.tracer.log_skipped(class_info.qualified_name, str(e))
      return False

    self.artifacts.add(*override)
    self.artifacts.add(*implementation)
    return True
