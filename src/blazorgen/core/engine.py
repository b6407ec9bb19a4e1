"""
Orchestration Engine for the Generator Passes.

`GeneratorEngine` runs one generation pass over a compilation:

1.  **Marker Emission**: The shared marker attribute declarations, exactly once.
2.  **Collection**: Candidate classes and render routines (`collect_candidates`).
3.  **Dispatch Generation**: ``SetParametersAsync`` artifacts and ``BB0001`` conflicts.
4.  **Key Analysis**: ``BB0003`` for unkeyed loop bodies.

Each phase is recorded by a per-run `TraceLogger`. The engine holds no state
between runs, so running it twice on the same compilation yields identical
artifacts.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from blazorgen.config import GeneratorConfig
from blazorgen.core.artifacts import MARKER_ARTIFACT_NAME, MARKER_ARTIFACT_TEXT, ArtifactSink, GeneratedArtifact
from blazorgen.core.collector import collect_candidates
from blazorgen.core.diagnostics import Diagnostic, DiagnosticSink
from blazorgen.core.dispatch import DispatchGenerator
from blazorgen.core.key_analyzer import KeyAnalyzer
from blazorgen.core.tracer import TraceLogger
from blazorgen.enums import Severity
from blazorgen.model.compilation import SymbolProvider


class GenerationResult(BaseModel):
  """
  Structured result of one generation run.
  """

  artifacts: List[GeneratedArtifact] = Field(default_factory=list, description="Generated sources, in emission order.")
  diagnostics: List[Diagnostic] = Field(default_factory=list, description="Reported findings, in report order.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="A log of internal trace events.")
  success: bool = Field(default=True, description="False if any error-severity diagnostic was reported.")

  @property
  def errors(self) -> List[Diagnostic]:
    return [d for d in self.diagnostics if d.severity == Severity.ERROR]

  @property
  def warnings(self) -> List[Diagnostic]:
    return [d for d in self.diagnostics if d.severity == Severity.WARNING]

  def artifact(self, name: str) -> Optional[GeneratedArtifact]:
    """
    Looks an artifact up by name.

    Args:
        name: e.g. 'Testing.Positive.Component_override'.

    Returns:
        The artifact, or None.
    """
    for artifact in self.artifacts:
      if artifact.name == name:
        return artifact
    return None


class GeneratorEngine:
  """
  Runs the dispatch generator and the key analyzer over a compilation.
  """

  def __init__(self, config: Optional[GeneratorConfig] = None):
    """
    Initializes the Engine.

    Args:
        config: Generator configuration. Defaults are used when None
            (no pyproject.toml lookup happens here; use `GeneratorConfig.load`).
    """
    self.config = config or GeneratorConfig()

  def run(self, compilation: SymbolProvider) -> GenerationResult:
    """
    Executes all enabled passes.

    Args:
        compilation: The symbol/tree provider for one compilation.

    Returns:
        GenerationResult: Artifacts, diagnostics and trace.
    """
    tracer = TraceLogger()
    diagnostics = DiagnosticSink()
    artifacts = ArtifactSink()

    tracer.start_phase("Collection", "Selecting candidate classes and render routines")
    candidates = collect_candidates(compilation, self.config)
    for symbol in candidates.classes:
      tracer.log_candidate("class", symbol.qualified_name)
    for routine in candidates.render_routines:
      tracer.log_candidate("render routine", routine.name)
    tracer.end_phase()

    if self.config.generate_dispatch:
      tracer.start_phase("Dispatch Generation", f"{len(candidates.classes)} candidate classes")
      artifacts.add(MARKER_ARTIFACT_NAME, MARKER_ARTIFACT_TEXT)
      DispatchGenerator(compilation, self.config, diagnostics, artifacts, tracer).run(candidates.classes)
      tracer.end_phase()

    if self.config.analyze_keys:
      tracer.start_phase("Key Analysis", f"{len(candidates.render_routines)} render routines")
      KeyAnalyzer(compilation, self.config, diagnostics, tracer).run(candidates.render_routines)
      tracer.end_phase()

    return GenerationResult(
      artifacts=list(artifacts.artifacts),
      diagnostics=list(diagnostics.diagnostics),
      trace_events=tracer.export(),
      success=not diagnostics.has_errors,
    )
