"""
Render-Tree Key Analysis.

Every element or component instantiated at the top level of a loop body must
be given a key, otherwise the renderer cannot match iterations to their
previous output. This pass checks that with a shallow state machine over the
statements of each loop found at the top level of a render routine:

- **open call** (``OpenElement``, ``OpenComponent<T>``): ``level += 1``; on
  reaching level 0 a new top-level instantiation starts and ``saw_key`` resets.
- **close call**: at level 0 without a key, report ``BB0003`` at the loop
  keyword; then ``level -= 1``.
- **set-key call** at level 0: ``saw_key = True``.
- **helper call** (an argument names a builder): the callee's body is walked
  with the same state, as if inlined. Diagnostics raised there still point at
  the loop keyword.

Each loop starts from ``level = -1, saw_key = False``. A loop nested in a
loop body gets its own fresh state but keeps the helper call path. Helper
descent stops at ``max_inline_depth`` and never re-enters a callee already on
the call path. Each loop node is analysed once per run.

This is a heuristic, not a control-flow analysis: branches are not followed
and only expression statements drive the machine.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Set, Tuple

from blazorgen.config import GeneratorConfig
from blazorgen.core.collector import RenderRoutine
from blazorgen.core.diagnostics import KEYLESS_LOOP, Diagnostic, DiagnosticSink
from blazorgen.core.tracer import TraceLogger
from blazorgen.enums import CallRole
from blazorgen.model.compilation import SymbolProvider
from blazorgen.model.symbols import Location
from blazorgen.model.syntax import (
  Block,
  ExpressionStatement,
  ForEachStatement,
  ForStatement,
  IdentifierName,
  InvocationExpression,
  LoopStatement,
  Statement,
)


@dataclass
class LoopAnalysisState:
  """
  Mutable state of one loop's traversal.

  Attributes:
      level: Open-call nesting depth; -1 outside any instantiation.
      saw_key: Whether the current top-level instantiation has been keyed.
  """

  level: int = -1
  saw_key: bool = False


class KeyAnalyzer:
  """
  Reports loops that render unkeyed top-level elements or components.
  """

  def __init__(
    self,
    provider: SymbolProvider,
    config: GeneratorConfig,
    diagnostics: DiagnosticSink,
    tracer: Optional[TraceLogger] = None,
  ):
    self.provider = provider
    self.config = config
    self.diagnostics = diagnostics
    self.tracer = tracer or TraceLogger()
    self._analyzed_loops: Set[int] = set()

  def run(self, routines: Sequence[RenderRoutine]) -> None:
    self._analyzed_loops = set()
    for routine in routines:
      self.analyze_routine(routine)

  def analyze_routine(self, routine: RenderRoutine) -> None:
    """
    Analyses every loop among the routine's top-level statements.

    Args:
        routine: A collected render routine.
    """
    for statement in routine.statements:
      if isinstance(statement, (ForStatement, ForEachStatement)):
        self.analyze_loop(statement)

  def analyze_loop(self, loop: LoopStatement, call_path: Tuple[str, ...] = ()) -> None:
    """
    Runs a fresh state machine over one loop body.

    Each loop node is analysed once per run, even when the helper declaring
    it is inlined at several call sites.

    Args:
        loop: A ``for`` or ``foreach`` statement. Loops without a block body are ignored.
        call_path: Helpers inlined to reach this loop; the state resets, the path is kept.
    """
    if not isinstance(loop.body, Block) or id(loop) in self._analyzed_loops:
      return
    self._analyzed_loops.add(id(loop))
    self.tracer.log_inspection(f"{loop.kind} at {loop.keyword_location}", outcome="analysing loop body")
    self._walk(loop.body.statements, loop.keyword_location, LoopAnalysisState(), call_path)

  def classify(self, invocation: InvocationExpression) -> CallRole:
    """
    Determines what a call means to the state machine.

    Args:
        invocation: A call in a loop body or inlined helper.

    Returns:
        CallRole: OPEN, CLOSE and SET_KEY require a member access
        (``builder.OpenElement``); HELPER requires a builder argument.
    """
    if invocation.is_member_access:
      name = invocation.simple_name
      if name in self.config.open_calls:
        return CallRole.OPEN
      if name in self.config.close_calls:
        return CallRole.CLOSE
      if name in self.config.set_key_calls:
        return CallRole.SET_KEY
    for argument in invocation.arguments:
      if isinstance(argument, IdentifierName) and self.config.is_builder_name(argument.name):
        return CallRole.HELPER
    return CallRole.OTHER

  def _walk(
    self,
    statements: Sequence[Statement],
    keyword_location: Location,
    state: LoopAnalysisState,
    call_path: Tuple[str, ...],
  ) -> None:
    for statement in statements:
      if isinstance(statement, (ForStatement, ForEachStatement)):
        self.analyze_loop(statement, call_path)
      elif isinstance(statement, ExpressionStatement) and isinstance(statement.expression, InvocationExpression):
        self._visit_invocation(statement.expression, keyword_location, state, call_path)

  def _visit_invocation(
    self,
    invocation: InvocationExpression,
    keyword_location: Location,
    state: LoopAnalysisState,
    call_path: Tuple[str, ...],
  ) -> None:
    role = self.classify(invocation)

    if role == CallRole.OPEN:
      state.level += 1
      if state.level == 0:
        state.saw_key = False

    elif role == CallRole.CLOSE:
      if state.level == 0 and not state.saw_key:
        self._report(keyword_location)
      state.level -= 1

    elif role == CallRole.SET_KEY:
      if state.level == 0:
        state.saw_key = True

    elif role == CallRole.HELPER:
      self._inline(invocation, keyword_location, state, call_path)

  def _inline(
    self,
    invocation: InvocationExpression,
    keyword_location: Location,
    state: LoopAnalysisState,
    call_path: Tuple[str, ...],
  ) -> None:
    callee = self.provider.resolve_invocation(invocation)
    if callee is None or callee.body is None:
      self.tracer.log_inspection(invocation.name, outcome="unresolved helper")
      return

    identity = callee.symbol or callee.name
    if identity in call_path:
      self.tracer.log_inspection(invocation.name, outcome="recursive helper not re-entered")
      return
    if len(call_path) >= self.config.max_inline_depth:
      self.tracer.log_inspection(invocation.name, outcome="helper depth limit reached")
      return

    self._walk(callee.body.statements, keyword_location, state, call_path + (identity,))

  def _report(self, keyword_location: Location) -> None:
    diagnostic = Diagnostic.create(KEYLESS_LOOP, keyword_location)
    self.diagnostics.report(diagnostic)
    self.tracer.log_diagnostic(diagnostic.id, diagnostic.message, str(keyword_location))
