"""
Diagnostic Descriptors and Reporting.

Analysis findings are reported as `Diagnostic` records into an append-only
`DiagnosticSink`; the passes never raise for them. The sink is guarded by a
lock so a host may process candidates on several threads.

Descriptors:
    - ``BB0001`` (error): Two parameters share a case-insensitive name.
    - ``BB0003`` (warning): A loop renders a top-level element without a key.
"""

import threading
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from blazorgen.enums import Severity
from blazorgen.model.symbols import Location


@dataclass(frozen=True)
class DiagnosticDescriptor:
  """
  Static description of one diagnostic kind.
  """

  id: str
  title: str
  message_format: str
  category: str
  severity: Severity
  description: str = ""

  def format(self, *args: str) -> str:
    return self.message_format.format(*args)


PARAMETER_NAME_CONFLICT = DiagnosticDescriptor(
  id="BB0001",
  title="Parameter name conflict",
  message_format="Parameter names are case insensitive. {0} conflicts with {1}",
  category="Conflict",
  severity=Severity.ERROR,
  description=(
    "Parameter names must be case insensitive to be usable in routes. "
    "Rename the parameter to not be in conflict with other parameters."
  ),
)

KEYLESS_LOOP = DiagnosticDescriptor(
  id="BB0003",
  title="foreach without key",
  message_format="A key must be used when rendering loops in Blazor",
  category="Correctness",
  severity=Severity.WARNING,
  description=(
    "Not using a @key within a for-loop or foreach-loop in Blazor not only can have a negative "
    "performance impact, but also cause problems with disposable components."
  ),
)


class Diagnostic(BaseModel):
  """
  A reported finding.
  """

  id: str = Field(..., description="Descriptor id (e.g. 'BB0001').")
  severity: Severity
  message: str
  locations: List[Location] = Field(default_factory=list, description="Primary location first.")

  @classmethod
  def create(
    cls,
    descriptor: DiagnosticDescriptor,
    locations: Union[Location, Sequence[Location]],
    *args: str,
  ) -> "Diagnostic":
    """
    Instantiates a diagnostic from its descriptor.

    Args:
        descriptor: The diagnostic kind.
        locations: One location, or the primary location followed by related ones.
        *args: Message format arguments.

    Returns:
        Diagnostic: The formatted record.
    """
    if isinstance(locations, Location):
      locations = [locations]
    return cls(
      id=descriptor.id,
      severity=descriptor.severity,
      message=descriptor.format(*args),
      locations=list(locations),
    )

  @property
  def location(self) -> Location:
    """The primary location."""
    return self.locations[0] if self.locations else Location()

  def __str__(self) -> str:
    return f"{self.location}: {self.severity.value} {self.id}: {self.message}"


class DiagnosticSink:
  """
  Thread-safe, append-only diagnostic collector.
  """

  def __init__(self) -> None:
    self._lock = threading.Lock()
    self._items: List[Diagnostic] = []

  def report(self, diagnostic: Diagnostic) -> None:
    with self._lock:
      self._items.append(diagnostic)

  @property
  def diagnostics(self) -> Tuple[Diagnostic, ...]:
    with self._lock:
      return tuple(self._items)

  @property
  def has_errors(self) -> bool:
    return any(d.severity == Severity.ERROR for d in self.diagnostics)

  def __len__(self) -> int:
    return len(self.diagnostics)

  def __iter__(self) -> Iterator[Diagnostic]:
    return iter(self.diagnostics)
