"""
Generation Trace Logger.

Records the step-by-step execution of a generation run:
1. Lifecycle phases (collection, dispatch generation, key analysis).
2. Candidate decisions (class selected, class skipped, routine analysed).
3. Diagnostics as they are reported.

The output is a list of event dictionaries suitable for JSON serialization.
A tracer is owned by one engine run; nothing here is global.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  CANDIDATE = "candidate"
  SKIPPED = "skipped"
  DIAGNOSTIC = "diagnostic"
  INSPECTION = "inspection"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records generation events for `--json` output and debugging.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase. Returns the phase id."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=phase_id,
        type=TraceEventType.PHASE_START,
        timestamp=time.time(),
        description=name,
        parent_id=parent,
        metadata={"detail": description},
      )
    )
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self):
    """Ends the current active phase."""
    if not self._active_phases:
      return

    phase_id = self._active_phases.pop()
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=TraceEventType.PHASE_END,
        timestamp=time.time(),
        description="End Phase",
        parent_id=phase_id,
      )
    )

  def log_candidate(self, kind: str, name: str):
    """Logs a class or render routine selected for processing."""
    self._log_simple(TraceEventType.CANDIDATE, f"Selected {kind} '{name}'", {"kind": kind, "name": name})

  def log_skipped(self, name: str, reason: str):
    """Logs a candidate that was dropped."""
    self._log_simple(TraceEventType.SKIPPED, f"Skipped '{name}'", {"reason": reason})

  def log_diagnostic(self, diagnostic_id: str, message: str, location: str):
    self._log_simple(
      TraceEventType.DIAGNOSTIC,
      f"{diagnostic_id}: {message}",
      {"id": diagnostic_id, "location": location},
    )

  def log_inspection(self, subject: str, outcome: str, detail: str = ""):
    """Logs a decision point where nothing was reported."""
    self._log_simple(TraceEventType.INSPECTION, f"Inspecting '{subject}'", {"outcome": outcome, "detail": detail})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]):
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
