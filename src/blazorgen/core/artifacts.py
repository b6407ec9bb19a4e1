"""
Generated Artifacts.

Holds the emitted source texts of one generation run, and the fixed marker
declarations every compilation receives exactly once.
"""

import threading
from typing import Dict, Iterator, List, Tuple

from pydantic import BaseModel, Field

from blazorgen.config import EXCLUSION_MARKER, INCLUSION_MARKER, MARKER_NAMESPACE

MARKER_ARTIFACT_NAME = INCLUSION_MARKER

MARKER_ARTIFACT_TEXT = f"""
using System;
namespace {MARKER_NAMESPACE}
{{
    [AttributeUsage(AttributeTargets.Class, Inherited = false, AllowMultiple = true)]
    sealed class {INCLUSION_MARKER} : Attribute
    {{
    }}
    [AttributeUsage(AttributeTargets.Class, Inherited = false, AllowMultiple = true)]
    sealed class {EXCLUSION_MARKER} : Attribute
    {{
    }}
}}
"""


class GeneratedArtifact(BaseModel):
  """
  One emitted source text.
  """

  name: str = Field(..., description="Deterministic artifact name (e.g. 'Ns.Component_override').")
  content: str = Field(..., description="The generated C# source.")

  @property
  def filename(self) -> str:
    return f"{self.name}.cs"


class ArtifactSink:
  """
  Thread-safe, append-only artifact collector keyed by artifact name.
  """

  def __init__(self) -> None:
    self._lock = threading.Lock()
    self._items: Dict[str, GeneratedArtifact] = {}

  def add(self, name: str, content: str) -> GeneratedArtifact:
    """
    Records an artifact.

    Args:
        name: Unique artifact name.
        content: Source text.

    Returns:
        GeneratedArtifact: The stored record.

    Raises:
        ValueError: If an artifact with the same name was already added.
    """
    artifact = GeneratedArtifact(name=name, content=content)
    with self._lock:
      if name in self._items:
        raise ValueError(f"Duplicate generated artifact name: {name}")
      self._items[name] = artifact
    return artifact

  @property
  def artifacts(self) -> Tuple[GeneratedArtifact, ...]:
    with self._lock:
      return tuple(self._items.values())

  @property
  def names(self) -> List[str]:
    return [a.name for a in self.artifacts]

  def get(self, name: str) -> GeneratedArtifact:
    with self._lock:
      return self._items[name]

  def __len__(self) -> int:
    return len(self.artifacts)

  def __iter__(self) -> Iterator[GeneratedArtifact]:
    return iter(self.artifacts)
