"""
Parameter Extraction and Name Conflict Detection.

Given a linearized type hierarchy this module:

1.  Enumerates property members in hierarchy order, then declaration order
    (`enumerate_members`).
2.  Keeps the writable members tagged with a parameter marker
    (`extract_parameters`).
3.  Groups parameters by lowercased name and reports every group with more
    than one member as ``BB0001`` (`find_name_conflicts`, `conflict_diagnostics`).

Case-insensitive uniqueness is a correctness gate: the generated dispatcher's
fallback tier matches lowercased names, so a shared lowercase name cannot be
routed.

Members redeclared at several hierarchy levels are not merged; each
declaring type contributes its own member.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from blazorgen.config import GeneratorConfig
from blazorgen.core.diagnostics import PARAMETER_NAME_CONFLICT, Diagnostic
from blazorgen.enums import TypeKind
from blazorgen.model.symbols import Location, TypeSymbol


@dataclass(frozen=True)
class ClassInfo:
  """
  Identity of a candidate class, as needed by the emitter.
  """

  name: str
  namespace: str
  kind: TypeKind
  type_parameters: Tuple[str, ...]
  hierarchy: Tuple[str, ...]

  @property
  def qualified_name(self) -> str:
    return f"{self.namespace}.{self.name}" if self.namespace else self.name

  @property
  def metadata_name(self) -> str:
    """Qualified name plus generic arity suffix, used to name artifacts."""
    if self.type_parameters:
      return f"{self.qualified_name}`{len(self.type_parameters)}"
    return self.qualified_name

  @classmethod
  def from_chain(cls, chain: Sequence[TypeSymbol]) -> "ClassInfo":
    """
    Builds the identity from a linearized hierarchy.

    Args:
        chain: Output of `linearize`; the first entry is the class itself.

    Returns:
        ClassInfo: The immutable identity.
    """
    symbol = chain[0]
    return cls(
      name=symbol.name,
      namespace=symbol.namespace,
      kind=symbol.kind,
      type_parameters=tuple(symbol.type_parameters),
      hierarchy=tuple(t.qualified_name for t in chain),
    )


@dataclass(frozen=True)
class MemberInfo:
  """A property member together with the type that declares it."""

  name: str
  type: str
  has_setter: bool
  markers: FrozenSet[str]
  declaring_type: str
  locations: Tuple[Location, ...]


@dataclass(frozen=True)
class ParameterCandidate:
  """A writable member carrying a recognised parameter marker."""

  member: MemberInfo
  marker: str

  @property
  def name(self) -> str:
    return self.member.name

  @property
  def type(self) -> str:
    return self.member.type

  @property
  def lowered_name(self) -> str:
    return self.member.name.lower()

  @property
  def locations(self) -> Tuple[Location, ...]:
    return self.member.locations


@dataclass(frozen=True)
class NameConflictGroup:
  """
  Parameters sharing one case-insensitive name, in extraction order.
  """

  key: str
  members: Tuple[ParameterCandidate, ...]

  def conflicting_name(self, candidate: ParameterCandidate) -> str:
    """
    Picks the name to cite against a member of the group.

    The first group member whose literal name differs is cited. When every
    member has the same literal name (one property redeclared at several
    hierarchy levels), the first other member is cited instead.

    Args:
        candidate: The member being reported.

    Returns:
        str: The cited name.
    """
    for other in self.members:
      if other.name != candidate.name:
        return other.name
    for other in self.members:
      if other is not candidate:
        return other.name
    return candidate.name


def enumerate_members(chain: Sequence[TypeSymbol]) -> List[MemberInfo]:
  """
  Lists the property members of every type in the chain.

  Args:
      chain: Linearized hierarchy, most derived first.

  Returns:
      List[MemberInfo]: Hierarchy order, then declaration order.
  """
  members: List[MemberInfo] = []
  for type_symbol in chain:
    for prop in type_symbol.properties:
      members.append(
        MemberInfo(
          name=prop.name,
          type=prop.type,
          has_setter=prop.has_setter,
          markers=frozenset(prop.attribute_names),
          declaring_type=type_symbol.qualified_name,
          locations=tuple(prop.locations),
        )
      )
  return members


def _matching_marker(member: MemberInfo, config: GeneratorConfig) -> Optional[str]:
  for marker in config.parameter_markers:
    if marker in member.markers:
      return marker
  return None


def extract_parameters(chain: Sequence[TypeSymbol], config: GeneratorConfig) -> Tuple[ParameterCandidate, ...]:
  """
  Selects the component parameters visible on a class.

  Args:
      chain: Linearized hierarchy, most derived first.
      config: Provides the parameter marker table.

  Returns:
      Tuple[ParameterCandidate, ...]: Writable, marked members in hierarchy order.
  """
  parameters: List[ParameterCandidate] = []
  for member in enumerate_members(chain):
    if not member.has_setter:
      continue
    marker = _matching_marker(member, config)
    if marker is not None:
      parameters.append(ParameterCandidate(member=member, marker=marker))
  return tuple(parameters)


def find_name_conflicts(parameters: Sequence[ParameterCandidate]) -> Tuple[NameConflictGroup, ...]:
  """
  Groups parameters by lowercased name and keeps groups with several members.

  Args:
      parameters: Extraction output.

  Returns:
      Tuple[NameConflictGroup, ...]: Conflicting groups, in order of first appearance.
  """
  groups: Dict[str, List[ParameterCandidate]] = {}
  for parameter in parameters:
    groups.setdefault(parameter.lowered_name, []).append(parameter)
  return tuple(NameConflictGroup(key=key, members=tuple(group)) for key, group in groups.items() if len(group) > 1)


def conflict_diagnostics(groups: Sequence[NameConflictGroup]) -> List[Diagnostic]:
  """
  Produces one ``BB0001`` per conflicting member per declared location.

  Args:
      groups: Output of `find_name_conflicts`.

  Returns:
      List[Diagnostic]: Error diagnostics in group, member, location order.
  """
  diagnostics: List[Diagnostic] = []
  for group in groups:
    for parameter in group.members:
      other_name = group.conflicting_name(parameter)
      for location in parameter.locations:
        diagnostics.append(Diagnostic.create(PARAMETER_NAME_CONFLICT, location, parameter.name, other_name))
  return diagnostics
