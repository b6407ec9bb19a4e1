"""
Dispatch Code Emission.

Turns a candidate class and its ordered parameter list into two C# artifacts:

1.  **Override** (``<class>_override``): ``SetParametersAsync`` feeds every
    incoming (name, value) pair to the private dispatcher, then continues the
    base lifecycle with ``ParameterView.Empty`` so the base implementation
    does not assign parameters a second time.
2.  **Implementation** (``<class>_implementation``): the private dispatcher.
    Tier one switches on the exact name; its default switches on the
    lowercased name; the inner default throws ``ArgumentException`` naming the
    unknown parameter.

Emission happens in two steps. `DispatchPlan.build` validates and escapes
every host-supplied string (the data feeding the text); `emit_override` and
`emit_implementation` lay the plan out with `CSharpWriter`. Identical plans
render to byte-identical text.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from blazorgen.core.parameters import ClassInfo, ParameterCandidate
from blazorgen.core.writer import CSharpWriter, escape_identifier, escape_namespace, escape_type, string_literal

OVERRIDE_SUFFIX = "_override"
IMPLEMENTATION_SUFFIX = "_implementation"
DISPATCHER_METHOD = "BlazorImplementation__WriteSingleParameter"


@dataclass(frozen=True)
class DispatchArm:
  """One ``case`` of a dispatch tier."""

  label: str
  target: str
  cast_type: str


@dataclass(frozen=True)
class DispatchPlan:
  """
  Escaped, ordered data for both artifacts of one class.
  """

  namespace: str
  type_keyword: str
  type_name: str
  type_parameters: Tuple[str, ...]
  artifact_prefix: str
  exact_arms: Tuple[DispatchArm, ...]
  lowered_arms: Tuple[DispatchArm, ...]

  @property
  def type_header(self) -> str:
    params = f"<{', '.join(self.type_parameters)}>" if self.type_parameters else ""
    return f"public partial {self.type_keyword} {self.type_name}{params}"

  @property
  def override_name(self) -> str:
    return f"{self.artifact_prefix}{OVERRIDE_SUFFIX}"

  @property
  def implementation_name(self) -> str:
    return f"{self.artifact_prefix}{IMPLEMENTATION_SUFFIX}"

  @classmethod
  def build(cls, class_info: ClassInfo, parameters: Sequence[ParameterCandidate]) -> "DispatchPlan":
    """
    Validates and orders the emission data.

    Args:
        class_info: Identity of the candidate class.
        parameters: Parameter candidates in hierarchy-walk order.

    Returns:
        DispatchPlan: One exact arm and one lowercase arm per parameter, same order.

    Raises:
        EmitterError: If a name or type violates the escaping contract.
    """
    exact_arms = []
    lowered_arms = []
    for parameter in parameters:
      target = escape_identifier(parameter.name)
      cast_type = escape_type(parameter.type)
      exact_arms.append(DispatchArm(label=string_literal(parameter.name), target=target, cast_type=cast_type))
      lowered_arms.append(DispatchArm(label=string_literal(parameter.lowered_name), target=target, cast_type=cast_type))

    return cls(
      namespace=escape_namespace(class_info.namespace) if class_info.namespace else "",
      type_keyword=class_info.kind.value,
      type_name=escape_identifier(class_info.name),
      type_parameters=tuple(escape_identifier(t) for t in class_info.type_parameters),
      artifact_prefix=class_info.metadata_name,
      exact_arms=tuple(exact_arms),
      lowered_arms=tuple(lowered_arms),
    )


@contextmanager
def _type_scope(writer: CSharpWriter, plan: DispatchPlan) -> Iterator[None]:
  """Opens the namespace block (if any) and the partial type block."""
  if plan.namespace:
    with writer.block(f"namespace {plan.namespace}"):
      with writer.block(plan.type_header):
        yield
  else:
    with writer.block(plan.type_header):
      yield


def _write_arms(writer: CSharpWriter, arms: Sequence[DispatchArm]) -> None:
  for arm in arms:
    writer.line(f"case {arm.label}:")
    with writer.indented():
      writer.line(f"this.{arm.target} = ({arm.cast_type})value;")
      writer.line("break;")


def emit_override(plan: DispatchPlan) -> str:
  """
  Renders the ``SetParametersAsync`` override.

  Args:
      plan: Validated emission data.

  Returns:
      str: C# source text.
  """
  writer = CSharpWriter()
  writer.line("using Microsoft.AspNetCore.Components;")
  writer.line("using System.Threading.Tasks;")
  writer.line()
  with _type_scope(writer, plan):
    with writer.block("public override Task SetParametersAsync(ParameterView parameters)"):
      with writer.block("foreach (var parameter in parameters)"):
        writer.line(f"{DISPATCHER_METHOD}(parameter.Name, parameter.Value);")
      writer.line()
      writer.line("// Run the normal lifecycle methods, but without assigning parameters again")
      writer.line("return base.SetParametersAsync(ParameterView.Empty);")
  return writer.render()


def emit_implementation(plan: DispatchPlan) -> str:
  """
  Renders the two-tier private dispatcher.

  Args:
      plan: Validated emission data.

  Returns:
      str: C# source text.
  """
  writer = CSharpWriter()
  writer.line("using System;")
  writer.line()
  with _type_scope(writer, plan):
    with writer.block(f"private void {DISPATCHER_METHOD}(string name, object value)"):
      with writer.block("switch (name)"):
        _write_arms(writer, plan.exact_arms)
        with writer.block("default:"):
          with writer.block("switch (name.ToLowerInvariant())"):
            _write_arms(writer, plan.lowered_arms)
            writer.line("default:")
            with writer.indented():
              writer.line('throw new ArgumentException($"Unknown parameter: {name}");')
          writer.line("break;")
  return writer.render()


def emit_dispatch_artifacts(
  class_info: ClassInfo, parameters: Sequence[ParameterCandidate]
) -> Tuple[Tuple[str, str], Tuple[str, str]]:
  """
  Builds both artifacts for one class.

  Args:
      class_info: Identity of the candidate class.
      parameters: Parameter candidates in hierarchy-walk order.

  Returns:
      ((override_name, override_text), (implementation_name, implementation_text))

  Raises:
      EmitterError: If a name or type violates the escaping contract.
  """
  plan = DispatchPlan.build(class_info, parameters)
  return (
    (plan.override_name, emit_override(plan)),
    (plan.implementation_name, emit_implementation(plan)),
  )
