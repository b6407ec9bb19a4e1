"""
Tests for Dispatch Code Emission.

Generated sources are compared against golden files under ``tests/golden``.
"""

import pytest

from blazorgen.config import GeneratorConfig
from blazorgen.core.emitter import DispatchPlan, emit_dispatch_artifacts
from blazorgen.core.hierarchy import linearize
from blazorgen.core.parameters import ClassInfo, extract_parameters
from blazorgen.enums import TypeKind
from blazorgen.errors import EmitterError
from blazorgen.model.loader import parse_snapshot

PARAM = "Microsoft.AspNetCore.Components.ParameterAttribute"


def emit_for(compilation, qualified_name):
  chain = linearize(compilation.get_type(qualified_name), compilation)
  return emit_dispatch_artifacts(ClassInfo.from_chain(chain), extract_parameters(chain, GeneratorConfig()))


def test_positive(load_fixture, golden):
  (override_name, override), (impl_name, impl) = emit_for(load_fixture("positive.json"), "Testing.Positive.Component")

  assert override_name == "Testing.Positive.Component_override"
  assert impl_name == "Testing.Positive.Component_implementation"
  golden.assert_match("Testing.Positive.Component_override.cs", override)
  golden.assert_match("Testing.Positive.Component_implementation.cs", impl)


def test_no_parameters_still_emits_both(load_fixture, golden):
  compilation = load_fixture("positive_not_parameters.json")
  (override_name, override), (impl_name, impl) = emit_for(compilation, "Testing.PositiveNotParameters.Component")

  golden.assert_match("Testing.PositiveNotParameters.Component_override.cs", override)
  golden.assert_match("Testing.PositiveNotParameters.Component_implementation.cs", impl)


def test_generic_class_in_global_namespace(golden):
  compilation = parse_snapshot(
    {
      "types": [
        {
          "name": "Grid",
          "type_parameters": ["TItem"],
          "properties": [
            {
              "name": "Items",
              "type": "System.Collections.Generic.IReadOnlyList<TItem>",
              "attributes": [PARAM],
            },
            {"name": "class", "type": "string", "attributes": [PARAM]},
          ],
        }
      ]
    }
  )
  (override_name, override), (impl_name, impl) = emit_for(compilation, "Grid`1")

  assert override_name == "Grid`1_override"
  assert impl_name == "Grid`1_implementation"
  golden.assert_match("Grid_1_override.cs", override)
  golden.assert_match("Grid_1_implementation.cs", impl)


def test_output_is_deterministic(load_fixture):
  compilation = load_fixture("positive.json")
  assert emit_for(compilation, "Testing.Positive.Component") == emit_for(compilation, "Testing.Positive.Component")


def test_type_keyword_follows_kind():
  info = ClassInfo(name="S", namespace="Ns", kind=TypeKind.STRUCT, type_parameters=(), hierarchy=("Ns.S",))
  plan = DispatchPlan.build(info, ())
  assert plan.type_header == "public partial struct S"


def test_exact_and_lowered_arms_share_order(load_fixture):
  compilation = load_fixture("positive.json")
  chain = linearize(compilation.get_type("Testing.Positive.Component"), compilation)
  plan = DispatchPlan.build(ClassInfo.from_chain(chain), extract_parameters(chain, GeneratorConfig()))

  assert [a.label for a in plan.exact_arms] == ['"Parameter1"', '"Parameter2"', '"Parameter3"']
  assert [a.label for a in plan.lowered_arms] == ['"parameter1"', '"parameter2"', '"parameter3"']
  assert [a.target for a in plan.exact_arms] == [a.target for a in plan.lowered_arms]


def test_unsafe_type_raises():
  compilation = parse_snapshot(
    {"types": [{"name": "C", "properties": [{"name": "P", "type": "int)value; Hack(", "attributes": [PARAM]}]}]}
  )
  with pytest.raises(EmitterError):
    emit_for(compilation, "C")
