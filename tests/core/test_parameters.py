"""
Tests for Parameter Extraction and Name Conflict Detection.

Verifies:
1. Only writable members with a parameter marker are extracted.
2. Members of derived types come first, then declaration order.
3. Case-insensitive groups of two or more produce one BB0001 per member location.
"""

from blazorgen.config import GeneratorConfig
from blazorgen.core.hierarchy import linearize
from blazorgen.core.parameters import (
  ClassInfo,
  conflict_diagnostics,
  extract_parameters,
  find_name_conflicts,
)
from blazorgen.enums import Severity
from blazorgen.model.loader import parse_snapshot

PARAM = "Microsoft.AspNetCore.Components.ParameterAttribute"


def prop(name, attributes=(PARAM,), has_setter=True, type_="string", line=1):
  return {
    "name": name,
    "type": type_,
    "has_setter": has_setter,
    "attributes": list(attributes),
    "locations": [{"path": "C.cs", "line": line, "column": 5}],
  }


def chain_for(*types):
  compilation = parse_snapshot({"types": list(types)})
  first = types[0]
  name = f"{first['namespace']}.{first['name']}"
  if first.get("type_parameters"):
    name += f"`{len(first['type_parameters'])}"
  return linearize(compilation.get_type(name), compilation)


def test_extracts_marked_writable_members():
  chain = chain_for(
    {
      "name": "C",
      "namespace": "Ns",
      "properties": [
        prop("A"),
        prop("ReadOnly", has_setter=False),
        prop("Unmarked", attributes=()),
        prop("Cascading", attributes=("Microsoft.AspNetCore.Components.CascadingParameterAttribute",)),
        prop("Short", attributes=("Parameter",)),
      ],
    }
  )
  names = [p.name for p in extract_parameters(chain, GeneratorConfig())]
  assert names == ["A", "Cascading", "Short"]


def test_hierarchy_order_derived_first():
  chain = chain_for(
    {"name": "C", "namespace": "Ns", "base_type": "Ns.B", "properties": [prop("Z"), prop("Y")]},
    {"name": "B", "namespace": "Ns", "properties": [prop("A")]},
  )
  parameters = extract_parameters(chain, GeneratorConfig())
  assert [p.name for p in parameters] == ["Z", "Y", "A"]
  assert parameters[2].member.declaring_type == "Ns.B"


def test_class_info_from_chain():
  chain = chain_for(
    {"name": "Grid", "namespace": "Ns", "type_parameters": ["TItem"], "base_type": "Ns.B"},
    {"name": "B", "namespace": "Ns"},
  )
  info = ClassInfo.from_chain(chain)
  assert info.metadata_name == "Ns.Grid`1"
  assert info.hierarchy == ("Ns.Grid", "Ns.B")


def test_no_conflicts_for_distinct_names():
  chain = chain_for({"name": "C", "namespace": "Ns", "properties": [prop("Value"), prop("Other")]})
  assert find_name_conflicts(extract_parameters(chain, GeneratorConfig())) == ()


def test_two_members_conflict():
  chain = chain_for({"name": "C", "namespace": "Ns", "properties": [prop("Value", line=3), prop("value", line=4)]})
  groups = find_name_conflicts(extract_parameters(chain, GeneratorConfig()))

  assert len(groups) == 1
  assert groups[0].key == "value"

  diagnostics = conflict_diagnostics(groups)
  assert [d.message for d in diagnostics] == [
    "Parameter names are case insensitive. Value conflicts with value",
    "Parameter names are case insensitive. value conflicts with Value",
  ]
  assert [d.location.line for d in diagnostics] == [3, 4]
  assert all(d.severity == Severity.ERROR and d.id == "BB0001" for d in diagnostics)


def test_three_way_conflict_reports_each_member():
  chain = chain_for(
    {
      "name": "C",
      "namespace": "Ns",
      "properties": [prop("VALUE", line=1), prop("Value", line=2), prop("value", line=3)],
    }
  )
  diagnostics = conflict_diagnostics(find_name_conflicts(extract_parameters(chain, GeneratorConfig())))
  assert [d.message.split(". ", 1)[1] for d in diagnostics] == [
    "VALUE conflicts with Value",
    "Value conflicts with VALUE",
    "value conflicts with VALUE",
  ]


def test_conflict_across_hierarchy():
  chain = chain_for(
    {"name": "C", "namespace": "Ns", "base_type": "Ns.B", "properties": [prop("Title", line=7)]},
    {"name": "B", "namespace": "Ns", "properties": [prop("title", line=2)]},
  )
  diagnostics = conflict_diagnostics(find_name_conflicts(extract_parameters(chain, GeneratorConfig())))
  assert len(diagnostics) == 2


def test_redeclared_member_cites_other_declaration():
  chain = chain_for(
    {"name": "C", "namespace": "Ns", "base_type": "Ns.B", "properties": [prop("Value", line=7)]},
    {"name": "B", "namespace": "Ns", "properties": [prop("Value", line=2)]},
  )
  diagnostics = conflict_diagnostics(find_name_conflicts(extract_parameters(chain, GeneratorConfig())))
  assert [d.message for d in diagnostics] == ["Parameter names are case insensitive. Value conflicts with Value"] * 2


def test_one_diagnostic_per_location():
  multi = prop("Value")
  multi["locations"] = [{"path": "C.1.cs", "line": 1, "column": 1}, {"path": "C.2.cs", "line": 9, "column": 1}]
  chain = chain_for({"name": "C", "namespace": "Ns", "properties": [multi, prop("value")]})
  diagnostics = conflict_diagnostics(find_name_conflicts(extract_parameters(chain, GeneratorConfig())))
  assert [d.location.path for d in diagnostics] == ["C.1.cs", "C.2.cs", "C.cs"]
