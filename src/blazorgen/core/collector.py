"""
Candidate Collection.

A single pure pass over the syntax forest that selects:

1.  **Candidate classes** for dispatch generation: declarations carrying at
    least one attribute whose declared type has the inclusion marker and not
    the exclusion marker. The synthetic imports class is never a candidate.
    Partial declarations of one type yield a single candidate.
2.  **Render routines** for key analysis: methods named like the render
    method, and single-parameter block-bodied lambdas whose parameter name
    denotes a builder.

The result is immutable; the collector mutates nothing it is given.
"""

from dataclasses import dataclass, field
from typing import List, Set, Tuple

from pydantic import BaseModel

from blazorgen.config import GeneratorConfig
from blazorgen.model.compilation import SymbolProvider
from blazorgen.model.symbols import Location, TypeSymbol
from blazorgen.model.syntax import ClassDeclaration, LambdaExpression, MethodDeclaration, Statement


@dataclass(frozen=True)
class RenderRoutine:
  """
  A method or lambda body recognised as building a render tree.
  """

  name: str
  location: Location
  statements: Tuple[Statement, ...]
  node: BaseModel = field(compare=False, repr=False)


@dataclass(frozen=True)
class Candidates:
  classes: Tuple[TypeSymbol, ...] = ()
  render_routines: Tuple[RenderRoutine, ...] = ()


def is_candidate_class(symbol: TypeSymbol, config: GeneratorConfig) -> bool:
  """
  Applies the marker rules to a declared type.

  Args:
      symbol: The declared type.
      config: Marker tables.

  Returns:
      bool: True if the type opts in and does not opt out.
  """
  if symbol.name == config.imports_class_name:
    return False
  return symbol.has_attribute(config.inclusion_markers) and not symbol.has_attribute(config.exclusion_markers)


def is_render_lambda(node: LambdaExpression, config: GeneratorConfig) -> bool:
  return len(node.parameters) == 1 and config.is_builder_name(node.parameters[0]) and node.body is not None


def collect_candidates(compilation: SymbolProvider, config: GeneratorConfig) -> Candidates:
  """
  Selects candidate classes and render routines in one traversal.

  Args:
      compilation: The symbol/tree provider.
      config: Marker tables and naming rules.

  Returns:
      Candidates: Classes in first-declaration order (distinct by metadata
      name) and render routines in traversal order (distinct by node identity).
  """
  classes: List[TypeSymbol] = []
  seen_classes: Set[str] = set()
  routines: List[RenderRoutine] = []
  seen_nodes: Set[int] = set()

  for node in compilation.iter_nodes():
    if isinstance(node, ClassDeclaration):
      if not node.attributes:
        continue
      symbol = compilation.get_declared_symbol(node)
      if symbol is None:
        continue
      if symbol.metadata_name in seen_classes or not is_candidate_class(symbol, config):
        continue
      seen_classes.add(symbol.metadata_name)
      classes.append(symbol)

    elif isinstance(node, MethodDeclaration):
      if node.name != config.render_method_name or node.body is None or id(node) in seen_nodes:
        continue
      seen_nodes.add(id(node))
      routines.append(
        RenderRoutine(
          name=node.symbol or node.name,
          location=node.location,
          statements=tuple(node.body.statements),
          node=node,
        )
      )

    elif isinstance(node, LambdaExpression):
      if not is_render_lambda(node, config) or id(node) in seen_nodes:
        continue
      seen_nodes.add(id(node))
      routines.append(
        RenderRoutine(
          name=f"({node.parameters[0]}) => {{ }} at {node.location}",
          location=node.location,
          statements=tuple(node.body.statements),
          node=node,
        )
      )

  return Candidates(classes=tuple(classes), render_routines=tuple(routines))
