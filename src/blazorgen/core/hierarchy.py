"""
Type Hierarchy Linearization.

Produces the ordered chain ``[self, base, base-of-base, ..., root]`` that fixes
member enumeration order: members of derived types are visited before the
members they hide or override.
"""

from typing import List, Optional, Set, Tuple

from blazorgen.model.compilation import SymbolProvider
from blazorgen.model.symbols import TypeSymbol
from blazorgen.utils.console import log_warning


def _base_lookup_name(base_type: str) -> str:
  """
  Maps a base type reference to the metadata name it was declared under.

  'Ns.GridBase<string>' becomes 'Ns.GridBase`1' and
  'Ns.Pair<Dictionary<string, int>, int>' becomes 'Ns.Pair`2'.
  """
  name, bracket, arguments = base_type.partition("<")
  if not bracket:
    return base_type.strip()

  arity = 1
  depth = 0
  for char in arguments:
    if char == "<":
      depth += 1
    elif char == ">":
      if depth == 0:
        break
      depth -= 1
    elif char == "," and depth == 0:
      arity += 1
  return f"{name.strip()}`{arity}"


def linearize(symbol: TypeSymbol, provider: SymbolProvider) -> Tuple[TypeSymbol, ...]:
  """
  Walks from a type up through its base types.

  The walk ends at a type without a base, or whose base is declared outside
  the compilation (framework types such as ``ComponentBase``). Host type
  systems forbid cyclic bases; a malformed snapshot that contains one ends the
  walk at the first repeated type.

  Args:
      symbol: The starting (most derived) type.
      provider: Symbol lookup.

  Returns:
      Tuple[TypeSymbol, ...]: The chain, most derived first.
  """
  chain: List[TypeSymbol] = []
  seen: Set[str] = set()
  current: Optional[TypeSymbol] = symbol

  while current is not None:
    if current.metadata_name in seen:
      log_warning(f"Cyclic base type chain at '{current.qualified_name}' (from '{symbol.qualified_name}').")
      break
    seen.add(current.metadata_name)
    chain.append(current)

    if not current.base_type:
      break
    current = provider.get_type(_base_lookup_name(current.base_type))

  return tuple(chain)
