"""
In-Memory Symbol/Tree Provider.

This module provides `Compilation`, the provider that the generator passes
query. It wraps a validated `CompilationSnapshot` and answers the four
questions the passes ask of a host compiler:

1.  Enumerate every syntax node once (`iter_nodes`).
2.  Map a class declaration to its declared symbol (`get_declared_symbol`).
3.  Look a type up by metadata name (`get_type`).
4.  Resolve an invocation to the first declaration of its callee (`resolve_invocation`).

The snapshot is treated as immutable; indexes are built once on construction.
"""

from typing import Dict, Iterator, List, Optional, Protocol

from pydantic import BaseModel, Field

from blazorgen.model.symbols import TypeSymbol
from blazorgen.model.syntax import (
  ClassDeclaration,
  InvocationExpression,
  MethodDeclaration,
  SyntaxTree,
)


class CompilationSnapshot(BaseModel):
  """
  Root of the JSON snapshot format.
  """

  assembly_name: str = Field("", description="Name of the compiled assembly, informational only.")
  types: List[TypeSymbol] = Field(default_factory=list, description="Every type declared in the compilation.")
  syntax_trees: List[SyntaxTree] = Field(default_factory=list)


class SymbolProvider(Protocol):
  """
  The contract the generator passes rely on.

  Any host binding (a live compiler, a cached index) can stand in for
  `Compilation` as long as it offers these methods.
  """

  def iter_nodes(self) -> Iterator[BaseModel]: ...

  def get_declared_symbol(self, node: BaseModel) -> Optional[TypeSymbol]: ...

  def get_type(self, metadata_name: str) -> Optional[TypeSymbol]: ...

  def resolve_invocation(self, invocation: InvocationExpression) -> Optional[MethodDeclaration]: ...


class Compilation:
  """
  Snapshot-backed implementation of `SymbolProvider`.
  """

  def __init__(self, snapshot: CompilationSnapshot):
    """
    Indexes the snapshot.

    Args:
        snapshot: A validated compilation snapshot.
    """
    self.snapshot = snapshot
    self._types: Dict[str, TypeSymbol] = {}
    for type_symbol in snapshot.types:
      # `Ns.Grid` and `Ns.Grid`1` are distinct types.
      self._types.setdefault(type_symbol.metadata_name, type_symbol)

    self._methods: Dict[str, MethodDeclaration] = {}
    for node in self.iter_nodes():
      if isinstance(node, MethodDeclaration) and node.symbol:
        # First declaration wins.
        self._methods.setdefault(node.symbol, node)

  @property
  def syntax_trees(self) -> List[SyntaxTree]:
    return self.snapshot.syntax_trees

  @property
  def types(self) -> List[TypeSymbol]:
    return self.snapshot.types

  def iter_nodes(self) -> Iterator[BaseModel]:
    """
    Yields every syntax node of every tree in pre-order.

    The walk uses an explicit stack so deeply nested render fragments do not
    hit the interpreter recursion limit.

    Yields:
        Syntax nodes (declarations, statements and expressions).
    """
    for tree in self.snapshot.syntax_trees:
      stack: List[BaseModel] = list(reversed(list(tree.children())))
      while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.children())))

  def get_declared_symbol(self, node: BaseModel) -> Optional[TypeSymbol]:
    """
    Returns the type declared by a class declaration node.

    Args:
        node: Any syntax node.

    Returns:
        The TypeSymbol, or None if the node declares no resolvable type.
    """
    if not isinstance(node, ClassDeclaration) or not node.symbol:
      return None
    return self._types.get(node.symbol)

  def get_type(self, metadata_name: str) -> Optional[TypeSymbol]:
    """
    Looks up a type by metadata name.

    Non-generic types are found by their qualified name; generic ones need
    the arity suffix.

    Args:
        metadata_name: e.g. 'Testing.Positive.Component' or 'Ui.Grid`1'.

    Returns:
        The TypeSymbol, or None for types outside the snapshot.
    """
    return self._types.get(metadata_name)

  def resolve_invocation(self, invocation: InvocationExpression) -> Optional[MethodDeclaration]:
    """
    Resolves the first declaration of the invoked method.

    Args:
        invocation: The call expression.

    Returns:
        The callee's MethodDeclaration, or None when the host left the call unresolved.
    """
    if not invocation.symbol:
      return None
    return self._methods.get(invocation.symbol)
