"""
Pydantic Schemas for Syntax Trees.

This module defines the syntactic half of a compilation snapshot. Only the
shapes the generator passes look at are modelled precisely:

- Class and method declarations (candidate selection).
- ``for`` / ``foreach`` loops with their introducing keyword location.
- Expression statements holding invocations (render-tree builder calls).
- Lambdas (render fragments taking a builder parameter).

Every other statement is an ``OtherStatement``; it keeps its nested
statements and expressions so that node enumeration still reaches lambdas
declared inside it.

All node unions are discriminated on the ``kind`` field.
"""

from typing import Annotated, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from blazorgen.model.symbols import Location


class IdentifierName(BaseModel):
  """A bare identifier reference (e.g. ``builder``)."""

  kind: Literal["identifier"] = "identifier"
  name: str

  def children(self) -> Iterator[BaseModel]:
    return iter(())


class LiteralExpression(BaseModel):
  """A literal or any expression whose structure does not matter."""

  kind: Literal["literal"] = "literal"
  text: str = ""

  def children(self) -> Iterator[BaseModel]:
    return iter(())


class InvocationExpression(BaseModel):
  """
  A method call.

  ``receiver`` holds the text left of the final member access
  (``builder`` in ``builder.OpenElement(0, "div")``) and is None for a
  simple-name call such as ``RenderRow(builder, item)``.
  """

  kind: Literal["invocation"] = "invocation"
  receiver: Optional[str] = None
  name: str = Field(..., description="Called name, possibly with generic arguments ('OpenComponent<Counter>').")
  arguments: List["Expression"] = Field(default_factory=list)
  symbol: Optional[str] = Field(None, description="Resolved method symbol id, if the host resolved one.")
  location: Location = Field(default_factory=Location)

  @property
  def is_member_access(self) -> bool:
    return self.receiver is not None

  @property
  def simple_name(self) -> str:
    """Called name with generic arguments stripped."""
    return self.name.split("<", 1)[0].strip()

  def children(self) -> Iterator[BaseModel]:
    return iter(self.arguments)


class LambdaExpression(BaseModel):
  """
  An anonymous function. Exactly one of ``body`` / ``expression_body`` is set.
  """

  kind: Literal["lambda"] = "lambda"
  parameters: List[str] = Field(default_factory=list)
  body: Optional["Block"] = None
  expression_body: Optional["Expression"] = None
  location: Location = Field(default_factory=Location)

  def children(self) -> Iterator[BaseModel]:
    if self.body is not None:
      yield self.body
    if self.expression_body is not None:
      yield self.expression_body


class Block(BaseModel):
  """A braced statement list."""

  kind: Literal["block"] = "block"
  statements: List["Statement"] = Field(default_factory=list)

  def children(self) -> Iterator[BaseModel]:
    return iter(self.statements)


class ExpressionStatement(BaseModel):
  """A statement consisting of a single expression."""

  kind: Literal["expression"] = "expression"
  expression: "Expression"

  def children(self) -> Iterator[BaseModel]:
    yield self.expression


class ForStatement(BaseModel):
  """A count-controlled ``for`` loop."""

  kind: Literal["for"] = "for"
  keyword_location: Location = Field(default_factory=Location)
  body: "Statement"

  def children(self) -> Iterator[BaseModel]:
    yield self.body


class ForEachStatement(BaseModel):
  """A collection-iteration ``foreach`` loop."""

  kind: Literal["foreach"] = "foreach"
  keyword_location: Location = Field(default_factory=Location)
  body: "Statement"

  def children(self) -> Iterator[BaseModel]:
    yield self.body


class OtherStatement(BaseModel):
  """Any statement the passes do not interpret (declarations, ifs, returns)."""

  kind: Literal["other"] = "other"
  text: str = ""
  expressions: List["Expression"] = Field(default_factory=list)
  statements: List["Statement"] = Field(default_factory=list)

  def children(self) -> Iterator[BaseModel]:
    yield from self.expressions
    yield from self.statements


class MethodDeclaration(BaseModel):
  """A method declaration. ``body`` is None for abstract/extern/expression-bodied methods."""

  kind: Literal["method"] = "method"
  name: str
  symbol: Optional[str] = Field(None, description="Method symbol id that invocations resolve to.")
  parameters: List[str] = Field(default_factory=list)
  body: Optional[Block] = None
  location: Location = Field(default_factory=Location)

  def children(self) -> Iterator[BaseModel]:
    if self.body is not None:
      yield self.body


class ClassDeclaration(BaseModel):
  """
  A (possibly partial) class declaration.

  ``attributes`` lists the attribute names as written in source; the resolved
  attribute classes live on the declared ``TypeSymbol``.
  """

  kind: Literal["class"] = "class"
  name: str
  symbol: Optional[str] = Field(None, description="Metadata name of the declared TypeSymbol (e.g. 'Ns.Grid`1').")
  attributes: List[str] = Field(default_factory=list)
  members: List["Member"] = Field(default_factory=list)
  location: Location = Field(default_factory=Location)

  def children(self) -> Iterator[BaseModel]:
    return iter(self.members)


class SyntaxTree(BaseModel):
  """One source file."""

  path: str = ""
  members: List["Member"] = Field(default_factory=list)

  def children(self) -> Iterator[BaseModel]:
    return iter(self.members)


Expression = Annotated[
  Union[InvocationExpression, IdentifierName, LambdaExpression, LiteralExpression],
  Field(discriminator="kind"),
]

Statement = Annotated[
  Union[Block, ExpressionStatement, ForStatement, ForEachStatement, OtherStatement],
  Field(discriminator="kind"),
]

Member = Annotated[Union[ClassDeclaration, MethodDeclaration], Field(discriminator="kind")]

LoopStatement = Union[ForStatement, ForEachStatement]

for _model in (
  InvocationExpression,
  LambdaExpression,
  Block,
  ExpressionStatement,
  ForStatement,
  ForEachStatement,
  OtherStatement,
  MethodDeclaration,
  ClassDeclaration,
  SyntaxTree,
):
  _model.model_rebuild()
