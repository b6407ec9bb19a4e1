"""
Pydantic Schemas for Resolved Symbols.

This module defines the semantic half of a compilation snapshot: the declared
types, their properties and the attributes attached to both. The host
front-end resolves these (base types, attribute classes, display strings of
property types); blazorgen only reads them.

Attributes may be written in JSON either as objects
(``{"name": "ParameterAttribute", "namespace": "Microsoft.AspNetCore.Components"}``)
or as a dotted string shorthand (``"Microsoft.AspNetCore.Components.ParameterAttribute"``).
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator

from blazorgen.enums import TypeKind


class Location(BaseModel):
  """
  A source position reported alongside diagnostics.
  """

  path: str = Field("", description="Source file path.")
  line: int = Field(0, description="1-based line number.")
  column: int = Field(0, description="1-based column number.")

  def __str__(self) -> str:
    return f"{self.path}({self.line},{self.column})"


class AttributeData(BaseModel):
  """
  An attribute application, identified by its resolved attribute class.
  """

  name: str = Field(..., description="Unqualified attribute class name (e.g. 'ParameterAttribute').")
  namespace: str = Field("", description="Containing namespace of the attribute class.")

  @model_validator(mode="before")
  @classmethod
  def _from_dotted_string(cls, data: Any) -> Any:
    """
    Accepts the dotted string shorthand.

    Args:
        data: Raw input value.

    Returns:
        A mapping suitable for field validation.
    """
    if isinstance(data, str):
      namespace, _, name = data.rpartition(".")
      return {"name": name, "namespace": namespace}
    return data

  @property
  def full_name(self) -> str:
    """Namespace-qualified attribute class name."""
    return f"{self.namespace}.{self.name}" if self.namespace else self.name


class PropertySymbol(BaseModel):
  """
  A property-like member declared on a type.
  """

  name: str = Field(..., description="Member identifier.")
  type: str = Field(..., description="Display string of the declared type (e.g. 'string').")
  has_setter: bool = Field(True, description="False for read-only (getter-only) properties.")
  attributes: List[AttributeData] = Field(default_factory=list)
  locations: List[Location] = Field(default_factory=list, description="Every declaring source location.")

  @property
  def attribute_names(self) -> List[str]:
    """Unqualified names of the attached attributes."""
    return [a.name for a in self.attributes]


class TypeSymbol(BaseModel):
  """
  A declared named type with its base type reference and properties.
  """

  name: str = Field(..., description="Unqualified type name, without type parameters.")
  namespace: str = Field("", description="Containing namespace; empty for the global namespace.")
  kind: TypeKind = Field(TypeKind.CLASS)
  type_parameters: List[str] = Field(default_factory=list)
  base_type: Optional[str] = Field(None, description="Qualified name of the immediate base type.")
  attributes: List[AttributeData] = Field(default_factory=list)
  properties: List[PropertySymbol] = Field(default_factory=list, description="Members in declaration order.")
  locations: List[Location] = Field(default_factory=list)

  @property
  def qualified_name(self) -> str:
    """Namespace-qualified name (e.g. 'Testing.Positive.Component')."""
    return f"{self.namespace}.{self.name}" if self.namespace else self.name

  @property
  def metadata_name(self) -> str:
    """
    Qualified name with a generic arity suffix.

    Returns:
        str: e.g. 'Testing.Grid`1' for ``Grid<TItem>``.
    """
    if self.type_parameters:
      return f"{self.qualified_name}`{len(self.type_parameters)}"
    return self.qualified_name

  def has_attribute(self, full_names: List[str]) -> bool:
    """
    Checks whether any attached attribute matches one of the qualified names.

    Args:
        full_names: Namespace-qualified attribute class names.

    Returns:
        bool: True on the first match.
    """
    return any(a.full_name in full_names for a in self.attributes)
