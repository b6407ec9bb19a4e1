"""
Structured C# Text Writer.

Generated code is assembled line by line through `CSharpWriter`, which owns
indentation and brace placement, instead of through format-string templates.
Every piece of host-supplied text passes through one of the escaping helpers
before it reaches the writer:

- `escape_identifier`: member, type and type-parameter names.
- `escape_namespace`: dotted namespace names.
- `escape_type`: type display strings used in casts.
- `string_literal`: values placed inside ``"..."``.

A value that cannot be made safe raises `EmitterError`.
"""

import re
from contextlib import contextmanager
from typing import Iterator, List, Optional

from blazorgen.errors import EmitterError

CSHARP_KEYWORDS = frozenset(
  {
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char", "checked",
    "class", "const", "continue", "decimal", "default", "delegate", "do", "double", "else",
    "enum", "event", "explicit", "extern", "false", "finally", "fixed", "float", "for",
    "foreach", "goto", "if", "implicit", "in", "int", "interface", "internal", "is", "lock",
    "long", "namespace", "new", "null", "object", "operator", "out", "override", "params",
    "private", "protected", "public", "readonly", "ref", "return", "sbyte", "sealed", "short",
    "sizeof", "stackalloc", "static", "string", "struct", "switch", "this", "throw", "true",
    "try", "typeof", "uint", "ulong", "unchecked", "unsafe", "ushort", "using", "virtual",
    "void", "volatile", "while",
  }
)  # fmt: skip

_IDENTIFIER = re.compile(r"^@?[A-Za-z_][A-Za-z0-9_]*$")
_TYPE_DISPLAY = re.compile(r"^[A-Za-z0-9_.<>,\[\]?:@ ]+$")


def escape_identifier(name: str) -> str:
  """
  Validates an identifier and prefixes reserved keywords with ``@``.

  Args:
      name: Identifier as declared (with or without a leading ``@``).

  Returns:
      str: Identifier safe to emit.

  Raises:
      EmitterError: If the name is not a C# identifier.
  """
  if not _IDENTIFIER.match(name):
    raise EmitterError(f"Not a valid identifier: {name!r}")
  if name in CSHARP_KEYWORDS:
    return f"@{name}"
  return name


def escape_namespace(namespace: str) -> str:
  """Validates each segment of a dotted namespace."""
  return ".".join(escape_identifier(part) for part in namespace.split("."))


def escape_type(display: str) -> str:
  """
  Validates a type display string for use in a cast.

  Args:
      display: e.g. 'string', 'System.Collections.Generic.List<int>', 'int?'.

  Returns:
      str: The stripped display string.

  Raises:
      EmitterError: If the string contains characters outside the type grammar.
  """
  stripped = display.strip()
  if not stripped or not _TYPE_DISPLAY.match(stripped):
    raise EmitterError(f"Not a valid type display string: {display!r}")
  return stripped


def string_literal(value: str) -> str:
  """Renders a regular C# string literal."""
  escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")
  return f'"{escaped}"'


class CSharpWriter:
  """
  Line-oriented writer with brace-delimited blocks.

  Uses four-space indentation and ``\\n`` line endings; blank lines carry no
  trailing whitespace.
  """

  INDENT = "    "

  def __init__(self) -> None:
    self._lines: List[str] = []
    self._level = 0

  def line(self, text: str = "") -> None:
    if text:
      self._lines.append(f"{self.INDENT * self._level}{text}")
    else:
      self._lines.append("")

  @contextmanager
  def indented(self) -> Iterator[None]:
    self._level += 1
    try:
      yield
    finally:
      self._level -= 1

  @contextmanager
  def block(self, header: Optional[str] = None) -> Iterator[None]:
    """
    Writes ``header``, an opening brace, the body one level deeper, and a closing brace.

    Args:
        header: Line preceding the brace (None for a bare block).
    """
    if header is not None:
      self.line(header)
    self.line("{")
    with self.indented():
      yield
    self.line("}")

  def render(self) -> str:
    return "\n".join(self._lines) + "\n"
