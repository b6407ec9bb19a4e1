"""
Enumerations for blazorgen.

This module defines the standard enumerations shared by the snapshot schema,
the generator passes and the diagnostic reporter.
"""

from enum import Enum


class Severity(str, Enum):
  """
  Severity of a reported diagnostic.
  """

  ERROR = "error"
  WARNING = "warning"
  INFO = "info"


class TypeKind(str, Enum):
  """
  Kind of a declared type. Selects the type-level keyword in generated code.
  """

  CLASS = "class"
  INTERFACE = "interface"
  STRUCT = "struct"


class CallRole(str, Enum):
  """
  Role of a render-tree builder invocation inside a loop body.
  """

  OPEN = "open"
  CLOSE = "close"
  SET_KEY = "set_key"
  HELPER = "helper"
  OTHER = "other"
