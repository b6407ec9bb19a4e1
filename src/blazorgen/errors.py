"""
Exception hierarchy for blazorgen.

Expected analysis findings are reported as diagnostics, never raised. These
exceptions cover malformed input only.
"""


class BlazorgenError(Exception):
  """Base class for all blazorgen failures."""


class SnapshotError(BlazorgenError):
  """A compilation snapshot could not be read or failed schema validation."""


class EmitterError(BlazorgenError):
  """An identifier or type display string violates the code emitter's escaping contract."""
