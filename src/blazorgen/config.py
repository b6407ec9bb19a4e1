"""
Generator Configuration Store.

Every marker table and naming heuristic the passes rely on lives here as
explicit configuration data, instead of being buried in string comparisons:

- Which class attributes opt a component in or out of dispatch generation.
- Which property attributes make a property a component parameter.
- Which routine names and parameter names identify a render routine.
- Which builder calls open, close and key a render-tree instantiation.

Values are read from ``[tool.blazorgen]`` in the nearest ``pyproject.toml`` and
can be overridden from the command line.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.markup import escape

from blazorgen.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

MARKER_NAMESPACE = "Excubo.Generators.Blazor"
INCLUSION_MARKER = "GenerateSetParametersAsyncAttribute"
EXCLUSION_MARKER = "DoNotGenerateSetParametersAsyncAttribute"


class GeneratorConfig(BaseModel):
  """
  Configuration for both generator passes.
  """

  # --- Dispatch generation ---
  inclusion_markers: List[str] = Field(
    default_factory=lambda: [f"{MARKER_NAMESPACE}.{INCLUSION_MARKER}"],
    description="Qualified attribute class names that opt a class into dispatch generation.",
  )
  exclusion_markers: List[str] = Field(
    default_factory=lambda: [f"{MARKER_NAMESPACE}.{EXCLUSION_MARKER}"],
    description="Qualified attribute class names that opt a class out, overriding inclusion.",
  )
  imports_class_name: str = Field(
    "_Imports", description="Synthetic class name used for framework-wide import files; never a candidate."
  )
  parameter_markers: List[str] = Field(
    default_factory=lambda: [
      "Parameter",
      "ParameterAttribute",
      "CascadingParameter",
      "CascadingParameterAttribute",
    ],
    description="Unqualified attribute names that mark a property as a component parameter.",
  )

  # --- Key analysis ---
  render_method_name: str = Field("BuildRenderTree", description="Name of the render routine method.")
  builder_markers: List[str] = Field(
    default_factory=lambda: ["builder"],
    description="Substrings of an identifier that denote a render-tree builder (case-sensitive).",
  )
  open_calls: List[str] = Field(
    default_factory=lambda: ["OpenElement", "OpenComponent"],
    description="Builder methods that begin an element/component instantiation.",
  )
  close_calls: List[str] = Field(
    default_factory=lambda: ["CloseElement", "CloseComponent"],
    description="Builder methods that end an element/component instantiation.",
  )
  set_key_calls: List[str] = Field(
    default_factory=lambda: ["SetKey"], description="Builder methods that key an instantiation."
  )
  max_inline_depth: int = Field(4, ge=0, description="How many nested helper calls the key analyzer follows.")

  # --- Pass selection ---
  generate_dispatch: bool = Field(True, description="Run the SetParametersAsync dispatch generator.")
  analyze_keys: bool = Field(True, description="Run the render-tree key analyzer.")

  @field_validator(
    "inclusion_markers",
    "exclusion_markers",
    "builder_markers",
    "parameter_markers",
    "open_calls",
    "close_calls",
    "set_key_calls",
    mode="before",
  )
  @classmethod
  def coerce_single_name(cls, v: Any) -> Any:
    """
    Accepts a bare string where a list is expected (``builder_markers=builder``).

    Args:
        v: Raw value.

    Returns:
        The value, wrapped in a list if it was a string.
    """
    if isinstance(v, str):
      return [v]
    return v

  @field_validator("builder_markers", "parameter_markers", "open_calls", "close_calls", "set_key_calls")
  @classmethod
  def validate_non_empty_names(cls, v: List[str]) -> List[str]:
    """
    Rejects blank entries, which would match every identifier.

    Args:
        v: The configured names.

    Returns:
        List[str]: The names, stripped.

    Raises:
        ValueError: If an entry is blank.
    """
    cleaned = [item.strip() for item in v]
    if any(not item for item in cleaned):
      raise ValueError("Marker and call names must be non-empty strings.")
    return cleaned

  def is_builder_name(self, identifier: str) -> bool:
    """
    Checks whether an identifier names a render-tree builder.

    Args:
        identifier: Parameter or argument name.

    Returns:
        bool: True if any builder marker is a substring.
    """
    return any(marker in identifier for marker in self.builder_markers)

  @classmethod
  def load(
    cls,
    overrides: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "GeneratorConfig":
    """
    Loads configuration from pyproject.toml and applies overrides.

    Args:
        overrides: Values taking precedence over the TOML settings (e.g. from the CLI).
        search_path: Directory to start searching for TOML config.

    Returns:
        GeneratorConfig: The fully resolved configuration object.

    Raises:
        ValueError: If the merged settings fail validation.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)
    merged = {**toml_config, **(overrides or {})}
    try:
      return cls.model_validate(merged)
    except ValidationError as e:
      raise ValueError(f"Generator configuration validation failed: {e}")


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches parents for 'pyproject.toml' and extracts the blazorgen section.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("blazorgen", {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (bool, int, comma-separated list, or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid config format: '{escape(item)}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    elif "," in val_str:
      final_val = [part.strip() for part in val_str.split(",") if part.strip()]
    else:
      try:
        final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
