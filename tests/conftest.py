"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Golden-file comparison for generated C# sources.
- Snapshot fixture loading.
- Console isolation so log output from one test never leaks into another.
"""

import io
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest
from rich.console import Console

# Add src to path so we can import 'blazorgen' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from blazorgen.model.compilation import Compilation  # noqa: E402
from blazorgen.model.loader import load_snapshot  # noqa: E402
from blazorgen.utils.console import reset_console, set_console  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"
GOLDEN_DIR = Path(__file__).parent / "golden"


class GoldenAssert:
  """
  Compares generated text against files stored under ``tests/golden``.
  """

  def __init__(self, request: pytest.FixtureRequest):
    self.request = request
    self.golden_dir = GOLDEN_DIR
    self.update_mode = request.config.getoption("--update-snapshots", default=False)

  def assert_match(self, name: str, content: str, normalizer: Optional[Callable[[str], str]] = None):
    """
    Compares content against the stored golden file.

    Args:
        name: Golden file name (e.g. 'Testing.Positive.Component_override.cs').
        content: The actual generated text.
        normalizer: Optional function applied to both sides before comparison.
    """
    golden_file = self.golden_dir / name
    content = content.replace("\r\n", "\n")

    if self.update_mode:
      self.golden_dir.mkdir(parents=True, exist_ok=True)
      golden_file.write_text(content, encoding="utf-8")
      return

    assert golden_file.exists(), f"Missing golden file {name}. Run pytest with --update-snapshots to create it."
    expected = golden_file.read_text(encoding="utf-8").replace("\r\n", "\n")

    lhs = normalizer(content) if normalizer else content
    rhs = normalizer(expected) if normalizer else expected

    assert lhs == rhs, f"Golden mismatch for {name}. Run pytest with --update-snapshots to accept changes."


@pytest.fixture
def golden(request):
  """Fixture to assert generated C# matches a stored golden file."""
  return GoldenAssert(request)


@pytest.fixture
def load_fixture() -> Callable[[str], Compilation]:
  """Returns a loader for JSON snapshots stored under ``tests/fixtures``."""

  def _load(name: str) -> Compilation:
    return load_snapshot(FIXTURES_DIR / name)

  return _load


@pytest.fixture
def fixtures_dir() -> Path:
  return FIXTURES_DIR


@pytest.fixture(autouse=True)
def recording_console():
  """
  Routes console and log output into a recording console for each test.

  Yields:
      Console: The recording backend; ``export_text()`` returns what was printed.
  """
  recorder = Console(record=True, file=io.StringIO(), width=200, force_terminal=False)
  set_console(recorder)
  yield recorder
  reset_console()


def pytest_addoption(parser):
  """Add CLI flag to update golden files."""
  parser.addoption("--update-snapshots", action="store_true", default=False, help="Update golden files")
