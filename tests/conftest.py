import os
import sys
from pathlib import Path
from typing import Callable, Mapping, Optional

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'layertools' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.archives import DictMemberSource, build_jar, layered_members
from layertools.core.stdlib_logging import reset_stdlib_logging_for_tests


@pytest.fixture(autouse=True)
def _isolate_layertools_env(monkeypatch: pytest.MonkeyPatch):
    """Drop LAYERTOOLS_* overrides from the outer environment and reset logging."""
    for key in list(os.environ):
        if key.startswith("LAYERTOOLS_"):
            monkeypatch.delenv(key, raising=False)
    reset_stdlib_logging_for_tests()
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def jar_factory(tmp_path: Path) -> Callable[..., Path]:
    """Build a real jar file under tmp_path from a member mapping."""

    def _make(members: Optional[Mapping] = None, name: str = "app.jar") -> Path:
        return build_jar(tmp_path / name, members if members is not None else layered_members())

    return _make


@pytest.fixture
def layered_jar(jar_factory) -> Path:
    return jar_factory()


@pytest.fixture
def memory_archive() -> DictMemberSource:
    return DictMemberSource(layered_members())
