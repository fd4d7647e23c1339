import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
TESTS = ROOT / "tests"

# Ensure the project sources and shared test doubles are importable without an
# installed package.
for path in (SRC, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from collection_helpers import ManualDebounceScheduler, ScriptedFetcher


@pytest.fixture
def manual_debounce() -> ManualDebounceScheduler:
    return ManualDebounceScheduler()


@pytest.fixture
def scripted_fetcher() -> ScriptedFetcher:
    return ScriptedFetcher()


@pytest.fixture(scope="module")
def qapp():
    """Create a QApplication for Qt adapter tests."""
    pytest.importorskip("PySide6", reason="PySide6 is required", exc_type=ImportError)
    pytest.importorskip("PySide6.QtWidgets", reason="Qt widgets not available", exc_type=ImportError)
    from PySide6.QtWidgets import QApplication

    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
