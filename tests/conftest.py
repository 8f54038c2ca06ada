import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture()
def sample_text():
    """A short English sentence with a skewed character distribution."""
    return "the quick brown fox jumps over the lazy dog, then sleeps.\n"


def collect_leaves(root):
    """Return ``(symbol, freq)`` for every leaf, left to right."""
    return [(leaf.symbol, leaf.freq) for leaf in root.leaves()]


def count_internal(node):
    """Count the internal nodes of a tree."""
    if node is None or node.is_leaf:
        return 0
    return 1 + count_internal(node.left) + count_internal(node.right)


@pytest.fixture()
def tree_helpers():
    """
    Fixture that provides tree inspection helpers without importing conftest.
    """
    return collect_leaves, count_internal
