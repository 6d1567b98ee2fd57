"""Test configuration for local imports without installing the package."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure():
    """Ensure the src/ directory is importable for tests."""
    root = Path(__file__).resolve().parents[1] / "src"
    sys.path.insert(0, str(root))


@pytest.fixture
def adder():
    """Single ``sum`` node over two inputs, wired as out = x0 + x1."""
    from cgpexpr import Expression, KernelSet

    ex = Expression(n=2, m=1, r=1, c=1, l=1, arity=2, kernels=KernelSet(["sum"]), seed=0)
    ex.set([0, 0, 1, 2])
    return ex


@pytest.fixture
def grid():
    from cgpexpr import Expression, KernelSet

    kernels = KernelSet(["sum", "diff", "mul", "pdiv", "sin"])
    return Expression(n=3, m=2, r=3, c=5, l=2, arity=[2, 3, 2, 2, 2], kernels=kernels, seed=11)
