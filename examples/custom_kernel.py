#!/usr/bin/env python3
"""
Demonstrate registering a custom kernel and inspecting an expression that uses it.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from cgpexpr import Expression, Kernel, KernelSet, kernel_registry, register_kernel


def register_affine() -> Kernel:
    """Register a kernel computing 1.25 * a + b."""
    try:
        return register_kernel(
            "affine",
            lambda ops: ops[0] * 1.25 + ops[1],
            lambda ops: f"(1.25*{ops[0]}+{ops[1]})",
            arity=2,
            doc="Scales the first operand then adds the second.",
        )
    except ValueError:
        existing = kernel_registry.get("affine")
        if existing is None:
            raise
        return existing


def main() -> None:
    register_affine()

    kernels = KernelSet(["affine", "mul"])
    ex = Expression(n=2, m=1, r=1, c=2, l=2, arity=2, kernels=kernels)
    # n2 = affine(x, y), n3 = n2 * n2
    ex.set([0, 0, 1, 1, 2, 2, 3])

    for x in [-1.0, 0.5, 3.0]:
        print(f"x={x:+.1f} -> y={ex([x, 2.0])[0]:.4f}")

    print(f"Symbolic: {ex(['x', 'y'])[0]}")
    print("Human-readable trace:")
    for line in ex.to_human_readable():
        print(" ", line)


if __name__ == "__main__":
    main()
