#!/usr/bin/env python3
"""
Fit y = x^3 - x with a (1+4) evolution strategy built on active-gene mutation.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

import numpy as np

from cgpexpr import Expression, KernelSet


def main(generations: int = 500, offspring: int = 4) -> None:
    xs = np.linspace(-1.0, 1.0, num=16)
    points = [[float(x)] for x in xs]
    labels = [[float(x ** 3 - x)] for x in xs]

    kernels = KernelSet(["sum", "diff", "mul", "pdiv"])
    parent = Expression(n=1, m=1, r=1, c=15, l=16, arity=2, kernels=kernels, seed=1)
    best = parent.batch_loss(points, labels, "MSE", parallel=4)

    for gen in range(generations):
        champion = parent.get()
        for _ in range(offspring):
            candidate = parent.get()
            parent.mutate_active(2)
            loss = parent.batch_loss(points, labels, "MSE", parallel=4)
            if loss <= best:
                best, champion = loss, parent.get()
            parent.set(candidate)
        parent.set(champion)
        if gen % 100 == 0:
            print(f"gen {gen:4d}  loss={best:.6f}  {parent(['x'])[0]}")
        if best < 1e-12:
            break

    print(f"\nBest loss: {best:.6g}")
    print(f"Expression: {parent(['x'])[0]}")


if __name__ == "__main__":
    main()
