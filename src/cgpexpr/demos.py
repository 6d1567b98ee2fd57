"""Example workflows kept for quick experimentation."""

from __future__ import annotations

import numpy as np

from . import values
from .enums import LossType
from .expression import Expression
from .kernels import KernelSet


def example_expression_tour(seed: int = 23):
    """Example: build, render, evaluate and mutate an expression."""
    print("=== CGP Expression Tour ===\n")

    kernels = KernelSet(["sum", "diff", "mul", "pdiv"])
    ex = Expression(n=1, m=1, r=1, c=10, l=11, arity=2, kernels=kernels, seed=seed)
    print(ex)

    print("Nodes:")
    for line in ex.to_human_readable():
        print(f"  {line}")

    print(f"\nSymbolic form: {ex(['x'])[0]}")

    xs = np.linspace(-3.0, 3.0, num=13)
    ys = xs ** 2 + 2 * xs + 1
    print(f"Vectorised output at 13 points: {np.round(ex([xs])[0], 3)}")

    points = [[float(x)] for x in xs]
    labels = [[float(y)] for y in ys]
    print(f"MSE vs x^2+2x+1: {ex.batch_loss(points, labels, 'MSE'):.4f}")

    before = ex.get_signature()
    ex.mutate_active(2)
    print(f"\nAfter 2 active mutations: {ex(['x'])[0]}")
    print(f"Phenotype changed: {before != ex.get_signature()}")
    return ex


def example_gradient_of_loss(seed: int = 7):
    """Example: derivatives of an expression's loss through torch autograd."""
    values._require_torch("example_gradient_of_loss")
    import torch

    print("=== CGP Loss Gradient ===\n")

    kernels = KernelSet(["sum", "mul", "sin"])
    ex = Expression(n=2, m=1, r=2, c=4, l=5, arity=2, kernels=kernels, seed=seed)
    print(f"Expression: {ex(['x', 'y'])[0]}")

    point = [values.as_tensor(0.5, requires_grad=True), values.as_tensor(-1.5, requires_grad=True)]
    label = [torch.tensor(1.0, dtype=torch.float64)]
    loss = ex.loss(point, label, LossType.MSE)
    if torch.is_tensor(loss) and loss.requires_grad:
        loss.backward()
    grads = [p.grad.item() if p.grad is not None else 0.0 for p in point]
    print(f"Loss: {float(loss):.6f}")
    print(f"d loss / d input: {grads}")
    return float(loss), grads


__all__ = ["example_expression_tour", "example_gradient_of_loss"]
