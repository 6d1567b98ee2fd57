"""Elementary math over the supported working value types.

Kernels are written once against these helpers and work on Python floats,
numpy scalars and arrays, and ``torch.Tensor`` values (whose autograd graph
carries the derivatives). Symbolic strings never reach this module: kernels
render them through their printer instead.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

_TORCH_IMPORT_ERROR: Optional[ImportError] = None
try:
    import torch
except ImportError as exc:
    torch = None  # type: ignore[assignment]
    _TORCH_IMPORT_ERROR = exc


def _require_torch(feature: str) -> None:
    if torch is None:
        raise ModuleNotFoundError(
            f"`torch` is required for {feature}. Install it via `pip install torch`."
        ) from _TORCH_IMPORT_ERROR


def is_symbolic(value: Any) -> bool:
    return isinstance(value, str)


def is_tensor(value: Any) -> bool:
    return torch is not None and isinstance(value, torch.Tensor)


def is_array(value: Any) -> bool:
    return isinstance(value, np.ndarray) and value.ndim > 0


def as_tensor(value: Any, requires_grad: bool = False):
    """Wrap a number as a float64 tensor, optionally tracking gradients."""
    _require_torch("derivative-carrying evaluation")
    return torch.tensor(float(value), dtype=torch.float64, requires_grad=requires_grad)


def exp(x):
    if is_tensor(x):
        return torch.exp(x)
    return np.exp(x)


def log(x):
    if is_tensor(x):
        return torch.log(x)
    return np.log(x)


def tanh(x):
    if is_tensor(x):
        return torch.tanh(x)
    return np.tanh(x)


def sin(x):
    if is_tensor(x):
        return torch.sin(x)
    return np.sin(x)


def cos(x):
    if is_tensor(x):
        return torch.cos(x)
    return np.cos(x)


def sqrt(x):
    if is_tensor(x):
        return torch.sqrt(x)
    return np.sqrt(x)


def relu(x):
    if is_tensor(x):
        return torch.relu(x)
    if is_array(x):
        return np.maximum(x, 0.0)
    return x if x >= 0 else 0.0 * x


def elu(x):
    if is_tensor(x):
        return torch.where(x < 0, torch.exp(x) - 1.0, x)
    if is_array(x):
        return np.where(x < 0, np.exp(np.minimum(x, 0.0)) - 1.0, x)
    return np.exp(x) - 1.0 if x < 0 else x


def divide(a, b):
    """True division that yields inf/nan instead of raising on zero."""
    if is_tensor(a) or is_tensor(b):
        return a / b
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.divide(a, b)


def finite_or(x, fallback: float):
    """Replace non-finite entries of ``x`` with ``fallback``."""
    if is_tensor(x):
        return torch.where(torch.isfinite(x), x, torch.full_like(x, fallback))
    if is_array(x):
        return np.where(np.isfinite(x), x, fallback)
    return x if np.isfinite(x) else fallback


def maximum(a, b):
    """Elementwise maximum of two values of the same working type."""
    if is_tensor(a) or is_tensor(b):
        return torch.maximum(torch.as_tensor(a), torch.as_tensor(b))
    if is_array(a) or is_array(b):
        return np.maximum(a, b)
    return a if a >= b else b


__all__ = [
    "is_symbolic",
    "is_tensor",
    "is_array",
    "as_tensor",
    "exp",
    "log",
    "tanh",
    "sin",
    "cos",
    "sqrt",
    "relu",
    "elu",
    "divide",
    "finite_or",
    "maximum",
]
