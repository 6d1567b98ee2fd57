"""Enumerations shared across the library."""

from enum import IntEnum
from typing import Dict

from .errors import UnknownLossKind


class LossType(IntEnum):
    """Per-point loss reductions."""

    MSE = 0  # mean squared error
    CE = 1  # cross entropy over softmax-normalised outputs


LOSS_NAMES: Dict[str, LossType] = {
    "MSE": LossType.MSE,
    "CE": LossType.CE,
}


def resolve_loss_type(name: str) -> LossType:
    """Map a loss name ("MSE" or "CE") to its enum member."""
    try:
        return LOSS_NAMES[name]
    except (KeyError, TypeError):
        raise UnknownLossKind(
            f"The requested loss was: {name!r} while only "
            f"{', '.join(LOSS_NAMES)} are allowed."
        ) from None


__all__ = ["LossType", "LOSS_NAMES", "resolve_loss_type"]
