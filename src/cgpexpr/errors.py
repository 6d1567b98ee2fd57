"""Error types raised by CGP expressions."""

from __future__ import annotations


class ExpressionError(ValueError):
    """Base class for invalid-argument errors raised by the library."""


class ConfigurationError(ExpressionError):
    """Grid parameters or kernel catalogue are unusable."""


class ShapeMismatch(ExpressionError):
    """An input or label vector does not match the expression's n / m."""


class InvalidChromosome(ExpressionError):
    """A chromosome has the wrong length or a gene outside its bounds."""


class IndexOutOfRange(ExpressionError):
    """A gene index, node id or kernel id is outside its valid range."""


class BatchSizeError(ExpressionError):
    """A batch is empty, unbalanced, or cannot be split evenly."""


class UnknownLossKind(ExpressionError):
    """The requested loss name is not recognised."""


__all__ = [
    "ExpressionError",
    "ConfigurationError",
    "ShapeMismatch",
    "InvalidChromosome",
    "IndexOutOfRange",
    "BatchSizeError",
    "UnknownLossKind",
]
