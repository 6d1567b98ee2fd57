"""Cartesian Genetic Programming expressions."""

from .errors import (
    ExpressionError,
    ConfigurationError,
    ShapeMismatch,
    InvalidChromosome,
    IndexOutOfRange,
    BatchSizeError,
    UnknownLossKind,
)
from .enums import LossType, LOSS_NAMES, resolve_loss_type
from .layout import (
    GridParameters,
    gene_index_table,
    node_column,
    node_row,
    node_arity,
)
from .bounds import GeneBounds, build_bounds
from .kernels import (
    Kernel,
    KernelRegistry,
    KernelSet,
    kernel_registry,
    register_kernel,
)
from .node import NodeGenes
from .executor import ExpressionExecutor
from .expression import (
    DEFAULT_SEED,
    Expression,
    collect_active_genes,
    collect_active_nodes,
)
from .loss import batch_loss, point_loss
from .demos import example_expression_tour, example_gradient_of_loss

__all__ = [
    "ExpressionError",
    "ConfigurationError",
    "ShapeMismatch",
    "InvalidChromosome",
    "IndexOutOfRange",
    "BatchSizeError",
    "UnknownLossKind",
    "LossType",
    "LOSS_NAMES",
    "resolve_loss_type",
    "GridParameters",
    "gene_index_table",
    "node_column",
    "node_row",
    "node_arity",
    "GeneBounds",
    "build_bounds",
    "Kernel",
    "KernelRegistry",
    "KernelSet",
    "kernel_registry",
    "register_kernel",
    "NodeGenes",
    "ExpressionExecutor",
    "DEFAULT_SEED",
    "Expression",
    "collect_active_genes",
    "collect_active_nodes",
    "batch_loss",
    "point_loss",
    "example_expression_tour",
    "example_gradient_of_loss",
]
