"""Grid parameters and chromosome index arithmetic."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from .errors import ConfigurationError, IndexOutOfRange

ArityLike = Union[int, Sequence[int]]


@dataclass(frozen=True)
class GridParameters:
    """
    Shape of a CGP grid.

    Nodes 0..n-1 are inputs, nodes n..n+r*c-1 are computational nodes laid
    out column-major. The m outputs exist only as trailing genes.
    """

    n: int
    m: int
    r: int
    c: int
    l: int
    arity: Tuple[int, ...]

    def __post_init__(self):
        # A single int is broadcast to every column.
        if isinstance(self.arity, numbers.Integral):
            object.__setattr__(self, "arity", (int(self.arity),) * max(self.c, 0))
        else:
            object.__setattr__(self, "arity", tuple(int(a) for a in self.arity))
        if self.n <= 0:
            raise ConfigurationError("Number of inputs is 0")
        if self.m <= 0:
            raise ConfigurationError("Number of outputs is 0")
        if self.c <= 0:
            raise ConfigurationError("Number of columns is 0")
        if self.r <= 0:
            raise ConfigurationError("Number of rows is 0")
        if self.l <= 0:
            raise ConfigurationError("Number of levels-back is 0")
        if len(self.arity) != self.c:
            raise ConfigurationError(
                f"The arity vector size ({len(self.arity)}) must be the same "
                f"as the number of columns ({self.c})"
            )
        if any(a <= 0 for a in self.arity):
            raise ConfigurationError("Basis functions arity cannot be zero")

    @property
    def node_count(self) -> int:
        """Inputs plus computational nodes."""
        return self.n + self.r * self.c

    @property
    def chromosome_length(self) -> int:
        return self.r * self.c + self.r * sum(self.arity) + self.m

    @property
    def output_offset(self) -> int:
        """Index of the first output gene."""
        return self.chromosome_length - self.m


def is_input_node(params: GridParameters, node_id: int) -> bool:
    return 0 <= node_id < params.n


def is_computational_node(params: GridParameters, node_id: int) -> bool:
    return params.n <= node_id < params.node_count


def check_computational_node(params: GridParameters, node_id: int) -> int:
    """Return ``node_id`` or raise when it does not name a computational node."""
    integral = isinstance(node_id, numbers.Integral) and not isinstance(node_id, bool)
    if not integral or not is_computational_node(params, node_id):
        raise IndexOutOfRange(
            f"node_id requested was: {node_id} but only ids in "
            f"[{params.n}, {params.node_count - 1}] are valid"
        )
    return node_id


def node_column(params: GridParameters, node_id: int) -> int:
    """Column of a computational node (unchecked)."""
    return (node_id - params.n) // params.r


def node_row(params: GridParameters, node_id: int) -> int:
    """Row of a computational node (unchecked)."""
    return (node_id - params.n) % params.r


def node_arity(params: GridParameters, node_id: int) -> int:
    """Arity of a computational node (unchecked)."""
    return params.arity[node_column(params, node_id)]


def gene_index_table(params: GridParameters) -> List[int]:
    """
    Offset of the first gene (the function gene) of every node.

    Input nodes have no genes and map to 0.
    """
    table = [0] * params.node_count
    column_offsets = [0] * params.c
    acc = 0
    for col in range(params.c):
        column_offsets[col] = acc
        acc += params.arity[col]
    for node_id in range(params.n, params.node_count):
        col = node_column(params, node_id)
        row = node_row(params, node_id)
        table[node_id] = (
            params.r * column_offsets[col]
            + row * params.arity[col]
            + (node_id - params.n)
        )
    return table


def connection_gene_range(
    params: GridParameters, gene_idx: Sequence[int], node_id: int
) -> range:
    """Chromosome positions of a node's connection genes."""
    start = gene_idx[node_id] + 1
    return range(start, start + node_arity(params, node_id))


def output_gene_range(params: GridParameters) -> range:
    return range(params.output_offset, params.chromosome_length)


__all__ = [
    "ArityLike",
    "GridParameters",
    "is_input_node",
    "is_computational_node",
    "check_computational_node",
    "node_column",
    "node_row",
    "node_arity",
    "gene_index_table",
    "connection_gene_range",
    "output_gene_range",
]
