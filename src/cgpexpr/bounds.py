"""Per-gene bounds for CGP chromosomes."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, List, Sequence

from .errors import ConfigurationError, InvalidChromosome
from .layout import GridParameters, gene_index_table


def is_gene_value(value: Any) -> bool:
    """True for integral values; bools and floats are not genes."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class GeneBounds:
    """Parallel lower/upper bound lists plus the gene-index table."""

    lower: List[int]
    upper: List[int]
    gene_idx: List[int]

    def __len__(self) -> int:
        return len(self.lower)

    def is_mutable(self, idx: int) -> bool:
        """A gene with a single legal value can never be mutated."""
        return self.lower[idx] < self.upper[idx]

    def contains(self, chromosome: Sequence[int]) -> bool:
        """True when ``chromosome`` has the right length and respects every bound."""
        if len(chromosome) != len(self.lower):
            return False
        for gene, lo, hi in zip(chromosome, self.lower, self.upper):
            if not is_gene_value(gene) or gene < lo or gene > hi:
                return False
        return True

    def validate(self, chromosome: Sequence[int]) -> List[int]:
        """Return ``chromosome`` as a list of ints or raise ``InvalidChromosome``."""
        if len(chromosome) != len(self.lower):
            raise InvalidChromosome(
                f"Chromosome is incompatible: length {len(chromosome)} "
                f"while {len(self.lower)} genes were expected"
            )
        for idx, gene in enumerate(chromosome):
            if not is_gene_value(gene):
                raise InvalidChromosome(
                    f"Chromosome is incompatible: gene {idx} is {gene!r}, "
                    "genes must be integers"
                )
        genes = [int(g) for g in chromosome]
        for idx, (gene, lo, hi) in enumerate(zip(genes, self.lower, self.upper)):
            if gene < lo or gene > hi:
                raise InvalidChromosome(
                    f"Chromosome is incompatible: gene {idx} is {gene}, "
                    f"allowed range is [{lo}, {hi}]"
                )
        return genes


def connection_bounds(params: GridParameters, column: int) -> tuple:
    """(lower, upper) for a connection gene of a node in ``column``."""
    upper = params.n + column * params.r - 1
    lower = 0
    if column >= params.l:
        lower = params.n + params.r * (column - params.l)
    return lower, upper


def output_bounds(params: GridParameters) -> tuple:
    """(lower, upper) shared by every output gene."""
    upper = params.n + params.r * params.c - 1
    lower = 0
    if params.l <= params.c:
        lower = params.n + params.r * (params.c - params.l)
    return lower, upper


def build_bounds(params: GridParameters, kernel_count: int) -> GeneBounds:
    """
    Compute the legal range of every gene.

    Function genes index the kernel catalogue, connection genes honour the
    levels-back rule of their column and output genes may select any node
    within levels-back of the last column.
    """
    if kernel_count <= 0:
        raise ConfigurationError("Number of basis functions is 0")

    size = params.chromosome_length
    lower = [0] * size
    upper = [0] * size

    k = 0
    for col in range(params.c):
        conn_lo, conn_hi = connection_bounds(params, col)
        for _ in range(params.r):
            upper[k] = kernel_count - 1
            k += 1
            for _ in range(params.arity[col]):
                lower[k] = conn_lo
                upper[k] = conn_hi
                k += 1

    out_lo, out_hi = output_bounds(params)
    for k in range(size - params.m, size):
        lower[k] = out_lo
        upper[k] = out_hi

    return GeneBounds(lower=lower, upper=upper, gene_idx=gene_index_table(params))


__all__ = [
    "GeneBounds",
    "build_bounds",
    "connection_bounds",
    "output_bounds",
    "is_gene_value",
]
