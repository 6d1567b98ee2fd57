"""Mutation operators for CGP expressions.

Every operator is built on :func:`_redraw`, which replaces one gene with a
different value drawn uniformly from its bounds. Genes whose bounds allow a
single value are skipped, which is what guarantees the redraw loop ends.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from .bounds import is_gene_value
from .errors import IndexOutOfRange
from .layout import node_arity

if TYPE_CHECKING:
    from .expression import Expression

logger = logging.getLogger(__name__)


def _check_gene_index(expression: "Expression", idx: Any) -> int:
    size = expression.params.chromosome_length
    if not is_gene_value(idx) or idx < 0 or idx >= size:
        raise IndexOutOfRange(
            f"idx of gene to be mutated is out of bounds: {idx!r} "
            f"(chromosome has {size} genes)"
        )
    return int(idx)


def _redraw(expression: "Expression", idx: int) -> bool:
    """Redraw gene ``idx`` without refreshing the active set. True if it changed."""
    bounds = expression.bounds
    if not bounds.is_mutable(idx):
        return False
    rng = expression.rng
    lo, hi = bounds.lower[idx], bounds.upper[idx]
    current = expression.gene(idx)
    new_value = current
    while new_value == current:
        new_value = rng.randint(lo, hi)
    expression._assign_gene(idx, new_value)
    return True


def mutate_gene(expression: "Expression", idx: int) -> None:
    """Mutate exactly one gene within its bounds."""
    idx = _check_gene_index(expression, idx)
    if _redraw(expression, idx):
        expression.recompute_derived_state()


def mutate_genes(expression: "Expression", idxs: Iterable[int]) -> None:
    """
    Mutate several genes, refreshing the active set once at the end.

    All indices are checked before any gene is touched.
    """
    checked = [_check_gene_index(expression, idx) for idx in idxs]
    changed = False
    for idx in checked:
        changed = _redraw(expression, idx) or changed
    logger.debug("Mutated %d genes (changed=%s)", len(checked), changed)
    if changed:
        expression.recompute_derived_state()


def mutate_random(expression: "Expression", N: int = 1) -> None:
    """Mutate ``N`` genes picked uniformly (with replacement) from the chromosome."""
    rng = expression.rng
    last = expression.params.chromosome_length - 1
    changed = False
    for _ in range(N):
        changed = _redraw(expression, rng.randint(0, last)) or changed
    logger.debug("Mutated %d random genes (changed=%s)", N, changed)
    if changed:
        expression.recompute_derived_state()


def mutate_active(expression: "Expression", N: int = 1) -> None:
    """
    Mutate ``N`` active genes (function, connection or output genes).

    Each draw samples the active set left by the previous one.
    """
    rng = expression.rng
    for _ in range(N):
        genes = expression.active_genes
        mutate_gene(expression, genes[rng.randint(0, len(genes) - 1)])


def _random_active_computational_node(expression: "Expression") -> int:
    # Callers make sure at least one computational node is active.
    rng = expression.rng
    nodes: Sequence[int] = expression.active_nodes
    n = expression.params.n
    node_id = nodes[rng.randint(0, len(nodes) - 1)]
    while node_id < n:
        node_id = nodes[rng.randint(0, len(nodes) - 1)]
    return node_id


def _has_active_computational_node(expression: "Expression") -> bool:
    return len(expression.active_genes) > expression.params.m


def mutate_active_fgene(expression: "Expression", N: int = 1) -> None:
    """Mutate the function gene of ``N`` randomly picked active nodes."""
    if not _has_active_computational_node(expression):
        return
    gene_idx = expression.bounds.gene_idx
    for _ in range(N):
        node_id = _random_active_computational_node(expression)
        mutate_gene(expression, gene_idx[node_id])


def mutate_active_cgene(expression: "Expression", N: int = 1) -> None:
    """Mutate one connection gene of ``N`` randomly picked active nodes."""
    if not _has_active_computational_node(expression):
        return
    rng = expression.rng
    gene_idx = expression.bounds.gene_idx
    for _ in range(N):
        node_id = _random_active_computational_node(expression)
        offset = rng.randint(1, node_arity(expression.params, node_id))
        mutate_gene(expression, gene_idx[node_id] + offset)


def mutate_ogene(expression: "Expression", N: int = 1) -> None:
    """Mutate ``N`` output genes, each picked uniformly among the ``m`` outputs."""
    rng = expression.rng
    params = expression.params
    for _ in range(N):
        mutate_gene(expression, params.output_offset + rng.randint(0, params.m - 1))


__all__ = [
    "mutate_gene",
    "mutate_genes",
    "mutate_random",
    "mutate_active",
    "mutate_active_fgene",
    "mutate_active_cgene",
    "mutate_ogene",
]
