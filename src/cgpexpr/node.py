"""Read-only view over the genes of one computational node."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

from .kernels import Kernel


@dataclass(frozen=True)
class NodeGenes:
    """
    Decoded genes of a computational node.

    ``gene_index`` is the chromosome position of the function gene; the
    connection genes follow it directly.
    """

    node_id: int
    column: int
    row: int
    gene_index: int
    function: int
    connections: Tuple[int, ...]

    @property
    def arity(self) -> int:
        return len(self.connections)

    @property
    def gene_positions(self) -> range:
        return range(self.gene_index, self.gene_index + 1 + self.arity)

    def get_signature(self) -> str:
        """Signature of the node's function and wiring."""
        return "|".join(str(g) for g in (self.function, *self.connections))

    def describe(self, kernels: Sequence[Kernel]) -> str:
        """Human-readable form such as ``n4 = sum(n0, n1)``."""
        sources = ", ".join(f"n{c}" for c in self.connections)
        return f"n{self.node_id} = {kernels[self.function].name}({sources})"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "node_id": self.node_id,
            "column": self.column,
            "row": self.row,
            "function": self.function,
            "connections": list(self.connections),
        }


__all__ = ["NodeGenes"]
