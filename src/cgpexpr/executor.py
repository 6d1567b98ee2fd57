"""Forward evaluation of CGP expressions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

from . import values
from .errors import ShapeMismatch
from .layout import node_arity

if TYPE_CHECKING:
    from .expression import Expression


class ExpressionExecutor:
    """
    Evaluates an expression over one input point.

    The same pass serves every working type: floats, numpy arrays (one
    evaluation per array element, vectorised), ``torch.Tensor`` values and
    strings. With strings each kernel's printer is used instead of its
    function, producing the symbolic form of the outputs.
    """

    def __init__(self, expression: "Expression"):
        self.expression = expression

    def execute(
        self,
        point: Sequence[Any],
        trace: Optional[List[Tuple[int, Any]]] = None,
    ) -> List[Any]:
        """
        Evaluate the active nodes and return the ``m`` output values.

        Args:
            point: ``n`` input values of the working type
            trace: Optional list receiving ``(node_id, value)`` per evaluated node
        Returns:
            List of output values, in output-gene order
        """
        expr = self.expression
        params = expr.params
        if len(point) != params.n:
            raise ShapeMismatch(
                f"Input size is incompatible: got {len(point)} values "
                f"while the expression has {params.n} inputs"
            )

        symbolic = values.is_symbolic(point[0])
        x = expr.chromosome
        gene_idx = expr.bounds.gene_idx
        kernels = expr.kernels
        node: List[Any] = [None] * params.node_count

        # Connection genes always point to lower node ids, so ascending
        # order guarantees operands are ready.
        for node_id in expr.active_nodes:
            if node_id < params.n:
                node[node_id] = point[node_id]
            else:
                idx = gene_idx[node_id]
                arity = node_arity(params, node_id)
                operands = [node[x[idx + j + 1]] for j in range(arity)]
                kernel = kernels[x[idx]]
                node[node_id] = kernel.render(operands) if symbolic else kernel(operands)
            if trace is not None:
                trace.append((node_id, node[node_id]))

        offset = params.output_offset
        return [node[x[offset + i]] for i in range(params.m)]


__all__ = ["ExpressionExecutor"]
