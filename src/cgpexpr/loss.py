"""Per-point and batch losses of CGP expressions."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from functools import reduce
from typing import TYPE_CHECKING, Any, Sequence, Union

from . import values
from .enums import LossType, resolve_loss_type
from .errors import BatchSizeError, ShapeMismatch, UnknownLossKind

if TYPE_CHECKING:
    from .expression import Expression

logger = logging.getLogger(__name__)


def point_loss(
    expression: "Expression",
    point: Sequence[Any],
    label: Sequence[Any],
    loss_type: Union[LossType, str] = LossType.MSE,
):
    """
    Loss of the expression on a single data point.

    ``LossType.MSE`` averages the squared output errors; ``LossType.CE``
    applies a softmax to the outputs and returns ``-sum(label * log(p))``.
    A loss name such as "MSE" is accepted too.
    """
    n, m = expression.params.n, expression.params.m
    if len(point) != n:
        raise ShapeMismatch(
            "When computing the loss the point dimension (input) seemed wrong, "
            f"it was: {len(point)} while I expected: {n}"
        )
    if len(label) != m:
        raise ShapeMismatch(
            "When computing the loss the prediction dimension (output) seemed wrong, "
            f"it was: {len(label)} while I expected: {m}"
        )

    if isinstance(loss_type, str):
        loss_type = resolve_loss_type(loss_type)
    outputs = expression(point)
    if loss_type == LossType.MSE:
        retval = 0.0
        for out, target in zip(outputs, label):
            retval = retval + (out - target) * (out - target)
        return retval / len(outputs)

    if loss_type == LossType.CE:
        # Shift by the max before exponentiating.
        top = reduce(values.maximum, outputs)
        exps = [values.exp(out - top) for out in outputs]
        total = reduce(lambda a, b: a + b, exps)
        retval = 0.0
        for e, target in zip(exps, label):
            retval = retval + values.log(e / total) * target
        return -retval

    raise UnknownLossKind(f"Unsupported loss type {loss_type!r}")


def batch_loss(
    expression: "Expression",
    points: Sequence[Sequence[Any]],
    labels: Sequence[Sequence[Any]],
    loss: str = "MSE",
    parallel: int = 0,
):
    """
    Mean loss over a batch.

    Args:
        expression: The expression to evaluate (only read)
        points: Input points
        labels: Labels, one per point
        loss: "MSE" or "CE"
        parallel: 0 evaluates serially; k > 0 splits the batch into k equal
            contiguous chunks evaluated by k worker threads
    Returns:
        Sum of the point losses divided by the batch size
    """
    if len(points) != len(labels):
        raise BatchSizeError(
            f"Data and label size mismatch data size is: {len(points)} "
            f"while label size is: {len(labels)}"
        )
    if len(points) == 0:
        raise BatchSizeError("Data size cannot be zero")
    loss_type = resolve_loss_type(loss)
    batch_size = len(points)

    if parallel <= 0:
        retval = 0.0
        for point, label in zip(points, labels):
            retval = retval + point_loss(expression, point, label, loss_type)
        return retval / batch_size

    if batch_size % parallel != 0:
        raise BatchSizeError(
            f"The batch size is: {batch_size} and cannot be divided into {parallel} parts."
        )
    chunk = batch_size // parallel
    logger.debug("Batch loss over %d points in %d chunks of %d", batch_size, parallel, chunk)

    lock = threading.Lock()
    accumulator = [0.0]

    def worker(start: int) -> None:
        err = 0.0
        for i in range(start, start + chunk):
            err = err + point_loss(expression, points[i], labels[i], loss_type)
        with lock:
            accumulator[0] = accumulator[0] + err

    with ThreadPoolExecutor(max_workers=parallel) as pool:
        futures = [pool.submit(worker, start) for start in range(0, batch_size, chunk)]
        for future in futures:
            future.result()

    return accumulator[0] / batch_size


__all__ = ["point_loss", "batch_loss"]
