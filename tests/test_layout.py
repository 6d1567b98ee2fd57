import numpy as np
import pytest

from cgpexpr import ConfigurationError, Expression, GridParameters, KernelSet, gene_index_table
from cgpexpr.layout import node_column, node_row


def test_chromosome_length_matches_grid():
    params = GridParameters(n=3, m=2, r=3, c=5, l=2, arity=[2, 3, 2, 2, 1])
    assert params.chromosome_length == 3 * 5 + 3 * (2 + 3 + 2 + 2 + 1) + 2
    assert params.output_offset == params.chromosome_length - 2
    assert params.node_count == 3 + 15


def test_int_arity_is_broadcast():
    params = GridParameters(n=1, m=1, r=2, c=4, l=4, arity=2)
    assert params.arity == (2, 2, 2, 2)


def test_gene_index_offsets_unique_and_in_range():
    params = GridParameters(n=3, m=2, r=3, c=5, l=2, arity=[2, 3, 2, 2, 1])
    table = gene_index_table(params)
    offsets = table[params.n:]
    assert all(t == 0 for t in table[:params.n])
    assert len(set(offsets)) == len(offsets)
    assert all(0 <= t < params.output_offset for t in offsets)
    assert offsets == sorted(offsets)


def test_gene_index_follows_column_major_layout():
    params = GridParameters(n=2, m=1, r=2, c=2, l=2, arity=[2, 3])
    # column 0: node 2 at 0, node 3 at 3; column 1: node 4 at 6, node 5 at 10
    assert gene_index_table(params) == [0, 0, 0, 3, 6, 10]
    assert node_column(params, 5) == 1
    assert node_row(params, 5) == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(n=0, m=1, r=1, c=1, l=1, arity=2),
        dict(n=1, m=0, r=1, c=1, l=1, arity=2),
        dict(n=1, m=1, r=1, c=0, l=1, arity=2),
        dict(n=1, m=1, r=1, c=1, l=0, arity=2),
        dict(n=1, m=1, r=1, c=2, l=1, arity=[2]),
        dict(n=1, m=1, r=1, c=2, l=1, arity=[2, 0]),
    ],
)
def test_invalid_grid_parameters(kwargs):
    with pytest.raises(ConfigurationError):
        GridParameters(**kwargs)


def test_zero_rows_rejected_before_anything_else():
    with pytest.raises(ConfigurationError):
        Expression(n=2, m=1, r=0, c=1, l=1, arity=2, kernels=KernelSet(["sum"]))


def test_empty_kernel_set_rejected():
    with pytest.raises(ConfigurationError):
        Expression(n=2, m=1, r=1, c=1, l=1, arity=2, kernels=KernelSet())


def test_column_narrower_than_kernel_rejected():
    with pytest.raises(ConfigurationError):
        Expression(n=2, m=1, r=1, c=2, l=2, arity=[2, 1], kernels=KernelSet(["sum", "pdiv"]))


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        GridParameters(n=1, m=1, r=0, c=1, l=1, arity=1)


def test_numpy_int_arity_is_broadcast():
    params = GridParameters(n=1, m=1, r=2, c=3, l=3, arity=np.int64(2))
    assert params.arity == (2, 2, 2)
    assert all(type(a) is int for a in params.arity)
