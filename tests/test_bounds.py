import pytest

from cgpexpr import ConfigurationError, GridParameters, InvalidChromosome, build_bounds


def test_function_connection_and_output_bounds():
    params = GridParameters(n=2, m=1, r=2, c=3, l=1, arity=2)
    bounds = build_bounds(params, kernel_count=4)
    gene_idx = bounds.gene_idx

    for node_id in range(params.n, params.node_count):
        assert bounds.lower[gene_idx[node_id]] == 0
        assert bounds.upper[gene_idx[node_id]] == 3

    # column 0 connects to inputs only, column 2 (l=1) only to column 1
    node_col0, node_col2 = 2, 6
    assert bounds.lower[gene_idx[node_col0] + 1] == 0
    assert bounds.upper[gene_idx[node_col0] + 1] == 1
    assert bounds.lower[gene_idx[node_col2] + 1] == 4
    assert bounds.upper[gene_idx[node_col2] + 1] == 5

    # outputs may only pick nodes of the last column
    assert bounds.lower[-1] == 6
    assert bounds.upper[-1] == 7


def test_output_bounds_reach_inputs_when_levels_back_exceeds_columns():
    params = GridParameters(n=1, m=1, r=1, c=3, l=4, arity=1)
    bounds = build_bounds(params, kernel_count=2)
    assert (bounds.lower[-1], bounds.upper[-1]) == (0, 3)


def test_zero_kernels_rejected():
    params = GridParameters(n=1, m=1, r=1, c=1, l=1, arity=1)
    with pytest.raises(ConfigurationError):
        build_bounds(params, kernel_count=0)


def test_validate_and_contains():
    params = GridParameters(n=2, m=1, r=1, c=1, l=1, arity=2)
    bounds = build_bounds(params, kernel_count=1)
    assert bounds.contains([0, 0, 1, 2])
    assert bounds.validate([0, 1, 1, 2]) == [0, 1, 1, 2]
    assert not bounds.contains([0, 0, 1])
    assert not bounds.contains([1, 0, 1, 2])
    with pytest.raises(InvalidChromosome):
        bounds.validate([0, 0, 2, 2])
    with pytest.raises(InvalidChromosome):
        bounds.validate([0, 0, 1, 2, 2])


def test_single_value_genes_are_immutable():
    params = GridParameters(n=2, m=1, r=1, c=1, l=1, arity=2)
    bounds = build_bounds(params, kernel_count=1)
    # function gene (one kernel) and output gene (one node) admit one value
    assert not bounds.is_mutable(0)
    assert bounds.is_mutable(1)
    assert not bounds.is_mutable(3)
