import pytest

from cgpexpr import Expression, IndexOutOfRange, KernelSet, NodeGenes


def test_node_view(adder):
    node = adder.node(2)
    assert isinstance(node, NodeGenes)
    assert node.column == 0 and node.row == 0
    assert node.connections == (0, 1)
    assert node.arity == 2
    assert list(node.gene_positions) == [0, 1, 2]
    assert node.describe(adder.get_f()) == "n2 = sum(n0, n1)"
    assert node.as_dict()["connections"] == [0, 1]
    with pytest.raises(IndexOutOfRange):
        adder.node(0)


def test_nodes_cover_the_grid(grid):
    nodes = grid.nodes()
    assert [nd.node_id for nd in nodes] == list(range(grid.get_n(), grid.params.node_count))
    assert [nd.gene_index for nd in nodes] == grid.get_gene_idx()[grid.get_n():]


def test_arity_accessors():
    ex = Expression(n=1, m=1, r=2, c=2, l=2, arity=[2, 3], kernels=KernelSet(["sum"]))
    assert ex.get_arity() == [2, 3]
    assert ex.get_arity(1) == 2
    assert ex.get_arity(4) == 3
    with pytest.raises(IndexOutOfRange):
        ex.get_arity(0)
    assert (ex.get_n(), ex.get_m(), ex.get_r(), ex.get_c(), ex.get_l()) == (1, 1, 2, 2, 2)


def test_human_readable_marks_active_nodes():
    ex = Expression(n=2, m=1, r=2, c=1, l=1, arity=2, kernels=KernelSet(["sum", "mul"]))
    ex.set([1, 0, 0, 0, 1, 1, 2])
    assert ex.to_human_readable() == [
        "✓ n0 = input[0]",
        "✗ n1 = input[1]",
        "✓ n2 = mul(n0, n0)",
        "✗ n3 = sum(n1, n1)",
        "✓ out[0] = n2",
    ]


def test_string_dump(adder):
    text = str(adder)
    assert text.startswith("d-CGP Expression:")
    assert "Active nodes:\t\t\t[0, 1, 2]" in text
    assert "Function set:\t\t\t['sum']" in text
    assert repr(adder).startswith("Expression(n=2, m=1")


def test_demos_run(capsys):
    from cgpexpr import example_expression_tour

    ex = example_expression_tour(seed=3)
    out = capsys.readouterr().out
    assert "Symbolic form:" in out
    assert isinstance(ex, Expression)


def test_read_only_views(grid):
    assert list(grid.active_nodes) == grid.get_active_nodes()
    assert list(grid.active_genes) == grid.get_active_genes()
    assert [k.name for k in grid.kernels] == [k.name for k in grid.get_f()]
    assert grid.bounds.lower == grid.get_lb()
    assert grid.gene(0) == grid.get()[0]
    grid.chromosome[0] = -1
    assert grid.get()[0] >= 0
