import numpy as np
import pytest

from cgpexpr import ConfigurationError, Expression, Kernel, KernelRegistry, KernelSet, kernel_registry

BUILTINS = [
    "sum", "diff", "mul", "div", "pdiv", "sig", "tanh",
    "relu", "elu", "isru", "sin", "cos", "log", "exp",
]


def test_builtin_kernels_registered():
    for name in BUILTINS:
        assert name in kernel_registry
    assert "SUM" in kernel_registry


def test_unknown_kernel_name():
    with pytest.raises(ConfigurationError):
        KernelSet(["sum", "nope"])


def test_kernel_set_order_and_access():
    kernels = KernelSet(["mul", "sum"])
    kernels.push_back("sin")
    assert [k.name for k in kernels] == ["mul", "sum", "sin"]
    assert len(kernels) == 3
    assert kernels[2].name == "sin"
    assert str(kernels[0]) == "mul"


def test_registry_rejects_duplicates_and_bad_callables():
    registry = KernelRegistry()
    registry.register("square", lambda ops: ops[0] * ops[0], lambda ops: f"({ops[0]}^2)")
    with pytest.raises(ValueError):
        registry.register("Square", lambda ops: ops[0], lambda ops: ops[0])
    with pytest.raises(ValueError):
        registry.register("two", lambda a, b: a, lambda ops: ops[0])
    with pytest.raises(ValueError):
        registry.register("zero", lambda ops: ops[0], lambda ops: ops[0], arity=0)
    with pytest.raises(ValueError):
        registry.register("  ", lambda ops: ops[0], lambda ops: ops[0])
    assert registry.names() == ["square"]


def test_custom_kernel_instance_in_expression():
    square = Kernel("square", lambda ops: ops[0] * ops[0], lambda ops: f"({ops[0]}^2)")
    kernels = KernelSet()
    kernels.push_back(square)
    ex = Expression(n=1, m=1, r=1, c=1, l=1, arity=1, kernels=kernels)
    ex.set([0, 0, 1])
    assert ex([3.0]) == [9.0]
    assert ex(["x"]) == ["(x^2)"]


@pytest.mark.parametrize(
    "name, operands, expected",
    [
        ("sum", [1.0, 2.0, 3.0], 6.0),
        ("diff", [5.0, 2.0, 1.0], 2.0),
        ("mul", [2.0, 3.0], 6.0),
        ("div", [8.0, 2.0], 4.0),
        ("pdiv", [1.0, 0.0], 1.0),
        ("sig", [0.0, 0.0], 0.5),
        ("tanh", [0.0], 0.0),
        ("relu", [-2.0, 1.0], 0.0),
        ("relu", [2.0, 1.0], 3.0),
        ("elu", [1.5], 1.5),
        ("elu", [0.0, -1.0], np.exp(-1.0) - 1.0),
        ("isru", [0.0], 0.0),
        ("sin", [0.0, 9.0], 0.0),
        ("cos", [0.0], 1.0),
        ("log", [1.0], 0.0),
        ("exp", [0.0], 1.0),
    ],
)
def test_builtin_kernel_values(name, operands, expected):
    assert kernel_registry.get(name)(operands) == pytest.approx(expected)


@pytest.mark.parametrize(
    "name, operands, expected",
    [
        ("sum", ["a", "b"], "(a+b)"),
        ("diff", ["a", "b"], "(a-b)"),
        ("mul", ["a", "b", "c"], "(a*b*c)"),
        ("div", ["a", "b"], "(a/b)"),
        ("pdiv", ["a", "b"], "(a/b)"),
        ("sig", ["a", "b"], "sig(a+b)"),
        ("tanh", ["a"], "tanh(a)"),
        ("relu", ["a", "b"], "ReLu(a+b)"),
        ("elu", ["a"], "ELU(a)"),
        ("isru", ["a"], "ISRU(a)"),
        ("sin", ["a", "b"], "sin(a)"),
        ("log", ["a"], "log(a)"),
    ],
)
def test_builtin_kernel_printers(name, operands, expected):
    assert kernel_registry.get(name).render(operands) == expected


def test_kernels_do_not_modify_operands():
    operands = [np.array([1.0, 2.0]), np.array([3.0, 4.0])]
    snapshot = [o.copy() for o in operands]
    for name in BUILTINS:
        kernel_registry.get(name)(operands)
    for original, after in zip(snapshot, operands):
        assert np.array_equal(original, after)
