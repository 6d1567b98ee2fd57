"""Kernel (basis function) registration and the built-in kernel catalogue."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from . import values
from .errors import ConfigurationError


@dataclass(frozen=True)
class Kernel:
    """
    A named elementary operation usable at a computational node.

    ``function`` receives the list of operand values of the working type and
    returns one value; ``printer`` receives the same operands rendered as
    strings and returns the symbolic form. ``arity`` is the number of
    operands the kernel needs at least: n-ary kernels fold every operand,
    unary kernels only read the first one.
    """

    name: str
    function: Callable[[List[Any]], Any] = field(repr=False, compare=False)
    printer: Callable[[List[str]], str] = field(repr=False, compare=False)
    arity: int = 1
    doc: str = field(default="", repr=False, compare=False)

    def __call__(self, operands: List[Any]) -> Any:
        return self.function(operands)

    def render(self, operands: List[str]) -> str:
        return self.printer(operands)

    def __str__(self) -> str:
        return self.name


def _accepts_single_operand_list(function: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return True
    positional = [
        p
        for p in signature.parameters.values()
        if p.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        )
    ]
    required = [p for p in positional if p.default is inspect.Parameter.empty]
    has_varargs = any(
        p.kind == inspect.Parameter.VAR_POSITIONAL for p in signature.parameters.values()
    )
    return len(required) <= 1 and (bool(positional) or has_varargs)


class KernelRegistry:
    """Registry of kernels addressable by name."""

    def __init__(self):
        self._kernels: Dict[str, Kernel] = {}

    def register(
        self,
        name: str,
        function: Callable[[List[Any]], Any],
        printer: Callable[[List[str]], str],
        *,
        arity: int = 1,
        doc: str = "",
    ) -> Kernel:
        """Register a new kernel and return it."""
        clean_name = name.strip()
        if not clean_name:
            raise ValueError("Kernel name must be a non-empty string.")
        key = clean_name.lower()
        if key in self._kernels:
            raise ValueError(f"Kernel '{clean_name}' is already registered.")
        if int(arity) < 1:
            raise ValueError("Kernel arity must be at least 1.")
        for label, fn in (("function", function), ("printer", printer)):
            if not callable(fn):
                raise ValueError(f"Kernel '{clean_name}' {label} must be callable.")
            if not _accepts_single_operand_list(fn):
                raise ValueError(
                    f"Kernel '{clean_name}' {label} must accept exactly one "
                    "positional argument (the operand list)."
                )

        kernel = Kernel(
            name=clean_name,
            function=function,
            printer=printer,
            arity=int(arity),
            doc=doc,
        )
        self._kernels[key] = kernel
        return kernel

    def get(self, name: str) -> Optional[Kernel]:
        return self._kernels.get(name.strip().lower())

    def names(self) -> List[str]:
        return [kernel.name for kernel in self._kernels.values()]

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None


kernel_registry = KernelRegistry()


def register_kernel(
    name: str,
    function: Callable[[List[Any]], Any],
    printer: Callable[[List[str]], str],
    *,
    arity: int = 1,
    doc: str = "",
) -> Kernel:
    """
    Public helper for registering kernels on the shared registry.

    Both callables take the full operand list. Kernels must not modify their
    operands in place: the same value may feed several nodes.
    """
    return kernel_registry.register(name, function, printer, arity=arity, doc=doc)


class KernelSet:
    """Ordered kernel catalogue built from registered names."""

    def __init__(self, names: Sequence[str] = ()):
        self._kernels: List[Kernel] = []
        for name in names:
            self.push_back(name)

    def push_back(self, kernel: Any) -> None:
        """Append a kernel given by name or as a ``Kernel`` instance."""
        if isinstance(kernel, Kernel):
            self._kernels.append(kernel)
            return
        found = kernel_registry.get(str(kernel))
        if found is None:
            raise ConfigurationError(
                f"Unknown kernel '{kernel}'. Available kernels: "
                f"{', '.join(kernel_registry.names())}"
            )
        self._kernels.append(found)

    def __call__(self) -> List[Kernel]:
        return list(self._kernels)

    def __len__(self) -> int:
        return len(self._kernels)

    def __iter__(self) -> Iterator[Kernel]:
        return iter(self._kernels)

    def __getitem__(self, idx: int) -> Kernel:
        return self._kernels[idx]

    def __repr__(self) -> str:
        return f"KernelSet({[k.name for k in self._kernels]!r})"


def _fold(operands, op):
    retval = operands[0]
    for value in operands[1:]:
        retval = op(retval, value)
    return retval


def _join(operands: List[str], sep: str) -> str:
    return sep.join(operands)


def _my_sum(operands):
    return _fold(operands, lambda a, b: a + b)


def _my_diff(operands):
    return _fold(operands, lambda a, b: a - b)


def _my_mul(operands):
    return _fold(operands, lambda a, b: a * b)


def _my_div(operands):
    return _fold(operands, values.divide)


def _my_pdiv(operands):
    # Protected division: non-finite quotients become 1.
    denominator = _fold(operands[1:], lambda a, b: a * b)
    return values.finite_or(values.divide(operands[0], denominator), 1.0)


def _my_sig(operands):
    return 1.0 / (1.0 + values.exp(-_my_sum(operands)))


def _my_tanh(operands):
    return values.tanh(_my_sum(operands))


def _my_relu(operands):
    return values.relu(_my_sum(operands))


def _my_elu(operands):
    return values.elu(_my_sum(operands))


def _my_isru(operands):
    total = _my_sum(operands)
    return total / values.sqrt(1.0 + total * total)


_BUILTINS = [
    ("sum", _my_sum, lambda ops: f"({_join(ops, '+')})", 1, "Sum of all operands."),
    ("diff", _my_diff, lambda ops: f"({_join(ops, '-')})", 1, "First operand minus the others."),
    ("mul", _my_mul, lambda ops: f"({_join(ops, '*')})", 1, "Product of all operands."),
    ("div", _my_div, lambda ops: f"({_join(ops, '/')})", 1, "First operand divided by the others."),
    (
        "pdiv",
        _my_pdiv,
        lambda ops: f"({ops[0]}/{ops[1]})",
        2,
        "Protected division, 1 where the quotient is not finite.",
    ),
    ("sig", _my_sig, lambda ops: f"sig({_join(ops, '+')})", 1, "Logistic sigmoid of the sum."),
    ("tanh", _my_tanh, lambda ops: f"tanh({_join(ops, '+')})", 1, "tanh of the sum."),
    ("relu", _my_relu, lambda ops: f"ReLu({_join(ops, '+')})", 1, "ReLU of the sum."),
    ("elu", _my_elu, lambda ops: f"ELU({_join(ops, '+')})", 1, "ELU of the sum."),
    ("isru", _my_isru, lambda ops: f"ISRU({_join(ops, '+')})", 1, "x / sqrt(1 + x^2) of the sum."),
    ("sin", lambda ops: values.sin(ops[0]), lambda ops: f"sin({ops[0]})", 1, "Sine of the first operand."),
    ("cos", lambda ops: values.cos(ops[0]), lambda ops: f"cos({ops[0]})", 1, "Cosine of the first operand."),
    ("log", lambda ops: values.log(ops[0]), lambda ops: f"log({ops[0]})", 1, "Natural log of the first operand."),
    ("exp", lambda ops: values.exp(ops[0]), lambda ops: f"exp({ops[0]})", 1, "Exponential of the first operand."),
]

for _name, _function, _printer, _arity, _doc in _BUILTINS:
    kernel_registry.register(_name, _function, _printer, arity=_arity, doc=_doc)


__all__ = [
    "Kernel",
    "KernelRegistry",
    "KernelSet",
    "kernel_registry",
    "register_kernel",
]
