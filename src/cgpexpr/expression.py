"""CGP expression: chromosome, active-set resolution and accessors."""

from __future__ import annotations

import hashlib
import logging
import numbers
import random
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from . import mutation
from .bounds import GeneBounds, build_bounds, is_gene_value
from .enums import LossType
from .errors import ConfigurationError, IndexOutOfRange
from .executor import ExpressionExecutor
from .kernels import Kernel, KernelSet
from .layout import (
    ArityLike,
    GridParameters,
    check_computational_node,
    node_arity,
    node_column,
    node_row,
)
from .loss import batch_loss, point_loss
from .node import NodeGenes

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0

DerivedStateHook = Callable[["Expression"], None]


def collect_active_nodes(
    params: GridParameters, gene_idx: Sequence[int], chromosome: Sequence[int]
) -> List[int]:
    """
    Nodes reachable backward from the output genes, sorted and unique.

    The frontier is deduplicated at every step so shared subgraphs are only
    expanded once.
    """
    active: List[int] = []
    current = sorted(set(chromosome[params.output_offset:]))
    while current:
        active.extend(current)
        following: List[int] = []
        for node_id in current:
            if node_id < params.n:
                continue
            start = gene_idx[node_id] + 1
            following.extend(chromosome[start:start + node_arity(params, node_id)])
        current = sorted(set(following))
    return sorted(set(active))


def collect_active_genes(
    params: GridParameters, gene_idx: Sequence[int], active_nodes: Iterable[int]
) -> List[int]:
    """Function and connection genes of active nodes, then every output gene."""
    genes: List[int] = []
    for node_id in active_nodes:
        if node_id < params.n:
            continue
        start = gene_idx[node_id]
        genes.extend(range(start, start + node_arity(params, node_id) + 1))
    genes.extend(range(params.output_offset, params.chromosome_length))
    return genes


class Expression:
    """
    A mathematical expression encoded as a Cartesian Genetic Program.

    The grid shape and kernel catalogue are fixed at construction; only gene
    values change afterwards. Active nodes and genes are derived state and
    are recomputed after every chromosome change.
    """

    def __init__(
        self,
        n: int,
        m: int,
        r: int,
        c: int,
        l: int,
        arity: ArityLike,
        kernels: Union[KernelSet, Sequence[Kernel]],
        seed: int = DEFAULT_SEED,
    ):
        self.params = GridParameters(n, m, r, c, l, arity)
        kernel_list = list(kernels() if isinstance(kernels, KernelSet) else kernels)
        if not kernel_list:
            raise ConfigurationError("Number of basis functions is 0")
        widest = max(kernel_list, key=lambda k: k.arity)
        if min(self.params.arity) < widest.arity:
            raise ConfigurationError(
                f"Kernel '{widest.name}' needs {widest.arity} operands but the "
                f"smallest column arity is {min(self.params.arity)}"
            )
        self._kernels: List[Kernel] = kernel_list
        self._bounds: GeneBounds = build_bounds(self.params, len(kernel_list))
        self._rng = random.Random(seed)
        self._derived_state_hooks: List[DerivedStateHook] = []
        self._signature: Optional[str] = None
        self._active_nodes: List[int] = []
        self._active_genes: List[int] = []

        self._x: List[int] = [
            self._rng.randint(lo, hi)
            for lo, hi in zip(self._bounds.lower, self._bounds.upper)
        ]
        logger.debug(
            "Created expression n=%d m=%d r=%d c=%d l=%d with %d genes",
            n, m, r, c, l, len(self._x),
        )
        self.recompute_derived_state()

    def recompute_derived_state(self) -> None:
        """Recompute active nodes and genes, then run registered hooks."""
        gene_idx = self._bounds.gene_idx
        self._active_nodes = collect_active_nodes(self.params, gene_idx, self._x)
        self._active_genes = collect_active_genes(self.params, gene_idx, self._active_nodes)
        self._signature = None
        logger.debug(
            "Active set: %d nodes, %d genes", len(self._active_nodes), len(self._active_genes)
        )
        for hook in self._derived_state_hooks:
            hook(self)

    def add_derived_state_hook(self, hook: DerivedStateHook) -> None:
        """
        Register extra bookkeeping that must follow every chromosome change.

        The hook is called once immediately so its state starts consistent.
        """
        self._derived_state_hooks.append(hook)
        hook(self)

    def __call__(self, point: Sequence[Any]) -> List[Any]:
        return ExpressionExecutor(self).execute(point)

    def loss(
        self,
        point: Sequence[Any],
        label: Sequence[Any],
        loss_type: Union[LossType, str] = LossType.MSE,
    ):
        """Loss of a single data point."""
        return point_loss(self, point, label, loss_type)

    def batch_loss(
        self,
        points: Sequence[Sequence[Any]],
        labels: Sequence[Sequence[Any]],
        loss: str = "MSE",
        parallel: int = 0,
    ):
        """Mean loss over a batch; ``parallel`` > 0 splits it across workers."""
        return batch_loss(self, points, labels, loss, parallel)

    def set(self, x: Sequence[int]) -> None:
        """Replace the whole chromosome, all-or-nothing."""
        self._x = self._bounds.validate(x)
        self.recompute_derived_state()

    def set_f_gene(self, node_id: int, f_id: int) -> None:
        """
        Set the kernel of a computational node.

        Connection-gene counts depend only on the column, so changing the
        kernel cannot change reachability and the active set is kept.
        """
        if not is_gene_value(f_id) or f_id < 0 or f_id > len(self._kernels) - 1:
            raise IndexOutOfRange(
                f"You are trying to set a kernel id of: {f_id!r}, but allowed values "
                f"are [0 ... {len(self._kernels) - 1}]"
            )
        check_computational_node(self.params, node_id)
        self._x[self._bounds.gene_idx[node_id]] = int(f_id)
        self._signature = None

    def is_valid(self, x: Sequence[int]) -> bool:
        return self._bounds.contains(x)

    def seed(self, seed: int) -> None:
        """Re-seed the random engine used by mutations."""
        self._rng.seed(seed)

    def mutate(self, idx: Union[int, Iterable[int]]) -> None:
        """Mutate one gene, or a collection of genes with one recomputation."""
        if isinstance(idx, numbers.Number):
            mutation.mutate_gene(self, idx)
        else:
            mutation.mutate_genes(self, idx)

    def mutate_random(self, N: int = 1) -> None:
        mutation.mutate_random(self, N)

    def mutate_active(self, N: int = 1) -> None:
        mutation.mutate_active(self, N)

    def mutate_active_fgene(self, N: int = 1) -> None:
        mutation.mutate_active_fgene(self, N)

    def mutate_active_cgene(self, N: int = 1) -> None:
        mutation.mutate_active_cgene(self, N)

    def mutate_ogene(self, N: int = 1) -> None:
        mutation.mutate_ogene(self, N)

    @property
    def chromosome(self) -> List[int]:
        return list(self._x)

    @property
    def bounds(self) -> GeneBounds:
        return self._bounds

    @property
    def kernels(self) -> Tuple[Kernel, ...]:
        return tuple(self._kernels)

    @property
    def active_nodes(self) -> Tuple[int, ...]:
        """Active node ids in ascending order."""
        return tuple(self._active_nodes)

    @property
    def active_genes(self) -> Tuple[int, ...]:
        return tuple(self._active_genes)

    @property
    def rng(self) -> random.Random:
        """Random engine shared by every mutation operator."""
        return self._rng

    def gene(self, idx: int) -> int:
        return self._x[idx]

    def _assign_gene(self, idx: int, value: int) -> None:
        # Raw write for mutation operators; they refresh derived state themselves.
        self._x[idx] = value
        self._signature = None

    def get(self) -> List[int]:
        return list(self._x)

    def get_lb(self) -> List[int]:
        return list(self._bounds.lower)

    def get_ub(self) -> List[int]:
        return list(self._bounds.upper)

    def get_active_nodes(self) -> List[int]:
        return list(self._active_nodes)

    def get_active_genes(self) -> List[int]:
        return list(self._active_genes)

    def get_gene_idx(self) -> List[int]:
        return list(self._bounds.gene_idx)

    def get_n(self) -> int:
        return self.params.n

    def get_m(self) -> int:
        return self.params.m

    def get_r(self) -> int:
        return self.params.r

    def get_c(self) -> int:
        return self.params.c

    def get_l(self) -> int:
        return self.params.l

    def get_arity(self, node_id: Optional[int] = None):
        """Per-column arity list, or the arity of one computational node."""
        if node_id is None:
            return list(self.params.arity)
        check_computational_node(self.params, node_id)
        return node_arity(self.params, node_id)

    def get_f(self) -> List[Kernel]:
        return list(self._kernels)

    def is_active(self, node_id: int) -> bool:
        return node_id in self._active_nodes

    def node(self, node_id: int) -> NodeGenes:
        """Decoded genes of a computational node."""
        check_computational_node(self.params, node_id)
        start = self._bounds.gene_idx[node_id]
        arity = node_arity(self.params, node_id)
        return NodeGenes(
            node_id=node_id,
            column=node_column(self.params, node_id),
            row=node_row(self.params, node_id),
            gene_index=start,
            function=self._x[start],
            connections=tuple(self._x[start + 1:start + 1 + arity]),
        )

    def nodes(self) -> List[NodeGenes]:
        return [self.node(k) for k in range(self.params.n, self.params.node_count)]

    def get_signature(self) -> str:
        """Hash of the active genes; equal for expressions with the same phenotype."""
        if self._signature is None:
            parts = [f"{idx}:{self._x[idx]}" for idx in self._active_genes]
            self._signature = hashlib.md5("|".join(parts).encode()).hexdigest()
        return self._signature

    def to_human_readable(self) -> List[str]:
        """One line per node and output, prefixed with ✓ when active."""
        readable = []
        for node_id in range(self.params.n):
            prefix = "✓" if self.is_active(node_id) else "✗"
            readable.append(f"{prefix} n{node_id} = input[{node_id}]")
        for node in self.nodes():
            prefix = "✓" if self.is_active(node.node_id) else "✗"
            readable.append(f"{prefix} {node.describe(self._kernels)}")
        for i, gene in enumerate(self._x[self.params.output_offset:]):
            readable.append(f"✓ out[{i}] = n{gene}")
        return readable

    def __str__(self) -> str:
        lines = [
            "d-CGP Expression:",
            f"\tNumber of inputs:\t\t{self.params.n}",
            f"\tNumber of outputs:\t\t{self.params.m}",
            f"\tNumber of rows:\t\t\t{self.params.r}",
            f"\tNumber of columns:\t\t{self.params.c}",
            f"\tNumber of levels-back allowed:\t{self.params.l}",
            f"\tBasis function arity:\t\t{list(self.params.arity)}",
            f"\tStart of the gene expressing the node:\t\t{self._bounds.gene_idx}",
            "",
            f"\tResulting lower bounds:\t{self._bounds.lower}",
            f"\tResulting upper bounds:\t{self._bounds.upper}",
            "",
            f"\tCurrent expression (encoded):\t{self._x}",
            f"\tActive nodes:\t\t\t{self._active_nodes}",
            f"\tActive genes:\t\t\t{self._active_genes}",
            "",
            f"\tFunction set:\t\t\t{[k.name for k in self._kernels]}",
        ]
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        p = self.params
        return (
            f"Expression(n={p.n}, m={p.m}, r={p.r}, c={p.c}, l={p.l}, "
            f"arity={list(p.arity)}, kernels={[k.name for k in self._kernels]})"
        )


__all__ = [
    "DEFAULT_SEED",
    "Expression",
    "collect_active_nodes",
    "collect_active_genes",
]
