"""Neighbour-joining family of tree builders.

NJ (Saitou & Nei 1987) and BIONJ (Gascuel 1997) share one numba kernel. At
each step the pair minimising the Q-criterion

    Q(i, j) = (r - 2) * d(i, j) - S(i) - S(j)

is joined, where r is the number of active taxa and S(i) is the row sum of
d over active taxa. NJ places the new node at the arithmetic mean of the
reduced distances; BIONJ weights them by a variance estimate.

The Q search runs rows in parallel with ``numba.prange``; the worker count
follows :mod:`pydecenttree.core.threads`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, ClassVar

import numba as nb
import numpy as np

from pydecenttree.algorithms.base import TreeBuilder
from pydecenttree.core.registry import register_algorithm
from pydecenttree.core.threads import activate_thread_count

if TYPE_CHECKING:
    from Bio.Phylo.BaseTree import Tree


@nb.njit(cache=True, parallel=True)
def _join_sequence(
    dist: nb.float64[:, :],
    weighted: bool,
) -> (nb.int64[:, :], nb.float64[:, :], nb.int64[:], nb.float64[:]):
    n = dist.shape[0]
    d = dist.copy()
    v = dist.copy()
    node = np.arange(n)
    alive = np.ones(n, dtype=np.bool_)
    row_sums = np.zeros(n)
    best_q = np.empty(n)
    best_k = np.empty(n, dtype=np.int64)

    steps = n - 3
    children = np.empty((steps, 2), dtype=np.int64)
    lengths = np.empty((steps, 2))

    for step in range(steps):
        r = n - step

        for row in nb.prange(n):
            acc = 0.0
            if alive[row]:
                for col in range(n):
                    if alive[col] and col != row:
                        acc += d[row, col]
            row_sums[row] = acc

        for row in nb.prange(n):
            best_q[row] = np.inf
            best_k[row] = -1
            if alive[row]:
                for col in range(row + 1, n):
                    if alive[col]:
                        qv = (r - 2) * d[row, col] - row_sums[row] - row_sums[col]
                        if qv < best_q[row]:
                            best_q[row] = qv
                            best_k[row] = col

        # Lowest row wins ties so the result does not depend on thread count
        x = -1
        lowest = np.inf
        for t in range(n):
            if best_k[t] >= 0 and best_q[t] < lowest:
                lowest = best_q[t]
                x = t
        y = best_k[x]

        dxy = d[x, y]
        lx = 0.5 * dxy + (row_sums[x] - row_sums[y]) / (2.0 * (r - 2))
        ly = dxy - lx

        lam = 0.5
        vxy = v[x, y]
        if weighted and vxy > 0.0:
            vsum = 0.0
            for k in range(n):
                if alive[k] and k != x and k != y:
                    vsum += v[y, k] - v[x, k]
            lam = 0.5 + vsum / (2.0 * (r - 2) * vxy)
            lam = min(max(lam, 0.0), 1.0)

        for k in range(n):
            if alive[k] and k != x and k != y:
                dk = lam * (d[x, k] - lx) + (1.0 - lam) * (d[y, k] - ly)
                vk = lam * v[x, k] + (1.0 - lam) * v[y, k] - lam * (1.0 - lam) * vxy
                d[x, k] = dk
                d[k, x] = dk
                v[x, k] = vk
                v[k, x] = vk

        children[step, 0] = node[x]
        children[step, 1] = node[y]
        lengths[step, 0] = lx
        lengths[step, 1] = ly
        node[x] = n + step
        alive[y] = False

    rest = np.empty(3, dtype=np.int64)
    c = 0
    for k in range(n):
        if alive[k]:
            rest[c] = k
            c += 1
    a = rest[0]
    b = rest[1]
    e = rest[2]
    final_nodes = np.empty(3, dtype=np.int64)
    final_lengths = np.empty(3)
    final_nodes[0] = node[a]
    final_nodes[1] = node[b]
    final_nodes[2] = node[e]
    final_lengths[0] = 0.5 * (d[a, b] + d[a, e] - d[b, e])
    final_lengths[1] = 0.5 * (d[a, b] + d[b, e] - d[a, e])
    final_lengths[2] = 0.5 * (d[a, e] + d[b, e] - d[a, b])
    return children, lengths, final_nodes, final_lengths


def joins_to_tree(
    labels: Sequence[str],
    children: np.ndarray,
    lengths: np.ndarray,
    final_nodes: np.ndarray,
    final_lengths: np.ndarray,
) -> Tree:
    """Assemble the kernel's join list into an unrooted BioPython tree.

    Node ids below ``len(labels)`` are taxa; id ``len(labels) + step`` is the
    internal node created by join ``step``.
    """
    from Bio.Phylo.BaseTree import Clade, Tree

    n = len(labels)
    clades: dict[int, Clade] = {i: Clade(name=label) for i, label in enumerate(labels)}

    for step, (a, b) in enumerate(children):
        left = clades.pop(int(a))
        right = clades.pop(int(b))
        left.branch_length = float(lengths[step, 0])
        right.branch_length = float(lengths[step, 1])
        clades[n + step] = Clade(clades=[left, right])

    top = []
    for node_id, length in zip(final_nodes, final_lengths):
        clade = clades.pop(int(node_id))
        clade.branch_length = float(length)
        top.append(clade)

    return Tree(root=Clade(clades=top), rooted=False)


class _NeighborJoiningBase(TreeBuilder):
    weighted: ClassVar[bool] = False

    def build_tree(self, labels: Sequence[str], matrix: np.ndarray) -> Tree:
        if len(labels) < 3:
            raise ValueError(f"{self.name} needs at least 3 taxa, got {len(labels)}")
        threads = activate_thread_count()
        self.report("joining %d taxa using %d threads", len(labels), threads)
        children, lengths, final_nodes, final_lengths = _join_sequence(
            np.ascontiguousarray(matrix), self.weighted
        )
        return joins_to_tree(labels, children, lengths, final_nodes, final_lengths)


@register_algorithm
class NeighborJoining(_NeighborJoiningBase):
    """Neighbour joining (Saitou & Nei 1987)."""

    name: ClassVar[str] = "NJ"
    description: ClassVar[str] = "Neighbour joining (Saitou & Nei 1987), unrooted"
    weighted: ClassVar[bool] = False


@register_algorithm
class BIONJ(_NeighborJoiningBase):
    """BIONJ: neighbour joining with variance-weighted reduction (Gascuel 1997)."""

    name: ClassVar[str] = "BIONJ"
    description: ClassVar[str] = "BIONJ (Gascuel 1997), variance-weighted neighbour joining"
    weighted: ClassVar[bool] = True
