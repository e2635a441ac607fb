"""Depth-first structural decomposition.

Every traversal here runs on an explicit stack of ``(vertex, position)``
frames, where ``position`` indexes the next neighbor to look at, so deep or
path-like graphs never hit the interpreter recursion limit. Each top-level
call builds its own TraversalContext; nothing is shared between calls.

- ``tarjan_scc`` / ``kosaraju_scc``: strongly connected components (directed).
- ``cut_structure``: articulation points and bridges in one pass (undirected).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, FrozenSet, List, Sequence, Set, Tuple
import logging

import numpy as np

from structgraph.topology.graph import Graph

logger = logging.getLogger(__name__)


class VisitState(IntEnum):
    UNVISITED = 0
    ON_STACK = 1
    DONE = 2


class TraversalContext:
    """Discovery/low-link bookkeeping for one DFS-based analysis.

    ``low[v] <= discovery[v]`` holds for every discovered vertex.
    """

    def __init__(self, n: int) -> None:
        self.discovery: List[int] = [-1] * n
        self.low: List[int] = [-1] * n
        self.state: List[VisitState] = [VisitState.UNVISITED] * n
        self.counter = 0
        self.stack: List[int] = []

    def discover(self, v: int) -> None:
        self.discovery[v] = self.low[v] = self.counter
        self.counter += 1
        self.state[v] = VisitState.ON_STACK

    def visited(self, v: int) -> bool:
        return self.discovery[v] != -1

    def pull_low(self, v: int, value: int) -> None:
        if value < self.low[v]:
            self.low[v] = value


@dataclass(frozen=True)
class CutStructure:
    """Single points of failure of an undirected graph."""
    articulation_points: FrozenSet[int]
    bridges: FrozenSet[Tuple[int, int]]

    def to_dict(self) -> Dict[str, list]:
        return {
            "articulation_points": sorted(self.articulation_points),
            "bridges": [list(b) for b in sorted(self.bridges)],
        }


def tarjan_scc(graph: Graph) -> List[List[int]]:
    """Tarjan's strongly connected components in one DFS pass.

    Components come out in reverse topological order of the condensation.
    """
    graph.require_directed("tarjan_scc")
    adj = graph.adjacency()
    ctx = TraversalContext(graph.n)
    components: List[List[int]] = []

    for root in range(graph.n):
        if ctx.visited(root):
            continue
        ctx.discover(root)
        ctx.stack.append(root)
        frames = [(root, 0)]
        while frames:
            v, idx = frames[-1]
            nbrs = adj[v]
            if idx < len(nbrs):
                w = nbrs[idx]
                frames[-1] = (v, idx + 1)
                if not ctx.visited(w):
                    ctx.discover(w)
                    ctx.stack.append(w)
                    frames.append((w, 0))
                elif ctx.state[w] == VisitState.ON_STACK:
                    ctx.pull_low(v, ctx.discovery[w])
                # DONE and off the stack: already in a closed component
                continue

            frames.pop()
            if frames:
                ctx.pull_low(frames[-1][0], ctx.low[v])
            if ctx.low[v] == ctx.discovery[v]:
                comp: List[int] = []
                while True:
                    w = ctx.stack.pop()
                    ctx.state[w] = VisitState.DONE
                    comp.append(w)
                    if w == v:
                        break
                components.append(comp)

    logger.debug("tarjan_scc: %d components over %d vertices", len(components), graph.n)
    return components


def kosaraju_scc(graph: Graph) -> List[List[int]]:
    """Strongly connected components via Kosaraju (iterative).

    First pass records the finishing order on the graph, the second walks the
    transposed graph in reverse finishing order; each tree is one component.
    """
    graph.require_directed("kosaraju_scc")
    n = graph.n
    out_adj = graph.adjacency()
    rev = graph.reversed().adjacency()

    visited = [False] * n
    order: List[int] = []

    # first pass: compute finishing order
    for start in range(n):
        if visited[start]:
            continue
        stack = [(start, 0)]
        visited[start] = True
        while stack:
            u, idx = stack[-1]
            nbrs = out_adj[u]
            if idx < len(nbrs):
                v = nbrs[idx]
                stack[-1] = (u, idx + 1)
                if not visited[v]:
                    visited[v] = True
                    stack.append((v, 0))
            else:
                stack.pop()
                order.append(u)

    # second pass on reversed graph
    assigned = [False] * n
    comps: List[List[int]] = []
    for start in reversed(order):
        if assigned[start]:
            continue
        comp: List[int] = []
        stack = [start]
        assigned[start] = True
        while stack:
            u = stack.pop()
            comp.append(u)
            for v in rev[u]:
                if not assigned[v]:
                    assigned[v] = True
                    stack.append(v)
        comps.append(comp)

    logger.debug("kosaraju_scc: %d components over %d vertices", len(comps), n)
    return comps


SCC_ALGORITHMS: Dict[str, Callable[[Graph], List[List[int]]]] = {
    "tarjan": tarjan_scc,
    "kosaraju": kosaraju_scc,
}


def strongly_connected_components(graph: Graph, algorithm: str = "tarjan") -> List[List[int]]:
    try:
        run = SCC_ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"Unknown SCC algorithm {algorithm!r}; expected one of {sorted(SCC_ALGORITHMS)}") from None
    return run(graph)


def scc_labels(components: Sequence[Sequence[int]], n: int) -> np.ndarray:
    """Map node -> component index; -1 for vertices no component covers."""
    comp_id = np.full(n, -1, dtype=np.int32)
    for cid, comp in enumerate(components):
        comp_id[list(comp)] = cid
    return comp_id


def cut_structure(graph: Graph) -> CutStructure:
    """Articulation points and bridges of an undirected graph.

    The DFS skips only the exact edge it arrived through (by edge id), so a
    parallel edge back to the parent counts as a back edge and a doubled
    link is never reported as a bridge.
    """
    graph.require_undirected("cut_structure")
    n = graph.n
    incident = graph.incident()
    ctx = TraversalContext(n)
    parent_edge = [-1] * n
    points: Set[int] = set()
    bridges: Set[Tuple[int, int]] = set()

    for root in range(n):
        if ctx.visited(root):
            continue
        ctx.discover(root)
        root_children = 0
        frames = [(root, 0)]
        while frames:
            u, idx = frames[-1]
            nbrs = incident[u]
            if idx < len(nbrs):
                v, eid = nbrs[idx]
                frames[-1] = (u, idx + 1)
                if eid == parent_edge[u]:
                    continue
                if not ctx.visited(v):
                    parent_edge[v] = eid
                    if u == root:
                        root_children += 1
                    ctx.discover(v)
                    frames.append((v, 0))
                else:
                    # back edge
                    ctx.pull_low(u, ctx.discovery[v])
                continue

            frames.pop()
            ctx.state[u] = VisitState.DONE
            if not frames:
                break
            p = frames[-1][0]
            ctx.pull_low(p, ctx.low[u])
            if ctx.low[u] > ctx.discovery[p]:
                bridges.add((p, u) if p < u else (u, p))
            # Non-root where subtree can't reach ancestor
            if p != root and ctx.low[u] >= ctx.discovery[p]:
                points.add(p)

        # Root with 2+ children
        if root_children > 1:
            points.add(root)

    logger.debug("cut_structure: %d articulation points, %d bridges", len(points), len(bridges))
    return CutStructure(frozenset(points), frozenset(bridges))


def articulation_points(graph: Graph) -> Set[int]:
    """Tarjan articulation points on undirected graphs (single points of failure)."""
    return set(cut_structure(graph).articulation_points)


def bridges(graph: Graph) -> Set[Tuple[int, int]]:
    """Bridges as ``(min, max)`` vertex pairs."""
    return set(cut_structure(graph).bridges)
