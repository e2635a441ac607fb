"""Minimum spanning tree construction.

Two interchangeable strategies share one result contract:

- ``kruskal``: stable sort of edges by weight (ties keep input order), then a
  fresh DisjointSet accepts every edge that does not close a cycle.
- ``prim``: grows from one start vertex with a ``heapq`` binary heap of
  candidate edges. Ties pop in push order. Entries whose target was already
  reached are skipped when popped (lazy deletion).

Edge sets may differ under weight ties, the total weight never does.
A graph that cannot be spanned yields ``Disconnected`` instead of a tree.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union
import heapq
import logging
import math

import numpy as np

from structgraph.exceptions import MissingWeightError
from structgraph.topology.graph import Edge, Graph, vertex_index
from structgraph.topology.union_find import DisjointSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpanningTree:
    """Minimum spanning tree: exactly ``n - 1`` edges (none when ``n <= 1``)."""
    edges: Tuple[Edge, ...]
    total_weight: float
    strategy: str

    @property
    def connected(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, object]:
        return {
            "strategy": self.strategy,
            "connected": True,
            "total_weight": self.total_weight,
            "edges": [list(e.to_tuple()) for e in self.edges],
        }


@dataclass(frozen=True)
class Disconnected:
    """The graph has no spanning tree; ``accepted`` edges were found before the input ran out."""
    n: int
    accepted: int
    strategy: str

    @property
    def connected(self) -> bool:
        return False

    @property
    def missing_edges(self) -> int:
        return self.n - 1 - self.accepted

    def to_dict(self) -> Dict[str, object]:
        return {
            "strategy": self.strategy,
            "connected": False,
            "accepted": self.accepted,
            "missing_edges": self.missing_edges,
        }


MSTResult = Union[SpanningTree, Disconnected]


@dataclass(frozen=True)
class EdgeClassification:
    """Edge ids of an MST problem split by how much every MST depends on them.

    critical: removing the edge raises the MST weight (or disconnects the graph).
    pseudo_critical: some, but not every, MST contains the edge.
    """
    critical: Tuple[int, ...]
    pseudo_critical: Tuple[int, ...]


def _weighted_edges(graph: Graph, operation: str) -> Tuple[Edge, ...]:
    graph.require_undirected(operation)
    for idx, e in enumerate(graph.edges):
        if e.weight is None:
            raise MissingWeightError(idx)
    return graph.edges


def kruskal(graph: Graph) -> MSTResult:
    """Kruskal's MST: cheapest edges first, Union-Find rejects cycles."""
    edges = _weighted_edges(graph, "kruskal")
    n = graph.n
    if n <= 1:
        return SpanningTree((), 0, "kruskal")

    # sorted() is stable: equal weights keep input order
    order = sorted(range(len(edges)), key=lambda i: edges[i].weight)
    dsu = DisjointSet(n)
    accepted: List[Edge] = []
    total = 0
    for eid in order:
        e = edges[eid]
        if dsu.union(e.u, e.v):
            accepted.append(e)
            total += e.weight
            if len(accepted) == n - 1:
                break

    if len(accepted) != n - 1:
        logger.debug("kruskal: %d of %d edges accepted, graph is disconnected", len(accepted), n - 1)
        return Disconnected(n=n, accepted=len(accepted), strategy="kruskal")
    return SpanningTree(tuple(accepted), total, "kruskal")


def prim(graph: Graph, start: int = 0) -> MSTResult:
    """Prim's MST grown from ``start`` with a lazy-deletion binary heap."""
    edges = _weighted_edges(graph, "prim")
    n = graph.n
    if n <= 1:
        return SpanningTree((), 0, "prim")
    start = vertex_index(start, n)

    incident = graph.incident()
    visited = [False] * n
    reached = 0
    accepted: List[Edge] = []
    total = 0

    # heap item: (weight, tie, node, edge_id); tie keeps pops in push order
    tie = 0
    frontier: List[Tuple[float, int, int, int]] = [(0, tie, start, -1)]
    while frontier and reached < n:
        w, _, node, eid = heapq.heappop(frontier)
        if visited[node]:
            continue
        visited[node] = True
        reached += 1
        if eid != -1:
            accepted.append(edges[eid])
            total += w
        for nbr, nid in incident[node]:
            if not visited[nbr]:
                tie += 1
                heapq.heappush(frontier, (edges[nid].weight, tie, nbr, nid))

    if reached != n:
        logger.debug("prim: reached %d of %d vertices from %d, graph is disconnected", reached, n, start)
        return Disconnected(n=n, accepted=len(accepted), strategy="prim")
    return SpanningTree(tuple(accepted), total, "prim")


STRATEGIES: Dict[str, Callable[[Graph], MSTResult]] = {
    "kruskal": kruskal,
    "prim": prim,
}


def minimum_spanning_tree(graph: Graph, strategy: str = "kruskal") -> MSTResult:
    try:
        build = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown MST strategy {strategy!r}; expected one of {sorted(STRATEGIES)}") from None
    return build(graph)


def _mst_weight(
    n: int,
    edges: Sequence[Edge],
    order: Sequence[int],
    *,
    exclude: Optional[int] = None,
    include: Optional[int] = None,
) -> Optional[float]:
    """Kruskal weight with one edge banned or forced in; None if nothing spans."""
    dsu = DisjointSet(n)
    weight = 0
    count = 0
    if include is not None:
        e = edges[include]
        dsu.union(e.u, e.v)
        weight += e.weight
        count += 1
    for eid in order:
        if eid == exclude:
            continue
        e = edges[eid]
        if dsu.union(e.u, e.v):
            weight += e.weight
            count += 1
    return weight if count == n - 1 else None


def classify_mst_edges(graph: Graph) -> Union[EdgeClassification, Disconnected]:
    """Split edge ids into critical and pseudo-critical MST edges.

    O(E^2 alpha(V)): one Kruskal run per edge and mode.
    """
    edges = _weighted_edges(graph, "classify_mst_edges")
    n = graph.n
    if n <= 1:
        return EdgeClassification((), ())

    order = sorted(range(len(edges)), key=lambda i: edges[i].weight)
    base = _mst_weight(n, edges, order)
    if base is None:
        dsu = DisjointSet(n)
        for e in edges:
            dsu.union(e.u, e.v)
        return Disconnected(n=n, accepted=n - dsu.count, strategy="kruskal")

    critical: List[int] = []
    pseudo: List[int] = []
    for eid in range(len(edges)):
        without = _mst_weight(n, edges, order, exclude=eid)
        if without is None or (without > base and not math.isclose(without, base)):
            critical.append(eid)
            continue
        forced = _mst_weight(n, edges, order, include=eid)
        if forced is not None and math.isclose(forced, base):
            pseudo.append(eid)
    return EdgeClassification(tuple(critical), tuple(pseudo))


def min_cost_connect_points(points: Sequence[Sequence[float]]) -> float:
    """Cheapest way to join 2-D points when a link costs its Manhattan length."""
    pts = np.asarray(points)
    m = len(pts)
    if m <= 1:
        return 0.0
    pts = pts.reshape(m, -1)
    dist = np.abs(pts[:, None, :] - pts[None, :, :]).sum(axis=2)
    rows, cols = np.triu_indices(m, k=1)
    edges = [Edge(int(i), int(j), dist[i, j].item()) for i, j in zip(rows, cols)]
    result = kruskal(Graph(m, edges))
    # a complete graph always spans
    return float(result.total_weight)
