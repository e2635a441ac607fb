"""Eulerian paths and circuits via Hierholzer's algorithm.

Edge consumption is tracked per edge id, never per vertex pair, so every
physical edge of a multigraph is walked exactly once.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union
import logging

import numpy as np

from structgraph.topology.graph import Graph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EulerianPath:
    """Walk using every edge once: ``vertices[i]`` and ``vertices[i + 1]`` are joined by ``edge_ids[i]``."""
    vertices: Tuple[int, ...]
    edge_ids: Tuple[int, ...]
    is_circuit: bool

    def __len__(self) -> int:
        return len(self.edge_ids)


@dataclass(frozen=True)
class NoEulerianPath:
    reason: str
    odd_vertices: Tuple[int, ...] = ()


EulerianResult = Union[EulerianPath, NoEulerianPath]


def _hierholzer(
    incident: Sequence[Sequence[Tuple[int, int]]],
    start: int,
    edge_count: int,
) -> Optional[Tuple[List[int], List[int]]]:
    """Stack-based Hierholzer over ``(neighbor, edge_id)`` incidence lists.

    Returns None when some edge stayed unused (edges in another component).
    """
    used = [False] * edge_count
    pointer = [0] * len(incident)
    # stack item: (vertex, edge that led here)
    stack: List[Tuple[int, int]] = [(start, -1)]
    path: List[int] = []
    path_edges: List[int] = []

    while stack:
        u, via = stack[-1]
        row = incident[u]
        while pointer[u] < len(row) and used[row[pointer[u]][1]]:
            pointer[u] += 1
        if pointer[u] < len(row):
            v, eid = row[pointer[u]]
            pointer[u] += 1
            used[eid] = True
            stack.append((v, eid))
        else:
            stack.pop()
            path.append(u)
            if via != -1:
                path_edges.append(via)

    if len(path_edges) != edge_count:
        return None
    path.reverse()
    path_edges.reverse()
    return path, path_edges


def _as_result(walk: Tuple[List[int], List[int]]) -> EulerianPath:
    vertices, edge_ids = walk
    return EulerianPath(tuple(vertices), tuple(edge_ids), vertices[0] == vertices[-1])


def eulerian_path(graph: Graph) -> EulerianResult:
    """Eulerian path or circuit of an undirected (multi)graph.

    Starts at the first odd-degree vertex when two exist, otherwise at the
    first vertex with any edge, so circuits come back to their start.
    """
    graph.require_undirected("eulerian_path")
    m = graph.edge_count
    if m == 0:
        return EulerianPath((), (), True)

    degree = graph.degree()
    odd = tuple(int(v) for v in np.flatnonzero(degree % 2 == 1))
    if len(odd) not in (0, 2):
        logger.debug("eulerian_path: %d odd-degree vertices", len(odd))
        return NoEulerianPath(f"{len(odd)} vertices have odd degree; need 0 or 2", odd)

    start = odd[0] if odd else int(np.flatnonzero(degree > 0)[0])
    walk = _hierholzer(graph.incident(), start, m)
    if walk is None:
        return NoEulerianPath("edges span more than one connected component")
    return _as_result(walk)


def eulerian_path_directed(graph: Graph) -> EulerianResult:
    """Eulerian path or circuit following edge directions.

    Needs every vertex balanced, or exactly one with out - in = 1 (the start)
    and one with in - out = 1 (the end).
    """
    graph.require_directed("eulerian_path_directed")
    m = graph.edge_count
    if m == 0:
        return EulerianPath((), (), True)

    out_deg = graph.out_degree()
    balance = out_deg - graph.in_degree()
    sources = np.flatnonzero(balance == 1)
    sinks = np.flatnonzero(balance == -1)
    unbalanced = np.flatnonzero(balance != 0)
    if len(unbalanced) == 0:
        start = int(np.flatnonzero(out_deg > 0)[0])
    elif len(unbalanced) == 2 and len(sources) == 1 and len(sinks) == 1:
        start = int(sources[0])
    else:
        return NoEulerianPath(
            f"{len(unbalanced)} vertices have unequal in/out degree",
            tuple(int(v) for v in unbalanced),
        )

    walk = _hierholzer(graph.incident(), start, m)
    if walk is None:
        return NoEulerianPath("edges are not reachable from the start vertex")
    return _as_result(walk)


def reconstruct_itinerary(tickets: Iterable[Tuple[str, str]], origin: str = "JFK") -> Union[List[str], NoEulerianPath]:
    """Lexically smallest route from ``origin`` that uses every ticket once."""
    tickets = [(str(a), str(b)) for a, b in tickets]
    if not tickets:
        return [origin]

    labels = sorted({a for a, _ in tickets} | {b for _, b in tickets})
    if origin not in labels:
        return NoEulerianPath(f"origin {origin!r} appears on no ticket")
    index: Dict[str, int] = {name: i for i, name in enumerate(labels)}

    # index order equals label order, so sorted edges give sorted out-lists
    edges = sorted((index[a], index[b]) for a, b in tickets)
    graph = Graph(len(labels), edges, directed=True)
    balance = graph.out_degree() - graph.in_degree()
    unbalanced = [int(v) for v in np.flatnonzero(balance != 0)]
    if unbalanced and not (
        len(unbalanced) == 2 and balance[index[origin]] == 1 and int((balance == -1).sum()) == 1
    ):
        return NoEulerianPath(f"no route using every ticket can start at {origin!r}")
    walk = _hierholzer(graph.incident(), index[origin], graph.edge_count)
    if walk is None:
        return NoEulerianPath(f"tickets cannot all be used starting from {origin!r}")
    return [labels[v] for v in walk[0]]
