from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple, Union
import logging
import operator

import numpy as np
import pandas as pd

from structgraph.exceptions import GraphKindError, InvalidVertexError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    """Connection between two vertex indices, optionally weighted.

    Ordered for directed graphs, unordered for undirected ones.
    """
    u: int
    v: int
    weight: Optional[float] = None

    @classmethod
    def coerce(cls, item: Union["Edge", Tuple[Any, ...], List[Any]]) -> "Edge":
        """Build an Edge from ``(u, v)`` / ``(u, v, weight)`` tuples or pass one through."""
        if isinstance(item, Edge):
            return item
        if len(item) == 2:
            return cls(item[0], item[1])
        if len(item) == 3:
            return cls(item[0], item[1], item[2])
        raise ValueError(f"Edge must be (u, v) or (u, v, weight), got {item!r}")

    def endpoints(self) -> Tuple[int, int]:
        """Endpoints as ``(min, max)``; the identity of an undirected edge."""
        return (self.u, self.v) if self.u <= self.v else (self.v, self.u)

    def to_tuple(self) -> Tuple[Any, ...]:
        if self.weight is None:
            return (self.u, self.v)
        return (self.u, self.v, self.weight)


def vertex_index(x: Any, n: int, edge_index: Optional[int] = None) -> int:
    """Return ``x`` as a plain int in ``[0, n)`` or raise InvalidVertexError.

    Integral types (numpy integers included) pass; floats never do.
    """
    try:
        v = operator.index(x)
    except TypeError:
        raise InvalidVertexError(x, n, edge_index=edge_index) from None
    if not 0 <= v < n:
        raise InvalidVertexError(x, n, edge_index=edge_index)
    return v


class Graph:
    """Immutable graph snapshot over dense vertex indices ``0..n-1``.

    Edges keep their input position as a stable edge id. Undirected edges are
    listed in the incidence lists of both endpoints (a self-loop only once),
    so parallel edges stay distinguishable by id.
    """

    def __init__(self, n: int, edges: Iterable = (), directed: bool = False) -> None:
        try:
            self._n = operator.index(n)
        except TypeError:
            raise ValueError(f"Vertex count must be an integer, got {n!r}") from None
        if self._n < 0:
            raise ValueError(f"Vertex count must be non-negative, got {n}")
        self._directed = bool(directed)

        # reject bad indices before any traversal can start
        checked: List[Edge] = []
        for idx, item in enumerate(edges):
            e = Edge.coerce(item)
            u = vertex_index(e.u, self._n, edge_index=idx)
            v = vertex_index(e.v, self._n, edge_index=idx)
            checked.append(Edge(u, v, e.weight))
        self._edges: Tuple[Edge, ...] = tuple(checked)

        incident: List[List[Tuple[int, int]]] = [[] for _ in range(self._n)]
        for eid, e in enumerate(self._edges):
            incident[e.u].append((e.v, eid))
            if not self._directed and e.u != e.v:
                incident[e.v].append((e.u, eid))
        self._incident: Tuple[Tuple[Tuple[int, int], ...], ...] = tuple(tuple(row) for row in incident)

    @classmethod
    def from_edges(cls, n: int, edges: Iterable, directed: bool = False) -> "Graph":
        return cls(n, edges, directed=directed)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        n: Optional[int] = None,
        *,
        directed: bool = False,
        source: str = "source",
        target: str = "target",
        weight: Optional[str] = "weight",
    ) -> "Graph":
        """Build a graph from an edge table.

        ``weight`` names an optional column; it is ignored when absent from
        ``df``. When ``n`` is omitted it is inferred as the largest index + 1.
        """
        for col in (source, target):
            if col not in df.columns:
                raise KeyError(f"Missing required column '{col}'")

        us = df[source].astype(int).tolist()
        vs = df[target].astype(int).tolist()
        if weight is not None and weight in df.columns:
            ws = [None if pd.isna(w) else w for w in df[weight].tolist()]
        else:
            ws = [None] * len(us)

        if n is None:
            n = max(max(us, default=-1), max(vs, default=-1)) + 1
        logger.debug("Building graph with %d vertices from %d table rows", n, len(us))
        return cls(n, [Edge(u, v, w) for u, v, w in zip(us, vs, ws)], directed=directed)

    @property
    def n(self) -> int:
        return self._n

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def weighted(self) -> bool:
        """True when every edge carries a weight."""
        return all(e.weight is not None for e in self._edges)

    def incident(self) -> Tuple[Tuple[Tuple[int, int], ...], ...]:
        """Per-vertex ``(neighbor, edge_id)`` pairs (out-edges when directed)."""
        return self._incident

    def adjacency(self) -> List[List[int]]:
        """Per-vertex neighbor lists (out-neighbors when directed)."""
        return [[v for v, _eid in row] for row in self._incident]

    def reversed(self) -> "Graph":
        """Transposed graph: every directed edge flipped."""
        return Graph(self._n, [Edge(e.v, e.u, e.weight) for e in self._edges], directed=self._directed)

    def out_degree(self) -> np.ndarray:
        deg = np.zeros(self._n, dtype=np.int64)
        for e in self._edges:
            deg[e.u] += 1
        return deg

    def in_degree(self) -> np.ndarray:
        deg = np.zeros(self._n, dtype=np.int64)
        for e in self._edges:
            deg[e.v] += 1
        return deg

    def degree(self) -> np.ndarray:
        """Total degree per vertex; an undirected self-loop counts twice."""
        return self.out_degree() + self.in_degree()

    def require_directed(self, operation: str) -> None:
        if not self._directed:
            raise GraphKindError(f"{operation} requires a directed graph")

    def require_undirected(self, operation: str) -> None:
        if self._directed:
            raise GraphKindError(f"{operation} requires an undirected graph")

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph(n={self._n}, edges={len(self._edges)}, {kind})"
