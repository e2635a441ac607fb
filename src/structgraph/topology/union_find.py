from __future__ import annotations

from typing import Dict, List

from structgraph.topology.graph import Graph


class DisjointSet:
    """Disjoint Set Union (Union-Find) over dense indices ``0..n-1``.

    Operations are nearly O(1) amortized with path compression + union by rank.
    One instance per connectivity problem; unions cannot be undone.
    """
    def __init__(self, n: int):
        self.parent: List[int] = list(range(n))
        self.rank: List[int] = [0] * n
        self._size: List[int] = [1] * n
        self.count = n

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, x: int) -> int:
        # iterative path compression
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # compress
        while self.parent[x] != root:
            nxt = self.parent[x]
            self.parent[x] = root
            x = nxt
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets of ``a`` and ``b``; False if they were already joined."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        self._size[ra] += self._size[rb]
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        self.count -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def size_of(self, x: int) -> int:
        return self._size[self.find(x)]

    def groups(self) -> Dict[int, List[int]]:
        """Members of every set keyed by root, members ascending."""
        out: Dict[int, List[int]] = {}
        for x in range(len(self.parent)):
            out.setdefault(self.find(x), []).append(x)
        return out


def connected_components(graph: Graph) -> List[List[int]]:
    """Connected components using Union-Find.

    Directed edges are treated as undirected (weak components). Components
    are ordered by their smallest vertex.
    """
    dsu = DisjointSet(graph.n)
    for e in graph.edges:
        dsu.union(e.u, e.v)
    return sorted(dsu.groups().values(), key=lambda members: members[0])


def has_cycle(graph: Graph) -> bool:
    """True if the undirected graph has a cycle; self-loops and parallel edges count."""
    graph.require_undirected("has_cycle")
    dsu = DisjointSet(graph.n)
    return any(not dsu.union(e.u, e.v) for e in graph.edges)
