import random

from structgraph.topology import DisjointSet, Graph, connected_components, has_cycle


def test_union_find_basic_merges():
    dsu = DisjointSet(5)
    assert dsu.count == 5
    assert dsu.union(0, 1)
    assert dsu.union(1, 2)
    # already joined: signals a cycle
    assert not dsu.union(0, 2)
    assert dsu.connected(0, 2)
    assert not dsu.connected(0, 3)
    assert dsu.count == 3
    assert dsu.size_of(2) == 3
    assert dsu.size_of(4) == 1


def test_union_by_rank_tie_increments_rank():
    dsu = DisjointSet(4)
    dsu.union(0, 1)
    root = dsu.find(0)
    assert dsu.rank[root] == 1
    # lower rank tree goes under the higher one, rank unchanged
    dsu.union(2, 0)
    assert dsu.find(2) == root
    assert dsu.rank[root] == 1


def test_path_compression_points_at_root():
    dsu = DisjointSet(6)
    # build a chain by hand to force a deep path
    for i in range(5):
        dsu.parent[i] = i + 1
    assert dsu.find(0) == 5
    assert all(dsu.parent[i] == 5 for i in range(6))


def test_groups():
    dsu = DisjointSet(5)
    dsu.union(3, 4)
    dsu.union(0, 2)
    groups = sorted(dsu.groups().values())
    assert groups == [[0, 2], [1], [3, 4]]


def test_connected_matches_transitive_closure():
    rng = random.Random(7)
    n = 30
    dsu = DisjointSet(n)
    # naive labels: relabel a whole class on every merge
    label = list(range(n))
    for _ in range(60):
        a, b = rng.randrange(n), rng.randrange(n)
        merged = dsu.union(a, b)
        assert merged == (label[a] != label[b])
        old, new = label[b], label[a]
        label = [new if x == old else x for x in label]
        for x in range(n):
            for y in range(n):
                assert dsu.connected(x, y) == (label[x] == label[y])


def test_connected_components_and_cycles():
    # A-B-C chain plus D-E separate component
    g = Graph(6, [(0, 1), (1, 2), (3, 4)])
    assert connected_components(g) == [[0, 1, 2], [3, 4], [5]]
    assert not has_cycle(g)

    assert has_cycle(Graph(3, [(0, 1), (1, 2), (2, 0)]))
    assert has_cycle(Graph(2, [(0, 1), (0, 1)]))
    assert has_cycle(Graph(1, [(0, 0)]))
    assert connected_components(Graph(0)) == []
