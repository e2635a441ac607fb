import numpy as np
import pandas as pd
import pytest

from structgraph import GraphKindError, InvalidVertexError
from structgraph.topology import Edge, Graph


def test_invalid_vertex_rejected_at_construction():
    with pytest.raises(InvalidVertexError) as exc:
        Graph(3, [(0, 1), (1, 3)])
    assert exc.value.vertex == 3
    assert exc.value.edge_index == 1
    # precondition errors are also ValueErrors
    with pytest.raises(ValueError):
        Graph(2, [(-1, 0)])
    with pytest.raises(ValueError):
        Graph(-1)


def test_edge_coercion():
    assert Edge.coerce((1, 2)) == Edge(1, 2)
    assert Edge.coerce([1, 2, 3.5]) == Edge(1, 2, 3.5)
    assert Edge(4, 1).endpoints() == (1, 4)
    with pytest.raises(ValueError):
        Edge.coerce((1,))


def test_incidence_keeps_parallel_edges_apart():
    g = Graph(3, [(0, 1), (0, 1), (1, 2), (2, 2)])
    assert g.incident()[0] == ((1, 0), (1, 1))
    assert g.incident()[1] == ((0, 0), (0, 1), (2, 2))
    # self-loop listed once but counted twice in the degree
    assert g.incident()[2] == ((1, 2), (2, 3))
    assert g.degree().tolist() == [2, 3, 3]
    assert g.adjacency()[1] == [0, 0, 2]


def test_directed_views():
    g = Graph(3, [(0, 1), (1, 2)], directed=True)
    assert g.adjacency() == [[1], [2], []]
    assert g.reversed().adjacency() == [[], [0], [1]]
    assert g.out_degree().tolist() == [1, 1, 0]
    assert g.in_degree().tolist() == [0, 1, 1]
    with pytest.raises(GraphKindError):
        g.require_undirected("bridges")
    Graph(1).require_undirected("bridges")


def test_from_dataframe():
    df = pd.DataFrame({"source": [0, 1, 2], "target": [1, 2, 3], "weight": [1.5, 2.0, None]})
    g = Graph.from_dataframe(df)
    assert g.n == 4
    assert g.edges[0] == Edge(0, 1, 1.5)
    assert g.edges[2].weight is None
    assert not g.weighted

    df2 = pd.DataFrame({"a": [0], "b": [1]})
    g2 = Graph.from_dataframe(df2, 5, source="a", target="b", directed=True)
    assert g2.n == 5 and g2.directed
    assert g2.edges == (Edge(0, 1),)

    with pytest.raises(KeyError):
        Graph.from_dataframe(df2)


def test_empty_graph():
    g = Graph(0)
    assert g.n == 0
    assert g.edges == ()
    assert g.adjacency() == []
    assert g.weighted


def test_from_edges_accepts_mixed_inputs():
    g = Graph.from_edges(3, [Edge(0, 1, 2.0), (1, 2), [2, 0, 1]])
    assert g.edges == (Edge(0, 1, 2.0), Edge(1, 2), Edge(2, 0, 1))
    assert repr(g) == "Graph(n=3, edges=3, undirected)"


def test_vertex_indices_must_be_integers():
    # no silent truncation towards a valid index
    with pytest.raises(InvalidVertexError) as exc:
        Graph(2, [(-0.5, 1)])
    assert exc.value.vertex == -0.5
    with pytest.raises(InvalidVertexError) as exc:
        Graph(3, [Edge(0, 1.0), Edge(1.0, 2)])
    assert exc.value.edge_index == 0
    with pytest.raises(InvalidVertexError):
        Graph(3, [("0", 1)])
    with pytest.raises(ValueError):
        Graph(2.7, [(0, 1)])


def test_numpy_integer_indices_are_accepted():
    g = Graph(np.int64(3), [(np.int64(0), np.int32(2), 1.5)])
    assert g.n == 3
    assert g.edges == (Edge(0, 2, 1.5),)
    assert type(g.edges[0].u) is int
    assert g.incident()[2] == ((0, 0),)
