from .graph import Edge, Graph
from .union_find import DisjointSet, connected_components, has_cycle
from .spanning import (
    Disconnected,
    EdgeClassification,
    SpanningTree,
    classify_mst_edges,
    kruskal,
    min_cost_connect_points,
    minimum_spanning_tree,
    prim,
)
from .structure import (
    CutStructure,
    TraversalContext,
    VisitState,
    articulation_points,
    bridges,
    cut_structure,
    kosaraju_scc,
    scc_labels,
    strongly_connected_components,
    tarjan_scc,
)
from .euler import (
    EulerianPath,
    NoEulerianPath,
    eulerian_path,
    eulerian_path_directed,
    reconstruct_itinerary,
)

__all__ = [
    "Edge",
    "Graph",
    "DisjointSet",
    "connected_components",
    "has_cycle",
    "Disconnected",
    "EdgeClassification",
    "SpanningTree",
    "classify_mst_edges",
    "kruskal",
    "min_cost_connect_points",
    "minimum_spanning_tree",
    "prim",
    "CutStructure",
    "TraversalContext",
    "VisitState",
    "articulation_points",
    "bridges",
    "cut_structure",
    "kosaraju_scc",
    "scc_labels",
    "strongly_connected_components",
    "tarjan_scc",
    "EulerianPath",
    "NoEulerianPath",
    "eulerian_path",
    "eulerian_path_directed",
    "reconstruct_itinerary",
]
