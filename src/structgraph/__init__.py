"""Structural analysis of graphs over dense integer vertices.

This package provides:
- disjoint-set union and DSU-based connectivity / cycle checks,
- minimum spanning trees (Kruskal, Prim) and MST edge classification,
- strongly connected components (Tarjan, Kosaraju),
- articulation points and bridges,
- Eulerian paths and circuits (Hierholzer),
- a structural audit that turns the above into findings.
"""

from .exceptions import GraphKindError, InvalidVertexError, MissingWeightError, StructGraphError
from .models import ValidationIssue
from .topology import (
    Disconnected,
    DisjointSet,
    Edge,
    EulerianPath,
    Graph,
    NoEulerianPath,
    SpanningTree,
    articulation_points,
    bridges,
    connected_components,
    cut_structure,
    eulerian_path,
    kosaraju_scc,
    kruskal,
    minimum_spanning_tree,
    prim,
    tarjan_scc,
)
from .validators import AuditConfig, NetworkTopologyValidator
from .audit_engine import AuditEngine, AuditResult

__all__ = [
    "GraphKindError",
    "InvalidVertexError",
    "MissingWeightError",
    "StructGraphError",
    "ValidationIssue",
    "Disconnected",
    "DisjointSet",
    "Edge",
    "EulerianPath",
    "Graph",
    "NoEulerianPath",
    "SpanningTree",
    "articulation_points",
    "bridges",
    "connected_components",
    "cut_structure",
    "eulerian_path",
    "kosaraju_scc",
    "kruskal",
    "minimum_spanning_tree",
    "prim",
    "tarjan_scc",
    "AuditConfig",
    "NetworkTopologyValidator",
    "AuditEngine",
    "AuditResult",
]
