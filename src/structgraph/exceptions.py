"""
Custom exceptions for the structural analysis engine.

Only precondition violations are raised. Expected "no solution" outcomes
(disconnected spanning forest, no Eulerian walk) are result types.
"""

from typing import Optional


class StructGraphError(Exception):
    """Base exception class for structgraph errors."""
    pass


class InvalidVertexError(StructGraphError, ValueError):
    """Raised when a vertex index falls outside ``[0, n)``."""

    def __init__(self, vertex: int, n: int, edge_index: Optional[int] = None):
        where = f" in edge #{edge_index}" if edge_index is not None else ""
        super().__init__(f"Vertex {vertex}{where} is out of range [0, {n})")
        self.vertex = vertex
        self.n = n
        self.edge_index = edge_index


class GraphKindError(StructGraphError, ValueError):
    """Raised when an algorithm gets a directed graph where it needs an undirected one, or vice versa."""
    pass


class MissingWeightError(StructGraphError, ValueError):
    """Raised when a weighted algorithm meets an edge without a weight."""

    def __init__(self, edge_index: int):
        super().__init__(f"Edge #{edge_index} has no weight")
        self.edge_index = edge_index
