from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
import logging

from structgraph.models import ValidationIssue
from structgraph.topology.euler import NoEulerianPath, eulerian_path
from structgraph.topology.graph import Graph
from structgraph.topology.spanning import Disconnected, minimum_spanning_tree
from structgraph.topology.structure import cut_structure, strongly_connected_components
from structgraph.topology.union_find import connected_components

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditConfig:
    """Which structural checks to run and how loudly to report them."""

    mst_strategy: str = "kruskal"  # "kruskal" | "prim"
    scc_algorithm: str = "tarjan"  # "tarjan" | "kosaraju"
    report_orphans: bool = True
    report_articulation_points: bool = True
    report_bridges: bool = True
    report_cycles: bool = True
    report_spanning_tree: bool = True
    report_eulerian: bool = False
    orphan_severity: str = "error"
    articulation_severity: str = "warning"
    bridge_severity: str = "warning"


class NetworkTopologyValidator:
    """Graph-theoretic checks over a whole graph.

    What it catches:
      - orphaned / disconnected components
      - single points of failure (articulation points, bridges)
      - loops (cycles) that may impact redundancy assumptions
      - whether a minimum spanning tree exists and what it weighs
      - strongly connected structure of directed graphs
    """

    def __init__(self, config: Optional[AuditConfig] = None):
        self.config = config or AuditConfig()

    def _orphans(self, comps: List[List[int]]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        if len(comps) <= 1:
            return issues
        main = max(comps, key=len)
        for comp in comps:
            if comp is main:
                continue
            for node in comp:
                issues.append(
                    ValidationIssue(
                        severity=self.config.orphan_severity,
                        issue_type="orphaned_vertex",
                        message=f"Vertex {node} is disconnected from the main component.",
                        vertex=node,
                    )
                )
        return issues

    def _cut_issues(self, graph: Graph) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        cuts = cut_structure(graph)
        if self.config.report_articulation_points:
            for node in sorted(cuts.articulation_points):
                issues.append(
                    ValidationIssue(
                        severity=self.config.articulation_severity,
                        issue_type="articulation_point",
                        message=f"Vertex {node} is an articulation point; its failure can disconnect part of the graph.",
                        vertex=node,
                    )
                )
        if self.config.report_bridges:
            for u, v in sorted(cuts.bridges):
                issues.append(
                    ValidationIssue(
                        severity=self.config.bridge_severity,
                        issue_type="bridge",
                        message=f"Edge ({u}, {v}) is a bridge; removing it splits its component.",
                        edge=(u, v),
                    )
                )
        return issues

    def _spanning_issues(self, graph: Graph) -> List[ValidationIssue]:
        if not graph.weighted:
            logger.debug("Skipping spanning tree check: not every edge has a weight")
            return []
        result = minimum_spanning_tree(graph, self.config.mst_strategy)
        if isinstance(result, Disconnected):
            return [
                ValidationIssue(
                    severity="warning",
                    issue_type="no_spanning_tree",
                    message=f"No spanning tree: {result.missing_edges} more edge(s) needed to connect every vertex.",
                )
            ]
        return [
            ValidationIssue(
                severity="info",
                issue_type="spanning_tree",
                message=f"Minimum spanning tree ({result.strategy}) uses {len(result.edges)} edge(s), "
                f"total weight {result.total_weight}.",
            )
        ]

    def _eulerian_issues(self, graph: Graph) -> List[ValidationIssue]:
        result = eulerian_path(graph)
        if isinstance(result, NoEulerianPath):
            return [
                ValidationIssue(
                    severity="info",
                    issue_type="no_eulerian_path",
                    message=f"No Eulerian path: {result.reason}.",
                )
            ]
        kind = "circuit" if result.is_circuit else "path"
        return [
            ValidationIssue(
                severity="info",
                issue_type="eulerian_path",
                message=f"Eulerian {kind} covers all {len(result)} edge(s).",
            )
        ]

    def _directed_issues(self, graph: Graph) -> List[ValidationIssue]:
        comps = strongly_connected_components(graph, self.config.scc_algorithm)
        nontrivial = [c for c in comps if len(c) > 1]
        return [
            ValidationIssue(
                severity="info",
                issue_type="strongly_connected_components",
                message=f"{len(comps)} strongly connected component(s), {len(nontrivial)} with more than one vertex.",
            )
        ]

    def validate(self, graph: Graph) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []

        if graph.n == 0:
            return issues

        comps = connected_components(graph)
        if self.config.report_orphans:
            issues.extend(self._orphans(comps))

        if graph.directed:
            issues.extend(self._directed_issues(graph))
            return issues

        if self.config.report_articulation_points or self.config.report_bridges:
            issues.extend(self._cut_issues(graph))

        if self.config.report_cycles:
            # For undirected graph: cyclomatic number = E - N + C
            cycles = max(0, graph.edge_count - graph.n + len(comps))
            if cycles > 0:
                issues.append(
                    ValidationIssue(
                        severity="info",
                        issue_type="cycles_detected",
                        message=f"Graph contains {cycles} independent cycle(s). "
                        "Loops can be good (redundancy) but may need explicit design review.",
                    )
                )

        if self.config.report_spanning_tree:
            issues.extend(self._spanning_issues(graph))

        if self.config.report_eulerian:
            issues.extend(self._eulerian_issues(graph))

        return issues
