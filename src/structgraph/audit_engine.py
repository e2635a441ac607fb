from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
import logging

import pandas as pd

from structgraph.models import ValidationIssue
from structgraph.topology.graph import Graph
from structgraph.topology.spanning import MSTResult, minimum_spanning_tree
from structgraph.topology.union_find import connected_components
from structgraph.validators import AuditConfig, NetworkTopologyValidator

logger = logging.getLogger(__name__)


@dataclass
class AuditResult:
    """Findings of one audit plus the structures they were derived from.

    ``spanning`` is None when the graph is directed or not fully weighted.
    """
    issues: List[ValidationIssue]
    components: List[List[int]]
    spanning: Optional[MSTResult]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == "warning"]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_issues": len(self.issues),
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "components": self.components,
            "spanning": self.spanning.to_dict() if self.spanning is not None else None,
            "issues": [issue.to_dict() for issue in self.issues],
        }


class AuditEngine:
    """Orchestrates the structural audit."""

    def __init__(self, config: Optional[AuditConfig] = None):
        self.config = config or AuditConfig()
        self.topology_validator = NetworkTopologyValidator(self.config)

    def audit(self, graph: Graph) -> AuditResult:
        """Run the complete audit on a graph snapshot."""
        issues = self.topology_validator.validate(graph)

        spanning: Optional[MSTResult] = None
        if not graph.directed and graph.weighted:
            spanning = minimum_spanning_tree(graph, self.config.mst_strategy)

        result = AuditResult(issues=issues, components=connected_components(graph), spanning=spanning)
        if result.errors:
            logger.warning("Audit of %r found %d error(s)", graph, len(result.errors))
        else:
            logger.info("Audit of %r found %d issue(s)", graph, len(issues))
        return result

    def audit_edges(self, n: int, edges: Iterable, directed: bool = False) -> AuditResult:
        return self.audit(Graph(n, edges, directed=directed))

    def audit_dataframe(self, df: pd.DataFrame, n: Optional[int] = None, **columns) -> AuditResult:
        """Audit an edge table; ``columns`` go to ``Graph.from_dataframe``."""
        return self.audit(Graph.from_dataframe(df, n, **columns))
