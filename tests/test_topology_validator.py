import logging

import pandas as pd
from rich.console import Console

from structgraph import AuditConfig, AuditEngine, NetworkTopologyValidator
from structgraph.reports import print_terminal_summary
from structgraph.topology import Disconnected, Graph, SpanningTree
from structgraph.utils import setup_logging


def _types(issues):
    return [i.issue_type for i in issues]


def test_bowtie_audit():
    g = Graph(5, [(0, 1), (1, 2), (2, 3), (3, 4), (1, 3)])
    issues = NetworkTopologyValidator().validate(g)

    aps = [i.vertex for i in issues if i.issue_type == "articulation_point"]
    assert aps == [1, 3]
    br = [i.edge for i in issues if i.issue_type == "bridge"]
    assert br == [(0, 1), (3, 4)]
    assert "cycles_detected" in _types(issues)
    assert "orphaned_vertex" not in _types(issues)
    # unweighted: no spanning tree finding
    assert "spanning_tree" not in _types(issues)


def test_orphans_and_missing_spanning_tree():
    # A-B-C chain plus D-E separate component
    g = Graph(5, [(0, 1, 1.0), (1, 2, 1.0), (3, 4, 1.0)])
    issues = NetworkTopologyValidator().validate(g)
    orphans = [i for i in issues if i.issue_type == "orphaned_vertex"]
    assert [i.vertex for i in orphans] == [3, 4]
    assert all(i.severity == "error" for i in orphans)
    assert "no_spanning_tree" in _types(issues)
    # cyclomatic number should be 0 (no cycles)
    assert "cycles_detected" not in _types(issues)


def test_config_switches_checks():
    g = Graph(3, [(0, 1, 2), (1, 2, 3), (0, 2, 4)])
    config = AuditConfig(mst_strategy="prim", report_cycles=False, report_eulerian=True)
    issues = NetworkTopologyValidator(config).validate(g)
    mst = [i for i in issues if i.issue_type == "spanning_tree"]
    assert len(mst) == 1
    assert "total weight 5" in mst[0].message
    assert "prim" in mst[0].message
    assert "cycles_detected" not in _types(issues)
    euler = [i for i in issues if i.issue_type == "eulerian_path"]
    assert euler and "circuit" in euler[0].message

    quiet = AuditConfig(report_articulation_points=False, report_bridges=False)
    issues = NetworkTopologyValidator(quiet).validate(Graph(3, [(0, 1), (1, 2)]))
    assert "bridge" not in _types(issues)
    assert "articulation_point" not in _types(issues)


def test_directed_audit_uses_scc():
    g = Graph(5, [(0, 1), (1, 2), (2, 0), (2, 3), (3, 4)], directed=True)
    issues = NetworkTopologyValidator(AuditConfig(scc_algorithm="kosaraju")).validate(g)
    scc = [i for i in issues if i.issue_type == "strongly_connected_components"]
    assert scc[0].message.startswith("3 strongly connected component(s), 1 with")


def test_empty_graph_has_no_findings():
    assert NetworkTopologyValidator().validate(Graph(0)) == []


def test_audit_engine_entry_points():
    engine = AuditEngine()
    result = engine.audit_edges(4, [(0, 1), (1, 2), (2, 3)])
    assert _types(result.issues).count("bridge") == 3
    assert result.components == [[0, 1, 2, 3]]
    # unweighted: no spanning tree attempted
    assert result.spanning is None
    assert result.errors == []

    df = pd.DataFrame({"source": [0, 1], "target": [1, 2], "weight": [1.0, 2.0]})
    result = engine.audit_dataframe(df)
    assert "spanning_tree" in _types(result.issues)
    assert isinstance(result.spanning, SpanningTree)
    assert result.spanning.total_weight == 3.0
    d = result.issues[0].to_dict()
    assert set(d) == {"severity", "type", "message", "vertex", "edge"}


def test_audit_result_keeps_components_and_mst():
    result = AuditEngine(AuditConfig(mst_strategy="prim")).audit(Graph(4, [(0, 1, 1.0), (2, 3, 2.0)]))
    assert result.components == [[0, 1], [2, 3]]
    assert isinstance(result.spanning, Disconnected)
    assert result.spanning.strategy == "prim"
    assert [i.vertex for i in result.errors] == [2, 3]
    assert len(result.warnings) == 3

    report = result.to_dict()
    assert report["total_issues"] == len(result.issues)
    assert report["errors"] == 2
    assert report["spanning"]["connected"] is False

    directed = AuditEngine().audit(Graph(3, [(0, 1, 1.0), (1, 2, 1.0)], directed=True))
    assert directed.spanning is None
    assert directed.components == [[0, 1, 2]]


def test_terminal_summary():
    g = Graph(3, [(0, 1)])
    result = AuditEngine().audit(g)
    console = Console(record=True, width=100)
    print_terminal_summary(result.issues, g.n, g.edge_count, console=console)
    text = console.export_text()
    assert "Structural Audit Summary" in text
    assert "orphaned_vertex" in text
    assert "Audit FAILED: errors of type orphaned_vertex" in text


def test_terminal_summary_names_the_failing_checks():
    # bridges escalated to errors on a connected path
    g = Graph(3, [(0, 1), (1, 2)])
    result = AuditEngine(AuditConfig(bridge_severity="error")).audit(g)
    console = Console(record=True, width=100)
    print_terminal_summary(result.issues, g.n, g.edge_count, console=console)
    text = console.export_text()
    assert "Audit FAILED: errors of type bridge" in text
    assert "disconnected" not in text


def test_setup_logging_is_idempotent():
    logger = setup_logging("debug")
    setup_logging("debug")
    assert logger.name == "structgraph"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert not logger.propagate
