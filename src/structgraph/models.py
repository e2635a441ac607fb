from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ValidationIssue:
    """A single structural audit finding."""

    severity: str  # "error" | "warning" | "info"
    issue_type: str
    message: str
    vertex: Optional[int] = None
    edge: Optional[Tuple[int, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity,
            "type": self.issue_type,
            "message": self.message,
            "vertex": self.vertex,
            "edge": list(self.edge) if self.edge is not None else None,
        }
