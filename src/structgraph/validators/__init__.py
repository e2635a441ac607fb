from .topology_validator import AuditConfig, NetworkTopologyValidator

__all__ = [
    "AuditConfig",
    "NetworkTopologyValidator",
]
