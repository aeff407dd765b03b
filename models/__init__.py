# Pydantic models
from .cluster import SecretKeyRef, TLSConfig, ClusterSpec, ClusterStatusResponse, CommandStatus
from .node import (
    LEADER, FOLLOWER, protocol_role,
    NodeRef, NodeAddress, NodeTableRow, NodeTable,
)

__all__ = [
    # Cluster
    'SecretKeyRef', 'TLSConfig', 'ClusterSpec', 'ClusterStatusResponse', 'CommandStatus',
    # Node
    'LEADER', 'FOLLOWER', 'protocol_role',
    'NodeRef', 'NodeAddress', 'NodeTableRow', 'NodeTable',
]
