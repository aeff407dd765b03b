# Topology management services
from .context import ClusterContext, cluster_lock
from .locator import NodeLocator
from .executor import RemoteCommandExecutor
from .topology import TopologyReader
from .formation import FormationEngine
from .failover import FailoverOrchestrator
from .recovery import TopologyManager, get_manager

__all__ = [
    'ClusterContext', 'cluster_lock',
    'NodeLocator', 'RemoteCommandExecutor', 'TopologyReader',
    'FormationEngine', 'FailoverOrchestrator',
    'TopologyManager', 'get_manager',
]
