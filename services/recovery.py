"""
RedisCluster 복구 진입점
CRD 를 조회해 ClusterContext 를 만들고 orchestrator 를 호출한다.
"""
import logging
from typing import Optional

from core.exceptions import RedisClusterError
from services.context import ClusterContext
from services.executor import RemoteCommandExecutor
from services.failover import FailoverOrchestrator
from services.formation import FormationEngine
from services.kubernetes_runtime import KubernetesRuntime
from services.locator import NodeLocator
from services.topology import TopologyReader
from utils.log import cluster_logger

logger = logging.getLogger(__name__)


class TopologyManager:
    """Wires the locator, executor, reader and engines over one runtime."""

    def __init__(self, runtime, locator=None, executor=None):
        self.runtime = runtime
        self.locator = locator or NodeLocator(runtime)
        self.executor = executor or RemoteCommandExecutor(runtime, self.locator)
        self.topology = TopologyReader(self.executor)
        self.formation = FormationEngine(self.locator, self.executor, self.topology)
        self.failover = FailoverOrchestrator(self.locator, self.executor, self.topology)

    def context(self, namespace: str, name: str) -> ClusterContext:
        log = cluster_logger(namespace, name)
        try:
            spec = self.runtime.get_cluster_spec(namespace, name)
        except RedisClusterError as e:
            log.error(f"CRD fetch error: {e}")
            raise
        return ClusterContext(spec=spec, log=log)

    def recover_cluster(self, namespace: str, name: str) -> None:
        ctx = self.context(namespace, name)
        try:
            self.failover.execute_graceful_failover_operation(ctx)
        except RedisClusterError as e:
            ctx.log.error(f"Graceful failover error: {e}")
            raise

    def force_recover_cluster(self, namespace: str, name: str) -> None:
        ctx = self.context(namespace, name)
        try:
            self.failover.execute_failover_operation(ctx)
        except RedisClusterError as e:
            ctx.log.error(f"Forced failover error: {e}")
            raise

    def create_cluster(self, namespace: str, name: str) -> None:
        self.formation.create_cluster(self.context(namespace, name))

    def attach_replicas(self, namespace: str, name: str):
        return self.formation.attach_replicas(self.context(namespace, name))

    def cluster_status(self, namespace: str, name: str) -> dict:
        return self.topology.cluster_status(self.context(namespace, name))

    # reconcile 루프용 단일 지표 조회 (HTTP 에는 cluster_status 로 노출)
    def node_count(self, namespace: str, name: str, role: str = "") -> int:
        return self.topology.check_node_count(self.context(namespace, name), role)

    def failed_node_count(self, namespace: str, name: str) -> int:
        return self.topology.check_cluster_state(self.context(namespace, name))


_manager: Optional[TopologyManager] = None


def get_manager() -> TopologyManager:
    """Kubernetes 런타임 기반 TopologyManager (최초 호출 시 생성)"""
    global _manager
    if _manager is None:
        try:
            runtime = KubernetesRuntime()
        except RuntimeError as e:
            logger.error(f"Kubernetes client unavailable: {e}")
            raise RedisClusterError(f"Kubernetes client unavailable: {e}") from e
        _manager = TopologyManager(runtime)
        logger.info("Topology manager initialized")
    return _manager


__all__ = ["TopologyManager", "get_manager"]
