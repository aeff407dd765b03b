"""
요청 단위 클러스터 컨텍스트와 클러스터별 직렬화 락
"""
import threading
import weakref
from dataclasses import dataclass
from typing import Optional

from models.cluster import ClusterSpec
from models.node import NodeRef
from utils.log import ClusterLoggerAdapter, cluster_logger

# 참조가 모두 사라진 락은 항목에서 자동으로 제거된다
_locks = weakref.WeakValueDictionary()
_locks_guard = threading.Lock()


def cluster_lock(namespace: str, name: str) -> threading.RLock:
    """클러스터 하나당 하나의 락 (mesh 를 바꾸는 명령 순서가 섞이지 않도록)"""
    key = (namespace, name)
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = threading.RLock()
            _locks[key] = lock
        return lock


@dataclass(frozen=True)
class ClusterContext:
    """One orchestration request: the cluster spec plus its logging sink."""

    spec: ClusterSpec
    log: Optional[ClusterLoggerAdapter] = None

    def __post_init__(self):
        if self.log is None:
            object.__setattr__(self, "log", cluster_logger(self.spec.namespace, self.spec.name))

    @property
    def namespace(self) -> str:
        return self.spec.namespace

    @property
    def name(self) -> str:
        return self.spec.name

    def node(self, role: str, ordinal: int) -> NodeRef:
        return NodeRef(namespace=self.namespace, cluster=self.name, role=role, ordinal=ordinal)

    def nodes(self, role: str):
        """역할의 모든 노드를 ordinal 순서로"""
        return [self.node(role, i) for i in range(self.spec.get_replica_counts(role))]

    @property
    def control_container(self) -> str:
        return f"{self.name}-leader"

    def lock(self) -> threading.RLock:
        return cluster_lock(self.namespace, self.name)


__all__ = ["ClusterContext", "cluster_lock"]
