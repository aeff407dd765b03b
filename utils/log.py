"""
클러스터 단위 로거

요청마다 namespace/name 을 담은 LoggerAdapter 를 한 번 만들고,
각 컴포넌트 호출에 명시적으로 넘긴다.
"""
import logging
from typing import Any, MutableMapping, Tuple


class ClusterLoggerAdapter(logging.LoggerAdapter):
    """Prefixes messages with the cluster identity and tags records with it."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return f"[{self.extra['namespace']}/{self.extra['cluster']}] {msg}", kwargs


def cluster_logger(namespace: str, name: str, base: str = "topology.cluster") -> ClusterLoggerAdapter:
    """namespace/name 으로 스코프된 로거 생성"""
    return ClusterLoggerAdapter(
        logging.getLogger(base),
        {"namespace": namespace, "cluster": name},
    )


__all__ = ["ClusterLoggerAdapter", "cluster_logger"]
