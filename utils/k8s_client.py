"""
operator 의 Kubernetes 접속 설정

- Pod 안에서 실행: ServiceAccount 토큰 (RedisCluster / Pod / Secret 읽기, pods/exec 권한 필요)
- 로컬 개발: KUBECONFIG 또는 ~/.kube/config, KUBE_CONTEXT 로 context 선택 가능
"""
import os
import logging
from typing import Optional

from kubernetes import config

logger = logging.getLogger(__name__)

_config_loaded = False
_is_in_cluster: Optional[bool] = None


def is_running_in_cluster() -> bool:
    return os.environ.get('KUBERNETES_SERVICE_HOST') is not None


def _load_kubeconfig() -> None:
    context = os.environ.get("KUBE_CONTEXT") or None
    config.load_kube_config(context=context)
    logger.info(f"Kubeconfig loaded (context={context or 'current'})")


def load_k8s_config() -> bool:
    """프로세스당 한 번 Kubernetes 설정 로드

    in-cluster 설정이 실패하면 kubeconfig 로 넘어간다.

    Returns:
        bool: in-cluster 설정이면 True

    Raises:
        RuntimeError: 두 방식 모두 실패했을 때
    """
    global _config_loaded, _is_in_cluster

    if _config_loaded:
        return _is_in_cluster

    in_cluster = False
    if is_running_in_cluster():
        try:
            config.load_incluster_config()
            in_cluster = True
            logger.info("Using in-cluster ServiceAccount credentials")
        except config.ConfigException as e:
            logger.warning(f"In-cluster config failed: {e}, trying kubeconfig")

    if not in_cluster:
        try:
            _load_kubeconfig()
        except config.ConfigException as e:
            logger.error(f"No usable Kubernetes configuration: {e}")
            raise RuntimeError(
                "Unable to load Kubernetes configuration; run inside the cluster "
                "or provide a kubeconfig (~/.kube/config or KUBECONFIG)"
            ) from e

    _is_in_cluster = in_cluster
    _config_loaded = True
    return in_cluster


def get_environment_info() -> dict:
    """/api/k8s/health 에 붙는 접속 환경 정보"""
    if not is_running_in_cluster():
        return {
            "environment": "local",
            "config_source": "~/.kube/config",
        }
    return {
        "environment": "in-cluster",
        "config_source": "ServiceAccount token",
        "kubernetes_host": os.environ.get('KUBERNETES_SERVICE_HOST'),
        "kubernetes_port": os.environ.get('KUBERNETES_SERVICE_PORT'),
    }


__all__ = [
    'load_k8s_config',
    'is_running_in_cluster',
    'get_environment_info',
]
