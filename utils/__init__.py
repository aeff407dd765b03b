# Utility functions
from .log import ClusterLoggerAdapter, cluster_logger

# 환경 자동 감지 K8s 클라이언트 (로컬 개발 지원)
from .k8s_client import (
    load_k8s_config,
    is_running_in_cluster,
    get_environment_info,
)

__all__ = [
    'ClusterLoggerAdapter', 'cluster_logger',
    # 환경 자동 감지 유틸리티
    'load_k8s_config', 'is_running_in_cluster', 'get_environment_info',
]
