# Core module - configuration, exceptions, kubernetes clients
from .config import settings
from .kubernetes import get_k8s_clients
from .exceptions import (
    RedisClusterError,
    ResolutionError,
    CommandError,
    ExecutionError,
    NotFoundError,
)

__all__ = [
    'settings',
    'get_k8s_clients',
    'RedisClusterError',
    'ResolutionError',
    'CommandError',
    'ExecutionError',
    'NotFoundError',
]
