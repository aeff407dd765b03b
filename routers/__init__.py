"""
API Routers

디렉터리 구조:
- cluster/   : RedisCluster 복구 명령 (reset, force-reset, status)
- health     : 헬스체크
"""

from .cluster import recovery_router
from .health import router as health_router

__all__ = [
    'recovery_router',
    'health_router',
]
