"""
클러스터 관리 라우터
- recovery: RedisCluster 복구 (reset, force-reset, status)
"""
from .recovery import router as recovery_router

__all__ = [
    "recovery_router",
]
