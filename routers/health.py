"""
Health check API
"""
from fastapi import APIRouter
from core.kubernetes import get_k8s_clients
from utils.k8s_client import get_environment_info

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health_check():
    """API 헬스체크"""
    return {"status": "healthy", "service": "redis-cluster-topology"}


@router.get("/api/k8s/health")
async def k8s_health_check():
    """Kubernetes 연결 헬스체크"""
    try:
        core_v1, _ = get_k8s_clients()
        core_v1.list_namespace(limit=1)
        return {"status": "connected", **get_environment_info()}
    except Exception as e:
        return {"status": "disconnected", "error": str(e)}
