"""
RedisCluster recovery API
- reset: graceful recovery (forget -> meet -> follower reset)
- force-reset: forced failover (cluster reset / flushall)
- status: leader-0 기준 노드 수와 비정상 노드 수
"""
import asyncio

from fastapi import APIRouter, Depends, HTTPException

from models.cluster import ClusterStatusResponse, CommandStatus
from services.recovery import TopologyManager, get_manager

router = APIRouter(prefix="/cluster", tags=["recovery"])


@router.post("/{namespace}/{cluster_name}/reset", response_model=CommandStatus)
async def reset_cluster(namespace: str, cluster_name: str, manager: TopologyManager = Depends(get_manager)):
    """Graceful recovery 실행"""
    try:
        await asyncio.to_thread(manager.recover_cluster, namespace, cluster_name)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return CommandStatus(status="OK")


@router.post("/{namespace}/{cluster_name}/force-reset", response_model=CommandStatus)
async def force_reset_cluster(namespace: str, cluster_name: str, manager: TopologyManager = Depends(get_manager)):
    """Forced failover 실행"""
    try:
        await asyncio.to_thread(manager.force_recover_cluster, namespace, cluster_name)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return CommandStatus(status="OK")


@router.get("/{namespace}/{cluster_name}/status", response_model=ClusterStatusResponse)
async def cluster_status(namespace: str, cluster_name: str, manager: TopologyManager = Depends(get_manager)):
    """클러스터 노드 상태 조회"""
    try:
        counts = await asyncio.to_thread(manager.cluster_status, namespace, cluster_name)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return ClusterStatusResponse(namespace=namespace, name=cluster_name, **counts)
