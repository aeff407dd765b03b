"""
Redis 클러스터 토폴로지 관리 command server

API 구조:
- POST /cluster/{namespace}/{clusterName}/reset        - graceful recovery
- POST /cluster/{namespace}/{clusterName}/force-reset  - forced failover
- GET  /cluster/{namespace}/{clusterName}/status       - 노드 수 / 비정상 노드 수
- GET  /api/health, /api/k8s/health                    - 헬스체크
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.config import settings
from core.exceptions import RedisClusterError
from routers import recovery_router, health_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_TITLE, version=settings.APP_VERSION)


@app.exception_handler(RedisClusterError)
async def redis_cluster_error_handler(request: Request, exc: RedisClusterError):
    """라우터 밖(의존성 생성 등)에서 난 오류도 500 + detail 로 응답"""
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# ============================================
# 라우터 등록
# ============================================
app.include_router(recovery_router)
app.include_router(health_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.CMD_SERVER_HOST, port=settings.CMD_SERVER_PORT)
