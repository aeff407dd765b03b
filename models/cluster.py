"""
RedisCluster related Pydantic models
"""
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict


class SecretKeyRef(BaseModel):
    """비밀번호가 저장된 Secret 참조"""
    name: str
    key: str


class TLSConfig(BaseModel):
    """TLS 설정 (Secret 의 파일 이름)"""
    ca: str = "ca.crt"
    cert: str = "tls.crt"
    key: str = "tls.key"
    secret_name: Optional[str] = None


class ClusterSpec(BaseModel):
    """RedisCluster 커스텀 리소스에서 읽은 클러스터 사양 (read-only)"""
    model_config = ConfigDict(frozen=True)

    namespace: str
    name: str
    cluster_size: int
    leader_replicas: Optional[int] = None
    follower_replicas: Optional[int] = None
    password_secret: Optional[SecretKeyRef] = None
    tls: Optional[TLSConfig] = None

    def get_replica_counts(self, role: str) -> int:
        """Replica count for a role, falling back to the cluster size."""
        if role == "leader" and self.leader_replicas is not None:
            return self.leader_replicas
        if role == "follower" and self.follower_replicas is not None:
            return self.follower_replicas
        return self.cluster_size

    @classmethod
    def from_custom_object(cls, obj: Dict[str, Any]) -> "ClusterSpec":
        """CustomObjectsApi 응답(dict)을 ClusterSpec 으로 변환"""
        metadata = obj.get("metadata", {})
        spec = obj.get("spec", {})
        k8s_config = spec.get("kubernetesConfig") or {}

        secret = k8s_config.get("redisSecret") or k8s_config.get("existingPasswordSecret")
        password_secret = None
        if secret and secret.get("name") and secret.get("key"):
            password_secret = SecretKeyRef(name=secret["name"], key=secret["key"])

        tls = None
        tls_spec = spec.get("TLS") or spec.get("tls")
        if tls_spec is not None:
            tls = TLSConfig(
                ca=tls_spec.get("ca") or "ca.crt",
                cert=tls_spec.get("cert") or "tls.crt",
                key=tls_spec.get("key") or "tls.key",
                secret_name=(tls_spec.get("secret") or {}).get("secretName"),
            )

        return cls(
            namespace=metadata["namespace"],
            name=metadata["name"],
            cluster_size=spec.get("clusterSize", 0),
            leader_replicas=(spec.get("redisLeader") or {}).get("replicas"),
            follower_replicas=(spec.get("redisFollower") or {}).get("replicas"),
            password_secret=password_secret,
            tls=tls,
        )


class ClusterStatusResponse(BaseModel):
    """클러스터 노드 수 / 비정상 노드 수 응답"""
    namespace: str
    name: str
    leaders: int
    followers: int
    total: int
    unhealthy: int


class CommandStatus(BaseModel):
    """명령 실행 결과"""
    status: str = "OK"


__all__ = [
    "SecretKeyRef",
    "TLSConfig",
    "ClusterSpec",
    "ClusterStatusResponse",
    "CommandStatus",
]
