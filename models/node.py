"""
Redis 노드 관련 모델
NodeRef (논리적 노드), NodeAddress (해석된 주소), NodeTableRow (CLUSTER NODES 한 줄)
"""
from typing import List, Tuple
from pydantic import BaseModel, ConfigDict

LEADER = "leader"
FOLLOWER = "follower"

# operator 역할 -> redis 역할
_PROTOCOL_ROLES = {
    LEADER: "master",
    FOLLOWER: "slave",
}


def protocol_role(role: str) -> str:
    """leader/follower 를 master/slave 로 변환, 그 외는 그대로 반환"""
    return _PROTOCOL_ROLES.get(role, role)


class NodeRef(BaseModel):
    """클러스터 내 노드의 논리적 식별자"""
    model_config = ConfigDict(frozen=True)

    namespace: str
    cluster: str
    role: str
    ordinal: int

    @property
    def pod_name(self) -> str:
        return f"{self.cluster}-{self.role}-{self.ordinal}"

    def __str__(self) -> str:
        return self.pod_name


class NodeAddress(BaseModel):
    """NodeRef 의 현재 네트워크 주소 (캐시하지 않음)"""
    model_config = ConfigDict(frozen=True)

    ip: str
    port: int
    ipv6: bool = False

    @property
    def host(self) -> str:
        """host:port 문자열에 쓰는 형태 (IPv6 는 대괄호)"""
        return f"[{self.ip}]" if self.ipv6 else self.ip

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"

    def __str__(self) -> str:
        return self.endpoint


class NodeTableRow(BaseModel):
    """CLUSTER NODES 응답의 한 줄"""
    model_config = ConfigDict(frozen=True)

    node_id: str
    address: str  # ip:port@cport
    flags: str
    master_id: str
    ping_sent: str
    pong_recv: str
    config_epoch: str
    link_state: str
    slots: List[str] = []

    @property
    def ip(self) -> str:
        """address 필드의 IP 부분"""
        hostport = self.address.split(",", 1)[0].split("@", 1)[0]
        ip = hostport.rsplit(":", 1)[0] if ":" in hostport else hostport
        return ip.strip("[]")

    @property
    def is_myself(self) -> bool:
        return "myself" in self.flags

    def has_role(self, role: str) -> bool:
        return protocol_role(role) in self.flags

    @property
    def is_unhealthy(self) -> bool:
        return "fail" in self.flags or "disconnected" in self.link_state


NodeTable = Tuple[NodeTableRow, ...]


__all__ = [
    "LEADER",
    "FOLLOWER",
    "protocol_role",
    "NodeRef",
    "NodeAddress",
    "NodeTableRow",
    "NodeTable",
]
