"""
Node Locator
NodeRef -> NodeAddress. Pod IP 는 재시작마다 바뀌므로 매번 새로 조회한다.
"""
import ipaddress
from typing import Optional

from core.config import settings
from core.exceptions import NotFoundError, RedisClusterError, ResolutionError
from models.node import NodeAddress, NodeRef


class NodeLocator:
    """Resolves logical nodes to their current pod address."""

    def __init__(self, runtime, port: Optional[int] = None):
        self.runtime = runtime
        self.port = settings.REDIS_PORT if port is None else port

    def resolve(self, ref: NodeRef, log) -> NodeAddress:
        """노드의 현재 주소 조회

        Raises:
            ResolutionError: Pod 가 없거나 아직 IP 가 없을 때 (재시도는 호출자 몫)
        """
        try:
            pod_ip = self.runtime.resolve_pod_address(ref.namespace, ref.pod_name)
        except NotFoundError as e:
            log.error(f"Error in getting redis pod IP for {ref}: {e}")
            raise ResolutionError(str(e)) from e
        except RedisClusterError as e:
            log.error(f"Error in getting redis pod IP for {ref}: {e}")
            raise ResolutionError(f"Could not resolve address of {ref}: {e}") from e

        if not pod_ip:
            raise ResolutionError(f"Pod {ref.namespace}/{ref} has no IP address yet")

        try:
            ip = ipaddress.ip_address(pod_ip)
        except ValueError as e:
            raise ResolutionError(f"Pod {ref} reported an invalid IP {pod_ip!r}") from e

        address = NodeAddress(ip=str(ip), port=self.port, ipv6=ip.version == 6)
        if address.ipv6:
            log.info(f"Redis is IPv6: {ref} -> {address.host}")
        log.debug(f"Successfully got the ip for redis {ref}: {address.host}")
        return address


__all__ = ["NodeLocator"]
