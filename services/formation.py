"""
Formation Engine
- create_cluster: leader 전체로 초기 mesh 생성 (클러스터가 없을 때 한 번만)
- attach_replicas: follower i 를 leader i 의 replica 로 추가 (이미 있으면 건너뜀)
"""
from typing import List

from core.config import settings
from core.exceptions import ExecutionError
from models.node import LEADER, FOLLOWER, NodeRef
from services.topology import is_present

CLI = ["redis-cli", "--cluster"]


def tls_args(ctx, client_host: str) -> List[str]:
    if ctx.spec.tls is None:
        return []
    return ["--tls", "--cacert", settings.TLS_CA_PATH, "-h", client_host]


class FormationEngine:
    """Builds the initial mesh and attaches followers through redis-cli."""

    def __init__(self, locator, executor, topology):
        self.locator = locator
        self.executor = executor
        self.topology = topology

    def auth_args(self, ctx, client_host: str) -> List[str]:
        """비밀번호 / TLS 인자"""
        args = []
        password = self.executor.password(ctx)
        if password is not None:
            args += ["-a", password]
        return args + tls_args(ctx, client_host)

    def create_command(self, ctx) -> List[str]:
        leaders = ctx.nodes(LEADER)
        cmd = CLI + ["create"]
        for ref in leaders:
            cmd.append(self.locator.resolve(ref, ctx.log).endpoint)
        cmd.append("--cluster-yes")
        return cmd + self.auth_args(ctx, ctx.node(LEADER, 0).pod_name)

    def replication_command(self, ctx, leader: NodeRef, follower: NodeRef) -> List[str]:
        follower_address = self.locator.resolve(follower, ctx.log)
        leader_address = self.locator.resolve(leader, ctx.log)
        cmd = CLI + ["add-node", follower_address.endpoint, leader_address.endpoint, "--cluster-slave"]
        return cmd + self.auth_args(ctx, leader.pod_name)

    def create_cluster(self, ctx) -> None:
        """redis-cli --cluster create 를 leader-0 에서 실행

        되돌릴 수 없는 bootstrap 단계이므로 클러스터가 아직 없을 때만 호출해야 한다.
        """
        with ctx.lock():
            cmd = self.create_command(ctx)
            ctx.log.info(f"Creating redis cluster with {len(ctx.nodes(LEADER))} leaders")
            self.executor.exec_in_pod(ctx, ctx.node(LEADER, 0), cmd)

    def attach_replicas(self, ctx) -> List[NodeRef]:
        """follower 를 ordinal 순서대로 같은 ordinal 의 leader 에 붙인다

        한 follower 의 exec 실패는 다음 follower 시도를 막지 않는다. 실패가 있었다면
        루프가 끝난 뒤 ExecutionError 로 알린다. 주소 조회/토폴로지 조회 실패는 즉시 중단.

        Returns:
            새로 추가한 follower 목록
        """
        attached: List[NodeRef] = []
        failures: List[str] = []
        seed = ctx.node(LEADER, 0)

        with ctx.lock():
            for follower in ctx.nodes(FOLLOWER):
                leader = ctx.node(LEADER, follower.ordinal)
                follower_address = self.locator.resolve(follower, ctx.log)
                table = self.topology.list_nodes(ctx, seed)

                if is_present(table, follower_address.ip):
                    ctx.log.info(f"Skipping adding node to cluster, already present: {follower}")
                    continue

                ctx.log.info(f"Adding node to cluster: {follower} ({follower_address.host}) -> {leader}")
                cmd = self.replication_command(ctx, leader, follower)
                try:
                    self.executor.exec_in_pod(ctx, seed, cmd)
                except ExecutionError as e:
                    failures.append(f"{follower}: {e}")
                    continue
                attached.append(follower)

        if failures:
            raise ExecutionError(f"Failed to attach followers: {'; '.join(failures)}")
        return attached


__all__ = ["FormationEngine", "tls_args"]
