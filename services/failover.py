"""
Failover Orchestrator

Forced failover (execute_failover_operation):
    leader 전체, 그 다음 follower 전체에 CLUSTER RESET.
    RESET 실패 시 FLUSHALL 한 번만 시도하고, FLUSHALL 도 실패하면 전체 중단.

Graceful recovery (execute_graceful_failover_operation):
    1. leader 마다 자기 CLUSTER NODES 를 읽고 (slave 면 FAILOVER TAKEOVER 먼저) 모든 node-id FORGET
    2. follower 도 동일
    3. leader 간 CLUSTER MEET (모든 i<j 쌍)
    4. follower 에 forced failover 와 같은 RESET 단계 재실행

모든 명령은 순차 실행한다. MEET 순서가 어떤 노드가 연결을 시작하는지 결정하므로
병렬화하지 않는다.
"""
from core.exceptions import CommandError, RedisClusterError
from models.node import LEADER, FOLLOWER, NodeRef
from services.topology import myself, node_ids


class FailoverOrchestrator:
    """Drives forced and graceful recovery of a redis cluster mesh."""

    def __init__(self, locator, executor, topology):
        self.locator = locator
        self.executor = executor
        self.topology = topology

    # ============================================
    # Forced failover
    # ============================================

    def execute_failover_operation(self, ctx) -> None:
        """leader 를 모두 처리한 뒤 follower 처리. leader 단계 실패 시 follower 는 건드리지 않음"""
        with ctx.lock():
            try:
                self.reset_role(ctx, LEADER)
            except RedisClusterError as e:
                ctx.log.error(f"Redis command failed for leader nodes: {e}")
                raise
            try:
                self.reset_role(ctx, FOLLOWER)
            except RedisClusterError as e:
                ctx.log.error(f"Redis command failed for follower nodes: {e}")
                raise

    def reset_role(self, ctx, role: str) -> None:
        for ref in ctx.nodes(role):
            self.reset_node(ctx, ref)

    def reset_node(self, ctx, ref: NodeRef) -> None:
        """CLUSTER RESET, 실패하면 FLUSHALL 한 번

        FLUSHALL 이 성공하면 이번 패스에서는 RESET 을 다시 보내지 않는다.
        """
        ctx.log.info(f"Executing redis failover operations on {ref}")
        try:
            output = self.executor.run(ctx, ref, "CLUSTER", "RESET")
        except CommandError as e:
            ctx.log.error(f"Redis cluster reset failed on {ref}: {e}")
            try:
                self.executor.run(ctx, ref, "FLUSHALL")
            except CommandError as flush_error:
                ctx.log.error(f"Redis flush command failed on {ref}: {flush_error}")
                raise
            ctx.log.info(f"Flushed {ref} after failed reset")
            return
        ctx.log.info(f"Redis cluster failover executed on {ref}: {output}")

    # ============================================
    # Graceful recovery
    # ============================================

    def execute_graceful_failover_operation(self, ctx) -> None:
        with ctx.lock():
            self.forget_role(ctx, LEADER)
            ctx.log.info("Leaders forgotten")
            self.forget_role(ctx, FOLLOWER)
            ctx.log.info("Followers forgotten")
            self.meet_leaders(ctx)
            ctx.log.info("Leader mesh rebuilt")
            self.reset_role(ctx, FOLLOWER)
            ctx.log.info("Followers reattached")

    def forget_role(self, ctx, role: str) -> None:
        """role 의 각 노드에서 자기 테이블의 모든 노드를 FORGET

        테이블 조회와 TAKEOVER 실패는 전파, 개별 FORGET 실패는 로그만 남긴다.
        """
        for ref in ctx.nodes(role):
            table = self.topology.list_nodes(ctx, ref)

            own_row = myself(table)
            if own_row is not None and own_row.has_role(FOLLOWER):
                ctx.log.info(f"{ref} is a slave, taking over before forgetting its peers")
                self.executor.run(ctx, ref, "CLUSTER", "FAILOVER", "TAKEOVER")

            for node_id in node_ids(table):
                ctx.log.info(f"Forgetting node {node_id} on {ref}")
                try:
                    self.executor.run(ctx, ref, "CLUSTER", "FORGET", node_id)
                except CommandError as e:
                    ctx.log.warning(f"Ignoring forget failure for {node_id} on {ref}: {e}")
            ctx.log.info(f"Forgot all nodes known to {ref}")

    def meet_leaders(self, ctx) -> None:
        """모든 leader 쌍 (i<j) 에 대해 i 에서 j 로 CLUSTER MEET (완전 그래프)"""
        leaders = ctx.nodes(LEADER)
        for i, root in enumerate(leaders[:-1]):
            for peer in leaders[i + 1:]:
                address = self.locator.resolve(peer, ctx.log)
                try:
                    self.executor.run(ctx, root, "CLUSTER", "MEET", address.ip, str(address.port))
                except CommandError as e:
                    ctx.log.error(f"Meet failed: {root} -> {peer} ({address.host}): {e}")
                    continue
                ctx.log.info(f"Meet executed: {root} -> {peer} ({address.host})")


__all__ = ["FailoverOrchestrator"]
