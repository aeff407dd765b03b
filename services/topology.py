"""
Topology Reader
CLUSTER NODES 응답 파싱과 노드 수 / 비정상 노드 수 집계
"""
from typing import Optional

from core.exceptions import CommandError
from models.node import LEADER, FOLLOWER, NodeRef, NodeTable, NodeTableRow

# node-id, ip:port@cport, flags, master, ping-sent, pong-recv, config-epoch, link-state
MIN_FIELDS = 8


def parse_node_table(output: Optional[str]) -> NodeTable:
    """CLUSTER NODES 텍스트를 NodeTable 로 변환

    필드는 공백으로 구분되고, 8번째 이후(slot 범위)는 개수가 가변적이다.

    Raises:
        CommandError: 응답이 비었거나 표 형태로 읽을 수 없을 때
    """
    if not isinstance(output, str) or not output.strip():
        raise CommandError("Empty CLUSTER NODES response")

    rows = []
    for lineno, line in enumerate(output.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) < MIN_FIELDS:
            raise CommandError(
                f"Malformed CLUSTER NODES line {lineno}: expected at least "
                f"{MIN_FIELDS} fields, got {len(fields)}: {line!r}"
            )
        rows.append(NodeTableRow(
            node_id=fields[0],
            address=fields[1],
            flags=fields[2],
            master_id=fields[3],
            ping_sent=fields[4],
            pong_recv=fields[5],
            config_epoch=fields[6],
            link_state=fields[7],
            slots=fields[8:],
        ))
    return tuple(rows)


def count_nodes(table: NodeTable, role: str = "") -> int:
    """role 의 redis 역할 문자열이 flags 에 있는 행 수 (role 이 비면 전체)"""
    if not role:
        return len(table)
    return sum(1 for row in table if row.has_role(role))


def count_unhealthy(table: NodeTable) -> int:
    """fail 플래그 또는 disconnected 링크 상태인 행 수 (행당 한 번)"""
    return sum(1 for row in table if row.is_unhealthy)


def is_present(table: NodeTable, ip: str) -> bool:
    candidate = ip.strip("[]")
    return any(row.ip == candidate for row in table)


def node_ids(table: NodeTable):
    """중복 없는 node-id 목록 (표 순서 유지)"""
    seen = []
    for row in table:
        if row.node_id not in seen:
            seen.append(row.node_id)
    return seen


def myself(table: NodeTable) -> Optional[NodeTableRow]:
    for row in table:
        if row.is_myself:
            return row
    return None


class TopologyReader:
    """Reads node tables through the remote command executor."""

    def __init__(self, executor):
        self.executor = executor

    def list_nodes(self, ctx, ref: NodeRef) -> NodeTable:
        """ref 노드 기준의 CLUSTER NODES 스냅샷"""
        output = self.executor.run(ctx, ref, "CLUSTER", "NODES")
        try:
            table = parse_node_table(output)
        except CommandError as e:
            ctx.log.error(f"Error parsing node table from {ref}: {e}")
            raise
        ctx.log.debug(f"Redis cluster nodes are listed from {ref}: {len(table)} rows")
        return table

    # check_node_count / check_cluster_state 는 reconcile 루프용 (TopologyManager.node_count,
    # failed_node_count). HTTP /status 는 한 번의 스냅샷으로 cluster_status 를 쓴다.

    def check_node_count(self, ctx, role: str = "") -> int:
        """leader-0 에서 본 role 노드 수"""
        table = self.list_nodes(ctx, ctx.node(LEADER, 0))
        count = count_nodes(table, role)
        if role:
            ctx.log.info(f"Number of redis nodes are {count} (type={role})")
        else:
            ctx.log.info(f"Total number of redis nodes are {count}")
        return count

    def check_cluster_state(self, ctx) -> int:
        """leader-0 에서 본 비정상 노드 수"""
        table = self.list_nodes(ctx, ctx.node(LEADER, 0))
        count = count_unhealthy(table)
        ctx.log.info(f"Number of failed nodes in cluster: {count}")
        return count

    def cluster_status(self, ctx) -> dict:
        """단일 스냅샷으로 역할별 노드 수와 비정상 노드 수 집계"""
        table = self.list_nodes(ctx, ctx.node(LEADER, 0))
        return {
            "leaders": count_nodes(table, LEADER),
            "followers": count_nodes(table, FOLLOWER),
            "total": count_nodes(table),
            "unhealthy": count_unhealthy(table),
        }


__all__ = [
    "parse_node_table",
    "count_nodes",
    "count_unhealthy",
    "is_present",
    "node_ids",
    "myself",
    "TopologyReader",
]
