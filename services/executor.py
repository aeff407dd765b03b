"""
Remote Command Executor

- run(): redis 프로토콜로 노드에 직접 명령 (CLUSTER NODES, MEET, FORGET ...)
- exec_in_pod(): leader-0 컨테이너 안에서 redis-cli 실행 (create / add-node)

클라이언트는 호출마다 새로 만들고 버린다. 같은 orchestration 안에서도
Pod IP 가 바뀔 수 있기 때문에 연결을 재사용하지 않는다.
자동 재시도는 하지 않는다.
"""
from typing import List, Optional, Tuple

import redis

from core.config import settings
from core.exceptions import CommandError, ExecutionError
from models.node import NodeRef


class RemoteCommandExecutor:
    """Runs commands against a node's redis endpoint or inside its pod."""

    def __init__(self, runtime, locator, timeout: Optional[float] = None, exec_timeout: Optional[float] = None):
        self.runtime = runtime
        self.locator = locator
        self.timeout = settings.REDIS_COMMAND_TIMEOUT if timeout is None else timeout
        self.exec_timeout = settings.EXEC_TIMEOUT if exec_timeout is None else exec_timeout

    def password(self, ctx) -> Optional[str]:
        """Secret 에서 redis 비밀번호 조회 (설정되지 않았으면 None)"""
        secret = ctx.spec.password_secret
        if secret is None:
            return None
        return self.runtime.get_secret_value(ctx.namespace, secret.name, secret.key)

    def build_client(self, ctx, ref: NodeRef) -> redis.Redis:
        address = self.locator.resolve(ref, ctx.log)
        kwargs = {
            "host": address.ip,
            "port": address.port,
            "db": 0,
            "password": self.password(ctx),
            "socket_timeout": self.timeout,
            "socket_connect_timeout": self.timeout,
            "decode_responses": True,
        }
        if ctx.spec.tls is not None:
            kwargs.update(
                ssl=True,
                ssl_ca_certs=settings.TLS_CA_PATH,
                ssl_certfile=settings.TLS_CERT_PATH,
                ssl_keyfile=settings.TLS_KEY_PATH,
                ssl_check_hostname=False,
            )
        return redis.Redis(**kwargs)

    def run(self, ctx, ref: NodeRef, *args: str) -> str:
        """노드에 redis 명령 하나 실행 후 응답 텍스트 반환

        Raises:
            ResolutionError: 노드 주소를 알 수 없을 때
            CommandError: 명령이 실패했을 때
        """
        client = self.build_client(ctx, ref)
        command = " ".join(str(a) for a in args)
        try:
            result = client.execute_command(*args)
        except redis.RedisError as e:
            ctx.log.error(f"Redis command {command!r} failed on {ref}: {e}")
            raise CommandError(f"{command} on {ref}: {e}") from e
        finally:
            client.close()

        if isinstance(result, bytes):
            result = result.decode("utf-8")
        return result if isinstance(result, str) else str(result)

    def exec_in_pod(self, ctx, ref: NodeRef, argv: List[str]) -> Tuple[str, str]:
        """ref Pod 의 `<cluster>-leader` 컨테이너에서 명령 실행

        Raises:
            ExecutionError: 컨테이너가 없거나 세션을 열 수 없을 때
        """
        containers = self.runtime.list_container_names(ctx.namespace, ref.pod_name)
        if ctx.control_container not in containers:
            ctx.log.error(f"Could not find container {ctx.control_container} in pod {ref}")
            raise ExecutionError(
                f"Container {ctx.control_container} not found in pod {ctx.namespace}/{ref}"
            )

        try:
            stdout, stderr = self.runtime.exec_in_pod(
                ctx.namespace, ref.pod_name, ctx.control_container, argv, timeout=self.exec_timeout
            )
        except ExecutionError as e:
            ctx.log.error(f"Could not execute command {_redact(argv)} in {ref}: {e}")
            raise

        ctx.log.info(f"Successfully executed the command {_redact(argv)} in {ref}: {stdout.strip()}")
        if stderr.strip():
            ctx.log.warning(f"Command stderr from {ref}: {stderr.strip()}")
        return stdout, stderr


def _redact(argv: List[str]) -> List[str]:
    """-a 뒤의 비밀번호를 로그에서 가림"""
    redacted = list(argv)
    for i, arg in enumerate(redacted[:-1]):
        if arg == "-a":
            redacted[i + 1] = "******"
    return redacted


__all__ = ["RemoteCommandExecutor"]
