"""
Kubernetes 런타임 어댑터
RedisCluster CRD 조회, Pod IP 조회, Secret 조회, Pod 내 명령 실행

Kubernetes 클라이언트가 던지는 예외(ApiException, urllib3 전송 오류)는 모두
RedisClusterError 계열로 바꿔서 올린다.
"""
import base64
import logging
from typing import List, Optional, Tuple

from kubernetes.client.rest import ApiException
from kubernetes.stream import stream
from pydantic import ValidationError
from urllib3.exceptions import HTTPError

from core.config import settings
from core.exceptions import ExecutionError, NotFoundError, RedisClusterError
from core.kubernetes import get_k8s_clients
from models.cluster import ClusterSpec

logger = logging.getLogger(__name__)

# API 서버에 닿지 못했을 때 (연결 거부, 재시도 초과, 소켓 오류)
TRANSPORT_ERRORS = (HTTPError, OSError)


class KubernetesRuntime:
    """Kubernetes API 위에서 동작하는 외부 협력자 구현"""

    def __init__(self, core_v1=None, custom_api=None):
        if core_v1 is None or custom_api is None:
            default_core, default_custom = get_k8s_clients()
            core_v1 = core_v1 or default_core
            custom_api = custom_api or default_custom
        self.core_v1 = core_v1
        self.custom_api = custom_api

    def get_cluster_spec(self, namespace: str, name: str) -> ClusterSpec:
        """RedisCluster 커스텀 리소스 조회

        Raises:
            NotFoundError: 리소스가 없을 때
            RedisClusterError: API 오류, 또는 리소스 형식이 잘못됐을 때
        """
        try:
            obj = self.custom_api.get_namespaced_custom_object(
                group=settings.CRD_GROUP,
                version=settings.CRD_VERSION,
                namespace=namespace,
                plural=settings.CRD_PLURAL,
                name=name,
            )
        except ApiException as e:
            if e.status == 404:
                raise NotFoundError(f"RedisCluster {namespace}/{name} not found") from e
            raise RedisClusterError(f"Failed to get RedisCluster {namespace}/{name}: {e.reason}") from e
        except TRANSPORT_ERRORS as e:
            raise RedisClusterError(f"Failed to get RedisCluster {namespace}/{name}: {e}") from e

        try:
            return ClusterSpec.from_custom_object(obj)
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise RedisClusterError(f"Invalid RedisCluster {namespace}/{name}: {e}") from e

    def resolve_pod_address(self, namespace: str, pod_name: str) -> Optional[str]:
        """Pod IP 조회 (스케줄 전이면 None)"""
        try:
            pod = self.core_v1.read_namespaced_pod(pod_name, namespace)
        except ApiException as e:
            if e.status == 404:
                raise NotFoundError(f"Pod {pod_name} not found in namespace {namespace}") from e
            raise RedisClusterError(f"Failed to get pod {namespace}/{pod_name}: {e.reason}") from e
        except TRANSPORT_ERRORS as e:
            raise RedisClusterError(f"Failed to get pod {namespace}/{pod_name}: {e}") from e
        return pod.status.pod_ip if pod.status else None

    def get_secret_value(self, namespace: str, secret_name: str, key: str) -> str:
        try:
            secret = self.core_v1.read_namespaced_secret(secret_name, namespace)
        except ApiException as e:
            if e.status == 404:
                raise NotFoundError(f"Secret {secret_name} not found in namespace {namespace}") from e
            raise RedisClusterError(f"Failed to get secret {namespace}/{secret_name}: {e.reason}") from e
        except TRANSPORT_ERRORS as e:
            raise RedisClusterError(f"Failed to get secret {namespace}/{secret_name}: {e}") from e

        data = secret.data or {}
        if key not in data:
            raise NotFoundError(f"Key {key} not found in secret {namespace}/{secret_name}")
        return base64.b64decode(data[key]).decode("utf-8")

    def list_container_names(self, namespace: str, pod_name: str) -> List[str]:
        try:
            pod = self.core_v1.read_namespaced_pod(pod_name, namespace)
        except ApiException as e:
            raise ExecutionError(f"Could not get pod info for {namespace}/{pod_name}: {e.reason}") from e
        except TRANSPORT_ERRORS as e:
            raise ExecutionError(f"Could not get pod info for {namespace}/{pod_name}: {e}") from e
        return [c.name for c in pod.spec.containers or []]

    def exec_in_pod(
        self,
        namespace: str,
        pod_name: str,
        container: str,
        argv: List[str],
        timeout: Optional[float] = None,
    ) -> Tuple[str, str]:
        """Pod 컨테이너 안에서 명령 실행 후 (stdout, stderr) 반환

        Raises:
            ExecutionError: 세션을 열 수 없거나, 제한 시간 안에 끝나지 않거나,
                명령이 0 이 아닌 코드로 종료했을 때
        """
        timeout = settings.EXEC_TIMEOUT if timeout is None else timeout
        try:
            resp = stream(
                self.core_v1.connect_get_namespaced_pod_exec,
                pod_name,
                namespace,
                container=container,
                command=argv,
                stderr=True,
                stdin=False,
                stdout=True,
                tty=False,
                _preload_content=False,
            )
        except ApiException as e:
            raise ExecutionError(f"Failed to init executor for {namespace}/{pod_name}: {e.reason}") from e
        except Exception as e:
            raise ExecutionError(f"Failed to init executor for {namespace}/{pod_name}: {e}") from e

        try:
            resp.run_forever(timeout=timeout)
            if resp.is_open():
                raise ExecutionError(
                    f"Command in {namespace}/{pod_name} did not finish within {timeout}s"
                )
            stdout = resp.read_stdout() or ""
            stderr = resp.read_stderr() or ""
            # 세션이 닫힌 뒤 error 채널의 status 로 결정된다
            try:
                returncode = resp.returncode
            except (TypeError, KeyError, IndexError, ValueError) as e:
                raise ExecutionError(
                    f"Command in {namespace}/{pod_name} finished without an exit status: {e}"
                ) from e
        finally:
            resp.close()

        if returncode:
            logger.debug(f"Exec in {namespace}/{pod_name} exited with {returncode}")
            raise ExecutionError(
                f"Command in {namespace}/{pod_name} exited with code {returncode}: "
                f"{stderr.strip() or stdout.strip()}"
            )
        return stdout, stderr


__all__ = ["KubernetesRuntime"]
