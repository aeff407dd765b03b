"""
Pytest configuration and fixtures
"""
import os
import sys
import pytest
from typing import Generator, AsyncGenerator
from unittest.mock import MagicMock, patch

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport

from core.exceptions import ExecutionError, NotFoundError
from models.cluster import ClusterSpec, SecretKeyRef, TLSConfig
from services.context import ClusterContext
from services.executor import RemoteCommandExecutor
from services.locator import NodeLocator
from services.topology import TopologyReader


# ============================================
# App Fixtures
# ============================================

@pytest.fixture(scope="session")
def app():
    """Create FastAPI app for testing"""
    from main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def client(app) -> Generator:
    """Synchronous test client"""
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncGenerator:
    """Asynchronous test client"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================
# Mock Fixtures
# ============================================

@pytest.fixture
def mock_k8s_clients():
    """Mock Kubernetes clients"""
    with patch("routers.health.get_k8s_clients") as mock:
        core_v1 = MagicMock()
        custom_api = MagicMock()
        mock.return_value = (core_v1, custom_api)
        yield {
            "core_v1": core_v1,
            "custom_api": custom_api,
            "mock": mock
        }


class FakeRuntime:
    """In-memory stand-in for the Kubernetes collaborators"""

    def __init__(self, pod_ips, secrets=None, containers=None, exec_failures=None, specs=None):
        self.pod_ips = dict(pod_ips)
        self.specs = {(s.namespace, s.name): s for s in specs or []}
        self.secrets = secrets or {}
        self.containers = containers
        self.exec_failures = set(exec_failures or [])
        self.execs = []

    def get_cluster_spec(self, namespace, name):
        if (namespace, name) not in self.specs:
            raise NotFoundError(f"RedisCluster {namespace}/{name} not found")
        return self.specs[(namespace, name)]

    def resolve_pod_address(self, namespace, pod_name):
        if pod_name not in self.pod_ips:
            raise NotFoundError(f"Pod {pod_name} not found in namespace {namespace}")
        return self.pod_ips[pod_name]

    def get_secret_value(self, namespace, secret_name, key):
        try:
            return self.secrets[(secret_name, key)]
        except KeyError:
            raise NotFoundError(f"Secret {secret_name} not found in namespace {namespace}")

    def list_container_names(self, namespace, pod_name):
        if self.containers is not None:
            return self.containers
        cluster = pod_name.rsplit("-", 2)[0]
        return [f"{cluster}-leader", "redis-exporter"]

    def exec_in_pod(self, namespace, pod_name, container, argv, timeout=None):
        self.execs.append((pod_name, container, list(argv)))
        if any(arg in self.exec_failures for arg in argv):
            raise ExecutionError(f"exec failed in {pod_name}")
        return "OK\n", ""


class RecordingExecutor(RemoteCommandExecutor):
    """Executor whose redis calls are scripted per (pod, command)"""

    def __init__(self, runtime, locator):
        super().__init__(runtime, locator)
        self.calls = []
        self.responses = {}

    def script(self, pod_name, command, response):
        self.responses[(pod_name, command)] = response

    def run(self, ctx, ref, *args):
        self.locator.resolve(ref, ctx.log)
        command = " ".join(args)
        self.calls.append((ref.pod_name, command))
        response = self.responses.get((ref.pod_name, command), "OK")
        if isinstance(response, list):
            response = response.pop(0) if len(response) > 1 else response[0]
        if isinstance(response, Exception):
            raise response
        return response


def make_spec(leaders=3, followers=3, password=False, tls=False, name="redis-cluster"):
    return ClusterSpec(
        namespace="redis",
        name=name,
        cluster_size=leaders,
        leader_replicas=leaders,
        follower_replicas=followers,
        password_secret=SecretKeyRef(name="redis-secret", key="password") if password else None,
        tls=TLSConfig() if tls else None,
    )


def pod_ips(name="redis-cluster", leaders=3, followers=3):
    ips = {}
    for i in range(leaders):
        ips[f"{name}-leader-{i}"] = f"10.0.0.{i + 1}"
    for i in range(followers):
        ips[f"{name}-follower-{i}"] = f"10.0.1.{i + 1}"
    return ips


@pytest.fixture
def spec():
    return make_spec()


@pytest.fixture
def ctx(spec):
    return ClusterContext(spec=spec)


@pytest.fixture
def runtime():
    return FakeRuntime(pod_ips(), secrets={("redis-secret", "password"): "s3cret"})


@pytest.fixture
def locator(runtime):
    return NodeLocator(runtime)


@pytest.fixture
def executor(runtime, locator):
    return RecordingExecutor(runtime, locator)


@pytest.fixture
def topology(executor):
    return TopologyReader(executor)


# ============================================
# Data Fixtures
# ============================================

HEALTHY_NODES = (
    "07c37dfeb235213a872192d90877d0cd55635b91 10.0.0.1:6379@16379 myself,master - 0 1426238317239 1 connected 0-5460\n"
    "e7d1eecce10fd6bb5eb35b9f99a514335d9ba9ca 10.0.0.2:6379@16379 master - 0 1426238316232 2 connected 5461-10922\n"
    "67ed2db8d677e59ec4a4cefb06858cf2a1a89fa1 10.0.0.3:6379@16379 master - 0 1426238318243 3 connected 10923-16383\n"
)


@pytest.fixture
def healthy_nodes() -> str:
    """3 leader, 0 follower, 모두 정상"""
    return HEALTHY_NODES


@pytest.fixture
def build_cluster():
    """(ctx, runtime, locator, executor, topology) 를 원하는 크기로 생성"""

    def _build(leaders=3, followers=3, password=False, tls=False, **runtime_kwargs):
        spec = make_spec(leaders=leaders, followers=followers, password=password, tls=tls)
        rt = FakeRuntime(
            pod_ips(leaders=leaders, followers=followers),
            secrets={("redis-secret", "password"): "s3cret"},
            **runtime_kwargs,
        )
        loc = NodeLocator(rt)
        ex = RecordingExecutor(rt, loc)
        return ClusterContext(spec=spec), rt, loc, ex, TopologyReader(ex)

    return _build
