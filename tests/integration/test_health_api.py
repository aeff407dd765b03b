"""
Integration tests for health check API
"""
import pytest
from unittest.mock import patch


class TestHealthAPI:
    """Tests for /api/health endpoints"""

    def test_health_check(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "redis-cluster-topology"}

    def test_k8s_health_connected(self, client, mock_k8s_clients, monkeypatch):
        """로컬 kubeconfig 로 API 서버에 닿는 경우"""
        monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)

        response = client.get("/api/k8s/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "connected"
        assert data["environment"] == "local"
        mock_k8s_clients["core_v1"].list_namespace.assert_called_once_with(limit=1)

    def test_k8s_health_in_cluster(self, client, mock_k8s_clients, monkeypatch):
        monkeypatch.setenv("KUBERNETES_SERVICE_HOST", "10.43.0.1")
        monkeypatch.setenv("KUBERNETES_SERVICE_PORT", "443")

        data = client.get("/api/k8s/health").json()

        assert data["environment"] == "in-cluster"
        assert data["kubernetes_host"] == "10.43.0.1"

    def test_k8s_health_disconnected(self, client):
        with patch("routers.health.get_k8s_clients") as mock:
            mock.side_effect = RuntimeError("Unable to load Kubernetes configuration")

            response = client.get("/api/k8s/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "disconnected"
        assert "Kubernetes configuration" in data["error"]

    def test_k8s_health_api_error(self, client, mock_k8s_clients):
        mock_k8s_clients["core_v1"].list_namespace.side_effect = Exception("Unauthorized")

        data = client.get("/api/k8s/health").json()

        assert data["status"] == "disconnected"
        assert data["error"] == "Unauthorized"


@pytest.mark.asyncio
class TestHealthAPIAsync:
    """Async tests for health API"""

    async def test_health_check_async(self, async_client):
        response = await async_client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
