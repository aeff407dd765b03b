"""
Unit tests for utility functions
"""
import logging
import pytest
from unittest.mock import patch

from kubernetes import config

import utils.k8s_client as k8s_client
from utils.log import cluster_logger


@pytest.fixture(autouse=True)
def reset_config_cache():
    k8s_client._config_loaded = False
    k8s_client._is_in_cluster = None
    yield
    k8s_client._config_loaded = False
    k8s_client._is_in_cluster = None


class TestLoadK8sConfig:
    """Tests for load_k8s_config"""

    def test_local_kubeconfig(self, monkeypatch):
        monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
        monkeypatch.delenv("KUBE_CONTEXT", raising=False)
        with patch.object(config, "load_kube_config") as kube, \
                patch.object(config, "load_incluster_config") as incluster:
            assert k8s_client.load_k8s_config() is False
        kube.assert_called_once()
        incluster.assert_not_called()

    def test_in_cluster(self, monkeypatch):
        monkeypatch.setenv("KUBERNETES_SERVICE_HOST", "10.43.0.1")
        with patch.object(config, "load_incluster_config") as incluster, \
                patch.object(config, "load_kube_config") as kube:
            assert k8s_client.load_k8s_config() is True
        incluster.assert_called_once()
        kube.assert_not_called()

    def test_in_cluster_falls_back(self, monkeypatch):
        monkeypatch.setenv("KUBERNETES_SERVICE_HOST", "10.43.0.1")
        with patch.object(config, "load_incluster_config", side_effect=config.ConfigException("no token")), \
                patch.object(config, "load_kube_config") as kube:
            assert k8s_client.load_k8s_config() is False
        kube.assert_called_once()

    def test_kube_context(self, monkeypatch):
        monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
        monkeypatch.setenv("KUBE_CONTEXT", "staging")
        with patch.object(config, "load_kube_config") as kube:
            k8s_client.load_k8s_config()
        kube.assert_called_once_with(context="staging")

    def test_cached(self, monkeypatch):
        monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
        with patch.object(config, "load_kube_config") as kube:
            k8s_client.load_k8s_config()
            k8s_client.load_k8s_config()
        kube.assert_called_once()

    def test_no_config(self, monkeypatch):
        monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
        with patch.object(config, "load_kube_config", side_effect=config.ConfigException("missing")):
            with pytest.raises(RuntimeError, match="kube/config"):
                k8s_client.load_k8s_config()


class TestEnvironmentInfo:
    """Tests for get_environment_info"""

    def test_local(self, monkeypatch):
        monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
        assert k8s_client.get_environment_info() == {
            "environment": "local",
            "config_source": "~/.kube/config",
        }

    def test_in_cluster(self, monkeypatch):
        monkeypatch.setenv("KUBERNETES_SERVICE_HOST", "10.43.0.1")
        monkeypatch.setenv("KUBERNETES_SERVICE_PORT", "443")
        info = k8s_client.get_environment_info()
        assert info["environment"] == "in-cluster"
        assert info["kubernetes_host"] == "10.43.0.1"
        assert info["kubernetes_port"] == "443"


class TestClusterLogger:
    """Tests for cluster_logger"""

    def test_prefix_and_extra(self, caplog):
        log = cluster_logger("redis", "cache")
        with caplog.at_level(logging.INFO, logger="topology.cluster"):
            log.info("Meet executed", extra={"peer": "cache-leader-1"})

        record = caplog.records[-1]
        assert record.getMessage() == "[redis/cache] Meet executed"
        assert record.namespace == "redis"
        assert record.cluster == "cache"
        assert record.peer == "cache-leader-1"

    def test_custom_base(self):
        assert cluster_logger("redis", "cache", base="topology.test").logger.name == "topology.test"
