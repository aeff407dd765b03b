"""
Application configuration settings
"""
import os


class Settings:
    """Application settings"""

    # App
    APP_TITLE: str = "Redis Cluster Topology Manager"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Command server
    CMD_SERVER_HOST: str = os.environ.get("CMD_SERVER_HOST", "0.0.0.0")
    CMD_SERVER_PORT: int = int(os.environ.get("CMD_SERVER_PORT", "8090"))

    # Redis data plane
    REDIS_PORT: int = int(os.environ.get("REDIS_PORT", "6379"))
    REDIS_COMMAND_TIMEOUT: float = float(os.environ.get("REDIS_COMMAND_TIMEOUT", "10"))
    EXEC_TIMEOUT: float = float(os.environ.get("EXEC_TIMEOUT", "300"))

    # TLS 인증서 (operator / redis 컨테이너 공통 마운트 경로)
    TLS_CA_PATH: str = os.environ.get("TLS_CA_PATH", "/tls/ca.crt")
    TLS_CERT_PATH: str = os.environ.get("TLS_CERT_PATH", "/tls/tls.crt")
    TLS_KEY_PATH: str = os.environ.get("TLS_KEY_PATH", "/tls/tls.key")

    # RedisCluster CRD
    CRD_GROUP: str = os.environ.get("CRD_GROUP", "redis.redis.opstreelabs.in")
    CRD_VERSION: str = os.environ.get("CRD_VERSION", "v1beta1")
    CRD_PLURAL: str = os.environ.get("CRD_PLURAL", "redisclusters")


settings = Settings()
