"""Exceptions for redis cluster topology management."""


class RedisClusterError(Exception):
    """Base exception for topology management errors."""

    pass


class ResolutionError(RedisClusterError):
    """Node address could not be resolved (pod missing or not scheduled yet)."""

    pass


class CommandError(RedisClusterError):
    """Redis command failed or returned output that could not be parsed."""

    pass


class ExecutionError(RedisClusterError):
    """Exec session into a pod could not be established or streamed."""

    pass


class NotFoundError(RedisClusterError):
    """Upstream custom resource, secret or pod does not exist."""

    pass
