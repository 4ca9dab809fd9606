"""Utility functions and helpers."""

from easel.utils.config import load_env, get_config, get_openai_api_key, ensure_api_key
from easel.utils.errors import (
    EaselError,
    GraphValidationError,
    NodeNotFoundError,
    NodeLockedError,
    ContentLimitError,
    InvalidNodeTypeError,
    ExecutorConfigurationError,
    ExecutionCancelledError,
    ServiceError,
    ServiceNotConfiguredError,
)

__all__ = [
    "load_env",
    "get_config",
    "get_openai_api_key",
    "ensure_api_key",
    "EaselError",
    "GraphValidationError",
    "NodeNotFoundError",
    "NodeLockedError",
    "ContentLimitError",
    "InvalidNodeTypeError",
    "ExecutorConfigurationError",
    "ExecutionCancelledError",
    "ServiceError",
    "ServiceNotConfiguredError",
]
