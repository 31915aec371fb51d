"""Transport layer: executor interface and the httpx reference executor."""

from yokozuna.transport.base import Executor
from yokozuna.transport.exceptions import (
    ConfigurationError,
    ResponseDecodeError,
    TransportError,
    YokozunaError,
)
from yokozuna.transport.http import HttpExecutor

__all__ = [
    "ConfigurationError",
    "Executor",
    "HttpExecutor",
    "ResponseDecodeError",
    "TransportError",
    "YokozunaError",
]
