"""Adapters — the boundary between discovery logic and the host OS.

Public re-exports for convenient access.
"""

from sysdiscovery.adapters.base import Adapter, ExecutionContext
from sysdiscovery.adapters.mock import MockCommandAdapter
from sysdiscovery.adapters.shell.command import CommandAdapter

__all__ = [
    "Adapter",
    "CommandAdapter",
    "ExecutionContext",
    "MockCommandAdapter",
]
