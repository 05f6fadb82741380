"""
Adapter base — the protocol contract between the step engine and the OS.

The engine only talks to the host through this protocol, never
directly to ``subprocess``. Tests swap in the mock adapter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from sysdiscovery.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    use_sudo: bool = True


class Adapter(ABC):
    """Runs Actions against the host.

    Implementations report every outcome, including a missing program
    or a timeout, as a Receipt and never raise.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'command', 'mock')."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run ``context.action``; failures come back with status 'failed'."""

    def run(self, action: Action, *, use_sudo: bool = True) -> Receipt:
        """Shortcut: wrap ``action`` in a context and execute it."""
        return self.execute(ExecutionContext(action=action, use_sudo=use_sudo))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
