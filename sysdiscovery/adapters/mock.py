"""
Mock adapter — scripted test double for command execution.

Returns success for every command unless a response was registered
for its program name (``argv[0]``) or its full command line.
"""

from __future__ import annotations

from sysdiscovery.adapters.base import Adapter, ExecutionContext
from sysdiscovery.core.models.action import Receipt


class MockCommandAdapter(Adapter):
    """Scripted stand-in for ``CommandAdapter``.

    Responses are keyed by full command line (``"ip addr"``) first,
    then by program name (``"ip"``). An optional ``on_execute`` hook
    lets tests simulate side effects such as a package landing on PATH.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        default_output: str = "[mock] executed",
        on_execute=None,
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._call_log: list[ExecutionContext] = []
        self._on_execute = on_execute

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    @property
    def commands(self) -> list[str]:
        """Command lines executed so far, in order."""
        return [ctx.action.display for ctx in self._call_log]

    def set_response(self, key: str, receipt: Receipt) -> None:
        """Set a custom response for a command line or program name."""
        self._responses[key] = receipt

    def set_failure(self, key: str, error: str = "Mock failure", exit_code: int = 1) -> None:
        """Configure a command line or program name to fail."""
        self._responses[key] = Receipt.failure(
            self._name, key, error, exit_code=exit_code, stderr=error,
        )

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)
        action = context.action
        if self._on_execute is not None:
            self._on_execute(action)

        for key in (action.display, action.argv[0] if action.argv else ""):
            if key in self._responses:
                return self._responses[key]

        return Receipt.success(
            self._name,
            action.id,
            self._default_output,
            argv=list(action.argv),
            elevated=action.elevate and context.use_sudo,
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
