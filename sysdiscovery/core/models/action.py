"""
Command contract — what the engine asks for and what comes back.

An ``Action`` is one program invocation; a ``Receipt`` is its outcome.
Adapters turn the first into the second and never raise: a missing
program, a timeout and a non-zero exit all come back as receipts.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

ReceiptStatus = Literal["ok", "skipped", "failed"]


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


class Action(BaseModel):
    """One program invocation, run without a shell."""

    id: str
    name: str = ""
    argv: list[str] = Field(default_factory=list)
    elevate: bool = False           # run through sudo when available
    timeout: int | None = None      # seconds; None waits forever
    env: dict[str, str] = Field(default_factory=dict)   # added to the inherited environment

    @property
    def program(self) -> str:
        return self.argv[0] if self.argv else ""

    @property
    def display(self) -> str:
        """Command line as shown in the transcript (never with sudo)."""
        return " ".join(self.argv)


class Receipt(BaseModel):
    """Outcome of one Action.

    ``exit_code`` is None when the program never started (not found,
    timed out). ``argv`` is what actually ran, ``sudo`` prefix included.
    """

    adapter: str
    action_id: str
    status: ReceiptStatus = "ok"

    argv: list[str] = Field(default_factory=list)
    elevated: bool = False
    exit_code: int | None = None
    output: str = ""                # captured stdout
    stderr: str = ""
    error: str | None = None

    started_at: str = Field(default_factory=_timestamp)
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **fields: Any) -> Receipt:
        fields.setdefault("exit_code", 0)
        return cls(adapter=adapter, action_id=action_id, output=output, **fields)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **fields: Any) -> Receipt:
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="failed",
            error=error,
            **fields,
        )

    @classmethod
    def skip(cls, adapter: str, action_id: str, reason: str = "") -> Receipt:
        """Nothing was run; ``reason`` says why."""
        return cls(adapter=adapter, action_id=action_id, status="skipped", output=reason)
