"""
Step outcome models — what each discovery step ended up doing.

Created fresh per run, never persisted. The transcript is the only
artifact; these models exist so the coordinator (and tests) can reason
about outcomes without parsing text.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from sysdiscovery.core.models.action import Receipt


class StepOutcome(str, Enum):
    """Terminal state of a probe or step."""

    EXECUTED = "Executed"
    EXECUTED_VIA_FALLBACK_TOOL = "ExecutedViaFallbackTool"
    EXECUTED_VIA_FALLBACK_COMMAND = "ExecutedViaFallbackCommand"
    SKIPPED_NO_TOOL = "SkippedNoToolAvailable"
    SKIPPED_UNSUPPORTED = "SkippedUnsupportedPlatform"

    @property
    def executed(self) -> bool:
        return not self.skipped

    @property
    def skipped(self) -> bool:
        return self in (StepOutcome.SKIPPED_NO_TOOL, StepOutcome.SKIPPED_UNSUPPORTED)


# Worst-last ordering used to fold probe outcomes into a step outcome.
_SEVERITY = [
    StepOutcome.EXECUTED,
    StepOutcome.EXECUTED_VIA_FALLBACK_TOOL,
    StepOutcome.EXECUTED_VIA_FALLBACK_COMMAND,
    StepOutcome.SKIPPED_NO_TOOL,
    StepOutcome.SKIPPED_UNSUPPORTED,
]


class ProbeResult(BaseModel):
    """Outcome of walking one candidate chain."""

    name: str
    outcome: StepOutcome
    candidate: str | None = None     # label of the candidate that ran
    attempted: list[str] = Field(default_factory=list)
    receipts: list[Receipt] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class StepResult(BaseModel):
    """Outcome of one discovery step (one technique category)."""

    technique: str
    title: str
    probes: list[ProbeResult] = Field(default_factory=list)
    error: str | None = None

    @property
    def outcome(self) -> StepOutcome:
        """The worst outcome among the step's probes."""
        if not self.probes:
            return StepOutcome.SKIPPED_UNSUPPORTED
        return max(
            (p.outcome for p in self.probes),
            key=_SEVERITY.index,
        )


class RunReport(BaseModel):
    """Ordered per-step outcomes of one discovery run."""

    platform: str = ""
    steps: list[StepResult] = Field(default_factory=list)

    @property
    def executed(self) -> int:
        return sum(1 for s in self.steps if s.outcome.executed)

    @property
    def skipped(self) -> int:
        return sum(1 for s in self.steps if s.outcome.skipped)

    @property
    def all_executed(self) -> bool:
        return self.skipped == 0
