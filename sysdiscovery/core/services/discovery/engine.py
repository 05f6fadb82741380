"""
Discovery step engine — walks candidate chains.

Each probe is a small state machine:

    NotStarted → TryingCandidate(0) → TryingCandidate(1) → … →
        Succeeded | SkippedNoToolAvailable
    NotStarted → SkippedUnsupportedPlatform   (no chain for this family)

Candidates are attempted strictly in order. The first one whose tool is
present (or made present by the ensurer) runs and ends the probe. A
candidate marked ``fallback_on_failure`` hands over to the next one when
its command exits non-zero. Every error stops at the step boundary.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from sysdiscovery.adapters.base import Adapter
from sysdiscovery.core.errors import CommandNonZeroExit, DiscoveryError, MissingDataFile
from sysdiscovery.core.models.action import Action, Receipt
from sysdiscovery.core.models.platform import OSFamily, PlatformIdentity
from sysdiscovery.core.models.step import ProbeResult, StepOutcome, StepResult
from sysdiscovery.core.models.tool import Tool
from sysdiscovery.core.observability.transcript import Transcript
from sysdiscovery.core.services.tool_install.detection.probe import CapabilityProber
from sysdiscovery.core.services.tool_install.orchestration.ensure import ToolEnsurer

logger = logging.getLogger(__name__)

# A transcript line: (kind, message). Kinds match Transcript methods.
Notice = tuple[str, str]


@dataclass(frozen=True)
class Candidate:
    """One command a probe may run."""

    argv: tuple[str, ...]
    tool: Tool | None = None            # presence gate; None = always runnable
    install: bool = False               # install the tool when missing
    elevate: bool = False
    requires_file: str | None = None
    intro: str | None = None            # replaces "Executing '...':"
    fallback_on_failure: bool = False   # non-zero exit → next candidate
    fallback_notice: str | None = None
    failure_hint: str | None = None     # warning on non-zero exit

    @property
    def display(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class Probe:
    """A named fact with a candidate chain per OS family."""

    name: str
    chains: dict[OSFamily, tuple[Candidate, ...]]
    # Always-run commands preceding the chain (e.g. uname -a).
    preamble: dict[OSFamily, tuple[Candidate, ...]] = field(default_factory=dict)
    # Lines emitted when a chain is exhausted. A missing family gets a
    # generic error; an empty tuple prints nothing.
    exhausted: dict[OSFamily, tuple[Notice, ...]] = field(default_factory=dict)

    def chain_for(self, family: OSFamily) -> tuple[Candidate, ...] | None:
        return self.chains.get(family)


@dataclass(frozen=True)
class DiscoveryStep:
    """One technique category."""

    technique: str
    title: str
    probes: tuple[Probe, ...]


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


class DiscoveryEngine:
    """Run discovery steps against one platform."""

    def __init__(
        self,
        platform: PlatformIdentity,
        adapter: Adapter,
        prober: CapabilityProber,
        ensurer: ToolEnsurer,
        transcript: Transcript,
        *,
        use_sudo: bool = True,
        timeout: int | None = None,
    ) -> None:
        self.platform = platform
        self._adapter = adapter
        self._prober = prober
        self._ensurer = ensurer
        self._transcript = transcript
        self._use_sudo = use_sudo
        self._timeout = timeout

    # ── Steps ───────────────────────────────────────────────────

    def run_step(self, step: DiscoveryStep) -> StepResult:
        """Run every probe of ``step``. Never raises."""
        self._transcript.heading(step.title, step.technique)
        result = StepResult(technique=step.technique, title=step.title)

        for probe in step.probes:
            try:
                result.probes.append(self.run_probe(probe))
            except Exception as e:
                logger.exception("Probe %r crashed", probe.name)
                self._transcript.failure(f"Error: {probe.name} failed: {e}")
                result.probes.append(ProbeResult(
                    name=probe.name,
                    outcome=StepOutcome.SKIPPED_NO_TOOL,
                    errors=[str(e)],
                ))

        self._transcript.blank()
        logger.info("%s (%s) → %s", step.title, step.technique, result.outcome.value)
        return result

    # ── Probes ──────────────────────────────────────────────────

    def run_probe(self, probe: Probe) -> ProbeResult:
        """Walk ``probe``'s chain for this platform."""
        family = self.platform.family
        chain = probe.chain_for(family)
        if chain is None:
            self._transcript.failure(f"Unsupported OS for {probe.name}.")
            return ProbeResult(name=probe.name, outcome=StepOutcome.SKIPPED_UNSUPPORTED)

        result = ProbeResult(name=probe.name, outcome=StepOutcome.SKIPPED_NO_TOOL)
        slug = _slug(probe.name)

        for index, candidate in enumerate(probe.preamble.get(family, ())):
            result.receipts.append(self._execute(candidate, f"{slug}-pre{index}"))

        ran: set[tuple[str, ...]] = set()
        command_failed = False

        for index, candidate in enumerate(chain):
            if candidate.argv in ran:
                logger.debug("Skipping %r: already ran in this probe", candidate.display)
                continue
            result.attempted.append(candidate.display)

            try:
                available, installed = self._make_available(candidate)
            except DiscoveryError as e:
                result.errors.append(str(e))
                self._transcript.failure(f"Error: {e}")
                continue
            if not available:
                continue

            receipt = self._execute(candidate, f"{slug}-{index}", after_install=installed)
            result.receipts.append(receipt)
            ran.add(candidate.argv)

            if receipt.failed:
                error = self._describe_failure(candidate, receipt)
                result.errors.append(str(error))
                if candidate.fallback_on_failure:
                    self._transcript.warning(
                        candidate.fallback_notice
                        or f"'{candidate.display}' failed. Trying the next command."
                    )
                    command_failed = True
                    continue
                if candidate.failure_hint:
                    self._transcript.warning(candidate.failure_hint)
                else:
                    self._transcript.failure(f"Error: {error}")

            if command_failed:
                result.outcome = StepOutcome.EXECUTED_VIA_FALLBACK_COMMAND
            elif index == 0:
                result.outcome = StepOutcome.EXECUTED
            else:
                result.outcome = StepOutcome.EXECUTED_VIA_FALLBACK_TOOL
            result.candidate = candidate.display
            return result

        notices = probe.exhausted.get(family)
        if notices is None:
            notices = (("failure", f"Error: No suitable command found for {probe.name}."),)
        for kind, message in notices:
            self._transcript.emit(kind, message)
        return result

    # ── Candidates ──────────────────────────────────────────────

    def _make_available(self, candidate: Candidate) -> tuple[bool, bool]:
        """Return ``(available, installed_now)`` for a candidate.

        Raises:
            MissingDataFile: The candidate reads a file that is absent.
        """
        if candidate.requires_file and not Path(candidate.requires_file).is_file():
            raise MissingDataFile(candidate.requires_file)

        tool = candidate.tool
        if tool is None or self._prober.exists(tool.cli):
            return True, False

        if not candidate.install:
            logger.debug("'%s' not found", tool.cli)
            return False, False

        return self._ensurer.ensure_tool(tool), True

    def _execute(
        self,
        candidate: Candidate,
        action_id: str,
        *,
        after_install: bool = False,
    ) -> Receipt:
        if candidate.intro:
            self._transcript.command_intro(candidate.intro)
        else:
            self._transcript.command(candidate.display, after_install=after_install)

        action = Action(
            id=action_id,
            name=candidate.display,
            argv=list(candidate.argv),
            elevate=candidate.elevate,
            timeout=self._timeout,
        )
        receipt = self._adapter.run(action, use_sudo=self._use_sudo)
        self._transcript.output(receipt.output)
        if receipt.failed:
            self._transcript.output(receipt.stderr)
        return receipt

    @staticmethod
    def _describe_failure(candidate: Candidate, receipt: Receipt) -> DiscoveryError:
        if receipt.exit_code is None:
            return DiscoveryError(receipt.error or f"'{candidate.display}' could not run")
        return CommandNonZeroExit(candidate.display, receipt.exit_code)
