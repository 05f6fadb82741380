"""
Discover use case — one full discovery run.

Detects the platform once, wires the resolver, ensurer and step engine
around a single adapter, then runs every step in order. No step's
outcome cancels a later one.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sysdiscovery.adapters.base import Adapter
from sysdiscovery.core.models.config import DiscoveryConfig
from sysdiscovery.core.models.platform import Distro, PlatformIdentity
from sysdiscovery.core.models.step import ProbeResult, RunReport, StepOutcome, StepResult
from sysdiscovery.core.observability.transcript import Transcript
from sysdiscovery.core.services.discovery import DiscoveryEngine, build_steps
from sysdiscovery.core.services.platform_detect import detect_platform
from sysdiscovery.core.services.tool_install import (
    CapabilityProber,
    PackageResolver,
    ToolEnsurer,
)

logger = logging.getLogger(__name__)


def narrate_platform(platform: PlatformIdentity, transcript: Transcript) -> None:
    """Print the detected OS and distribution."""
    transcript.detail(f"Detected OS: {platform.label}")
    if platform.distro is Distro.UNKNOWN:
        transcript.detail(f"Detected Distribution: {platform.distro.value} (Generic Linux)")
    else:
        transcript.detail(f"Detected Distribution: {platform.distro.value}")
    transcript.blank()


def run_discovery(
    config: DiscoveryConfig | None = None,
    *,
    transcript: Transcript,
    adapter: Adapter | None = None,
    prober: CapabilityProber | None = None,
    system_name: str | None = None,
) -> RunReport:
    """Run every discovery step once, in order.

    Args:
        config: Discovery settings (defaults when None).
        transcript: Where the narration goes.
        adapter: Command adapter (default: real ``CommandAdapter``).
        prober: Capability prober (default: ``shutil.which`` based).
        system_name: Kernel name override, for tests.

    Returns:
        RunReport with one StepResult per step.
    """
    config = config or DiscoveryConfig()
    if adapter is None:
        from sysdiscovery.adapters.shell.command import CommandAdapter
        adapter = CommandAdapter()
    prober = prober or CapabilityProber()

    transcript.banner("Starting System Discovery")

    # ── Detect platform (once) ───────────────────────────────────
    platform = detect_platform(system_name, Path(config.paths.os_release))
    narrate_platform(platform, transcript)

    # ── Wire services ────────────────────────────────────────────
    use_sudo = config.elevation.use_sudo
    timeout = config.commands.timeout
    resolver = PackageResolver(
        platform,
        adapter,
        prober,
        transcript,
        use_sudo=use_sudo,
        allow_bootstrap=config.install.bootstrap,
        timeout=timeout,
    )
    ensurer = ToolEnsurer(
        platform,
        resolver,
        prober,
        transcript,
        install_enabled=config.install.enabled,
    )
    engine = DiscoveryEngine(
        platform,
        adapter,
        prober,
        ensurer,
        transcript,
        use_sudo=use_sudo,
        timeout=timeout,
    )

    # ── Run every step ───────────────────────────────────────────
    report = RunReport(platform=str(platform))
    for step in build_steps(config):
        try:
            result = engine.run_step(step)
        except Exception as e:
            logger.exception("Step %s crashed", step.technique)
            transcript.failure(f"Error: {step.title} failed: {e}")
            result = StepResult(
                technique=step.technique,
                title=step.title,
                probes=[ProbeResult(name=step.title, outcome=StepOutcome.SKIPPED_NO_TOOL)],
                error=str(e),
            )
        report.steps.append(result)

    transcript.banner("System Discovery Completed")
    transcript.detail(
        f"{report.executed} of {len(report.steps)} steps executed, {report.skipped} skipped."
    )
    logger.info(
        "Discovery finished on %s: %d executed, %d skipped, %d install attempts",
        platform, report.executed, report.skipped, ensurer.install_attempts,
    )
    return report
