"""
L5 Orchestration — "ensure tool X is usable".

Two-phase and idempotent: probe, remediate only when absent, re-probe.
The second probe is the answer; the installer's own verdict is only
narrated. A ``False`` result means "degrade gracefully", never abort.
"""

from __future__ import annotations

import logging

from sysdiscovery.core.errors import InstallError
from sysdiscovery.core.models.platform import PlatformIdentity
from sysdiscovery.core.models.tool import Tool
from sysdiscovery.core.observability.transcript import Transcript
from sysdiscovery.core.services.tool_install.detection.probe import CapabilityProber
from sysdiscovery.core.services.tool_install.resolver.method_selection import PackageResolver

logger = logging.getLogger(__name__)


class ToolEnsurer:
    """Make a tool present on PATH, installing it when missing."""

    def __init__(
        self,
        platform: PlatformIdentity,
        resolver: PackageResolver,
        prober: CapabilityProber,
        transcript: Transcript,
        *,
        install_enabled: bool = True,
    ) -> None:
        self.platform = platform
        self._resolver = resolver
        self._prober = prober
        self._transcript = transcript
        self._install_enabled = install_enabled
        self.install_attempts = 0

    def ensure(self, tool_name: str, package_name: str, description: str = "") -> bool:
        """Ensure ``tool_name`` is on PATH, installing ``package_name`` if not.

        Returns:
            Whether the tool is present after the attempt.
        """
        description = description or "Tool"
        if self._prober.exists(tool_name):
            self._transcript.success(f"{description} '{tool_name}' is already installed.")
            return True

        self._transcript.attempt(f"{description} '{tool_name}' is missing.")

        if not self._install_enabled:
            self._transcript.warning(
                f"Automatic installation is disabled; not installing '{package_name}'."
            )
            return self._prober.exists(tool_name)

        self.install_attempts += 1
        try:
            self._resolver.install(package_name, description, tool=tool_name)
        except InstallError as e:
            logger.info("Install of %s failed: %s", package_name, e)
            self._transcript.failure(f"Error: {e}")

        present = self._prober.exists(tool_name)
        if not present:
            self._transcript.failure(
                f"Error: Unable to install '{tool_name}'. Some functionalities may not work."
            )
        return present

    def ensure_tool(self, tool: Tool) -> bool:
        """Ensure a recipe tool, resolving its package for this platform."""
        package = tool.package_for(self.platform)
        if package is None:
            if self._prober.exists(tool.cli):
                return True
            self._transcript.failure(
                f"Error: Unsupported distribution for '{tool.cli}' installation."
            )
            return False
        return self.ensure(tool.cli, package, tool.description)
