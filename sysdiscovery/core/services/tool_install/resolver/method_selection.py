"""
L2 Resolver — Package manager selection and installation.

Decides which package manager serves this platform, bootstraps it
when it is self-hosting and missing, runs the install, and re-probes.

Dispatch is keyed on OS family first, then (Linux) on distro:

    Linux / RedHat family   yum, else dnf
    Linux / Debian family   apt-get update && apt-get install
    Linux / other distro    UnsupportedDistro, no command run
    Darwin                  brew (bootstrapped if absent)
    Windows                 choco (bootstrapped if absent)
    Unknown                 UnsupportedPlatform
"""

from __future__ import annotations

import logging

from sysdiscovery.adapters.base import Adapter
from sysdiscovery.core.errors import (
    BootstrapFailed,
    ToolStillMissingAfterInstall,
    UnsupportedDistro,
    UnsupportedManager,
    UnsupportedPlatform,
)
from sysdiscovery.core.models.action import Action
from sysdiscovery.core.models.platform import OSFamily, PlatformIdentity
from sysdiscovery.core.observability.transcript import Transcript
from sysdiscovery.core.services.tool_install.data.package_managers import (
    FAMILY_MANAGERS,
    LINUX_MANAGERS,
    PACKAGE_MANAGERS,
    PackageManager,
)
from sysdiscovery.core.services.tool_install.detection.probe import CapabilityProber
from sysdiscovery.core.services.tool_install.execution.bootstrap import bootstrap_manager

logger = logging.getLogger(__name__)


def build_install_actions(
    manager: PackageManager,
    package: str,
    timeout: int | None = None,
) -> list[Action]:
    """Build the command sequence that installs ``package``.

    Args:
        manager: The resolved package manager.
        package: Distribution package name.
        timeout: Per-command timeout in seconds (None = no limit).

    Returns:
        Actions to run in order; each must succeed before the next.
    """
    actions: list[Action] = []
    if manager.refresh:
        actions.append(Action(
            id=f"{manager.id}-refresh",
            name=f"Refresh {manager.display_name} package index",
            argv=list(manager.refresh),
            elevate=manager.needs_sudo,
            timeout=timeout,
        ))
    actions.append(Action(
        id=f"{manager.id}-install-{package}",
        name=f"Install {package}",
        argv=list(manager.install) + [package],
        elevate=manager.needs_sudo,
        timeout=timeout,
    ))
    return actions


def _format_alternatives(managers: list[PackageManager]) -> str:
    names = [f"'{m.cli}'" for m in managers]
    if len(names) == 1:
        return f"{names[0]} package manager is not available."
    return f"Neither {' nor '.join(names)} package managers are available."


class PackageResolver:
    """Install packages through the platform's package manager.

    ``install`` either completes (the tool is on PATH afterwards) or
    raises an ``InstallError`` subclass. It never decides success from
    an installer's exit code: only the post-install probe counts.
    """

    def __init__(
        self,
        platform: PlatformIdentity,
        adapter: Adapter,
        prober: CapabilityProber,
        transcript: Transcript,
        *,
        use_sudo: bool = True,
        allow_bootstrap: bool = True,
        timeout: int | None = None,
    ) -> None:
        self.platform = platform
        self._adapter = adapter
        self._prober = prober
        self._transcript = transcript
        self._use_sudo = use_sudo
        self._allow_bootstrap = allow_bootstrap
        self._timeout = timeout

    # ── Selection ───────────────────────────────────────────────

    def candidate_managers(self) -> list[PackageManager]:
        """Managers that could serve this platform, in priority order.

        Raises:
            UnsupportedPlatform: Unknown OS family.
            UnsupportedDistro: Linux distro with no manager entry.
        """
        family = self.platform.family
        if family is OSFamily.LINUX:
            ids = LINUX_MANAGERS.get(self.platform.distro)
            if not ids:
                raise UnsupportedDistro(
                    "Unsupported Linux distribution for automatic installation."
                )
            return [PACKAGE_MANAGERS[i] for i in ids]

        manager_id = FAMILY_MANAGERS.get(family)
        if manager_id is None:
            raise UnsupportedPlatform(
                "Unsupported OS for automatic package installation."
            )
        return [PACKAGE_MANAGERS[manager_id]]

    def select_manager(self) -> PackageManager:
        """Pick the first candidate manager present on PATH.

        Self-hosting managers are bootstrapped when absent (and
        bootstrap is allowed).

        Raises:
            UnsupportedPlatform, UnsupportedDistro, UnsupportedManager,
            BootstrapFailed.
        """
        candidates = self.candidate_managers()
        for manager in candidates:
            if self._prober.exists(manager.cli):
                logger.debug("Using package manager %s", manager.id)
                return manager

        bootstrappable = [m for m in candidates if m.bootstrap]
        if not bootstrappable:
            raise UnsupportedManager(_format_alternatives(candidates))

        manager = bootstrappable[0]
        if not self._allow_bootstrap:
            raise BootstrapFailed(
                f"{manager.display_name} not found and bootstrap is disabled."
            )
        return self._bootstrap(manager)

    def _bootstrap(self, manager: PackageManager) -> PackageManager:
        self._transcript.attempt(
            f"{manager.display_name} not found. "
            f"Attempting to install {manager.display_name}..."
        )
        receipt = bootstrap_manager(
            manager,
            self._adapter,
            use_sudo=self._use_sudo,
            timeout=self._timeout,
        )
        self._transcript.output(receipt.output)
        if receipt.failed:
            self._transcript.output(receipt.stderr)
        if not self._prober.exists(manager.cli):
            raise BootstrapFailed(f"{manager.display_name} installation failed.")
        self._transcript.success(f"{manager.display_name} installed.")
        return manager

    # ── Installation ────────────────────────────────────────────

    def install(self, package: str, description: str = "", *, tool: str | None = None) -> None:
        """Install ``package`` and verify that ``tool`` is now on PATH.

        Args:
            package: Distribution package name.
            description: Human-readable purpose, for the transcript.
            tool: Executable expected after install (default: ``package``).

        Raises:
            InstallError: any subclass; see ``select_manager``, plus
                ToolStillMissingAfterInstall.
        """
        label = f" ({description})" if description else ""
        self._transcript.attempt(f"Attempting to install '{package}'{label}...")

        manager = self.select_manager()
        for action in build_install_actions(manager, package, self._timeout):
            receipt = self._adapter.run(action, use_sudo=self._use_sudo)
            self._transcript.output(receipt.output)
            if receipt.failed:
                logger.warning(
                    "%s failed (exit %s): %s", action.display, receipt.exit_code, receipt.error,
                )
                self._transcript.warning(f"'{action.display}' did not complete successfully.")
                break

        check = tool or package
        if not self._prober.exists(check):
            raise ToolStillMissingAfterInstall(f"Failed to install '{package}'.", package=package)
        self._transcript.success(f"Successfully installed '{package}'.")
