"""
Error taxonomy for discovery runs.

Nothing here ever escapes a discovery step: the step engine catches
every ``DiscoveryError`` and turns it into a red transcript line.
"""

from __future__ import annotations


class DiscoveryError(Exception):
    """Base class for every recoverable discovery failure."""


# ── Installation ────────────────────────────────────────────────


class InstallError(DiscoveryError):
    """A package could not be installed."""

    def __init__(self, message: str, package: str = "") -> None:
        super().__init__(message)
        self.package = package


class UnsupportedPlatform(InstallError):
    """No package manager is known for this OS family."""


class UnsupportedDistro(InstallError):
    """Linux distribution without a known package manager."""


class UnsupportedManager(InstallError):
    """The distro's package manager is not on PATH."""


class BootstrapFailed(InstallError):
    """The package manager was absent and installing it did not help."""


class ToolStillMissingAfterInstall(InstallError):
    """The installer ran but the tool is still not resolvable on PATH."""


# ── Discovery steps ─────────────────────────────────────────────


class MissingDataFile(DiscoveryError):
    """A file a candidate reads (e.g. /etc/login.defs) does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"'{path}' not found.")
        self.path = path


class CommandNonZeroExit(DiscoveryError):
    """A command ran but exited with a non-zero status."""

    def __init__(self, command: str, exit_code: int | None) -> None:
        super().__init__(f"'{command}' exited with code {exit_code}")
        self.command = command
        self.exit_code = exit_code
