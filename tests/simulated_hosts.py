"""
Simulated hosts — fake PATH and package installs for discovery tests.
"""

from __future__ import annotations

from sysdiscovery.adapters.mock import MockCommandAdapter
from sysdiscovery.core.models.action import Action
from sysdiscovery.core.models.platform import Distro, OSFamily, PlatformIdentity
from sysdiscovery.core.observability.transcript import MemoryTranscript
from sysdiscovery.core.services.discovery import DiscoveryEngine
from sysdiscovery.core.services.tool_install import (
    CapabilityProber,
    PackageResolver,
    ToolEnsurer,
)


class FakeHost:
    """A pretend machine: which tools are on PATH, what installs provide.

    ``packages`` maps a package name to the executables it puts on PATH
    when a ``<manager> install -y <package>`` command runs.
    ``bootstraps`` lists manager executables that appear when their
    bootstrap installer runs.
    """

    def __init__(
        self,
        tools: set[str] | tuple[str, ...] = (),
        packages: dict[str, tuple[str, ...]] | None = None,
        bootstraps: tuple[str, ...] = (),
    ) -> None:
        self.tools = set(tools)
        self.packages = packages or {}
        self.bootstraps = bootstraps

    def which(self, name: str) -> str | None:
        return f"/usr/bin/{name}" if name in self.tools else None

    def on_execute(self, action: Action) -> None:
        argv = action.argv
        if action.id.startswith("bootstrap-"):
            self.tools.update(self.bootstraps)
        elif len(argv) >= 3 and argv[1] == "install":
            self.tools.update(self.packages.get(argv[-1], ()))

    def adapter(self) -> MockCommandAdapter:
        return MockCommandAdapter(on_execute=self.on_execute)

    def prober(self) -> CapabilityProber:
        return CapabilityProber(which=self.which)


class Rig:
    """Fully wired resolver + ensurer + engine around a FakeHost."""

    def __init__(
        self,
        platform: PlatformIdentity,
        host: FakeHost,
        *,
        install_enabled: bool = True,
        allow_bootstrap: bool = True,
    ) -> None:
        self.platform = platform
        self.host = host
        self.adapter = host.adapter()
        self.prober = host.prober()
        self.transcript = MemoryTranscript()
        self.resolver = PackageResolver(
            platform,
            self.adapter,
            self.prober,
            self.transcript,
            allow_bootstrap=allow_bootstrap,
        )
        self.ensurer = ToolEnsurer(
            platform,
            self.resolver,
            self.prober,
            self.transcript,
            install_enabled=install_enabled,
        )
        self.engine = DiscoveryEngine(
            platform,
            self.adapter,
            self.prober,
            self.ensurer,
            self.transcript,
        )


UBUNTU = PlatformIdentity(family=OSFamily.LINUX, distro=Distro.UBUNTU)
FEDORA = PlatformIdentity(family=OSFamily.LINUX, distro=Distro.FEDORA)
GENERIC_LINUX = PlatformIdentity(family=OSFamily.LINUX)
MACOS = PlatformIdentity(family=OSFamily.DARWIN)
WINDOWS = PlatformIdentity(family=OSFamily.WINDOWS)
UNKNOWN = PlatformIdentity()


