"""
Tool model — an executable capability plus the package that provides it.

The command name and the distribution package name are separate
fields: ``ifconfig`` ships in ``net-tools``, ``getent`` in
``libc-bin`` or ``glibc-common`` depending on the distro.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sysdiscovery.core.models.platform import Distro, PlatformIdentity


class Tool(BaseModel):
    """A probe-able, installable command-line tool."""

    model_config = ConfigDict(frozen=True)

    cli: str                        # executable name checked on PATH
    package: str | None = None      # default package name (None = cli)
    label: str = ""
    # Per-distro package names. When set, distros missing from the map
    # have no known package and the tool is never installed there.
    distro_packages: dict[Distro, str] = Field(default_factory=dict)

    @property
    def description(self) -> str:
        return self.label or f"'{self.cli}' command tool"

    def package_for(self, platform: PlatformIdentity) -> str | None:
        """Return the package providing this tool on ``platform``."""
        if self.distro_packages:
            return self.distro_packages.get(platform.distro)
        return self.package or self.cli
