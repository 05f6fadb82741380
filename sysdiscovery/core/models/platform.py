"""
Platform identity — which OS family and Linux distribution we run on.

Computed exactly once per run by the platform detector and passed
explicitly to every component that branches on the host.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class OSFamily(str, Enum):
    """Operating-system family."""

    LINUX = "Linux"
    DARWIN = "Darwin"
    WINDOWS = "Windows"
    UNKNOWN = "Unknown"


class Distro(str, Enum):
    """Linux distribution. Only meaningful when the family is Linux."""

    AMAZON_LINUX = "AmazonLinux"
    UBUNTU = "Ubuntu"
    FEDORA = "Fedora"
    CENTOS = "CentOS"
    DEBIAN = "Debian"
    RHEL = "RedHatEnterpriseServer"
    UNKNOWN = "Unknown"


# Distro groups used by package naming and manager selection.
DEBIAN_FAMILY = frozenset({Distro.UBUNTU, Distro.DEBIAN})
REDHAT_FAMILY = frozenset({
    Distro.AMAZON_LINUX, Distro.CENTOS, Distro.FEDORA, Distro.RHEL,
})


class PlatformIdentity(BaseModel):
    """Immutable ``(family, distro)`` pair.

    ``distro`` is ``Unknown`` by convention for non-Linux families.
    ``Unknown`` values are legitimate: they only disable
    platform-specific branches.
    """

    model_config = ConfigDict(frozen=True)

    family: OSFamily = OSFamily.UNKNOWN
    distro: Distro = Distro.UNKNOWN

    @property
    def label(self) -> str:
        """Display name used in the transcript."""
        return "Mac" if self.family is OSFamily.DARWIN else self.family.value

    def __str__(self) -> str:
        return f"{self.family.value}/{self.distro.value}"
