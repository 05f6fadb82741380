"""
L0 Data — Package managers and the platform dispatch table.

Pure data. Adding a distro or a manager is an edit here, not in the
resolver: the resolver only walks these tables.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sysdiscovery.core.models.platform import Distro, OSFamily


class PackageManager(BaseModel):
    """A package manager client and how to drive it."""

    model_config = ConfigDict(frozen=True)

    id: str
    cli: str                                    # executable probed on PATH
    label: str = ""
    install: tuple[str, ...]                    # package name is appended
    refresh: tuple[str, ...] | None = None      # index refresh before install
    needs_sudo: bool = True
    # Self-hosting managers install themselves via a trusted script.
    bootstrap: tuple[str, ...] | None = None
    bootstrap_paths: tuple[str, ...] = Field(default_factory=tuple)
    bootstrap_env: dict[str, str] = Field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.label or self.cli


_HOMEBREW_INSTALLER = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
_CHOCOLATEY_INSTALLER = "https://chocolatey.org/install.ps1"


PACKAGE_MANAGERS: dict[str, PackageManager] = {
    "yum": PackageManager(
        id="yum",
        cli="yum",
        install=("yum", "install", "-y"),
    ),
    "dnf": PackageManager(
        id="dnf",
        cli="dnf",
        install=("dnf", "install", "-y"),
    ),
    "apt": PackageManager(
        id="apt",
        cli="apt-get",
        refresh=("apt-get", "update"),
        install=("apt-get", "install", "-y"),
    ),
    "brew": PackageManager(
        id="brew",
        cli="brew",
        label="Homebrew",
        install=("brew", "install"),
        needs_sudo=False,
        bootstrap=(
            "/bin/bash", "-c",
            f'/bin/bash -c "$(curl -fsSL {_HOMEBREW_INSTALLER})"',
        ),
        bootstrap_paths=("/opt/homebrew/bin", "/usr/local/bin"),
        # The installer otherwise waits for RETURN on a terminal it cannot see.
        bootstrap_env={"NONINTERACTIVE": "1"},
    ),
    "choco": PackageManager(
        id="choco",
        cli="choco",
        label="Chocolatey",
        install=("choco", "install", "-y"),
        needs_sudo=False,
        bootstrap=(
            "powershell.exe", "-NoProfile", "-InputFormat", "None",
            "-ExecutionPolicy", "Bypass", "-Command",
            "Set-ExecutionPolicy Bypass -Scope Process -Force; "
            "[System.Net.ServicePointManager]::SecurityProtocol = "
            "[System.Net.ServicePointManager]::SecurityProtocol -bor 3072; "
            "iex ((New-Object System.Net.WebClient).DownloadString("
            f"'{_CHOCOLATEY_INSTALLER}'))",
        ),
        bootstrap_paths=(
            "/c/ProgramData/Chocolatey/bin",
            "/cygdrive/c/ProgramData/chocolatey/bin",
            r"C:\ProgramData\chocolatey\bin",
        ),
    ),
}


# Linux: distro → managers in priority order (first one on PATH wins).
LINUX_MANAGERS: dict[Distro, tuple[str, ...]] = {
    Distro.AMAZON_LINUX: ("yum", "dnf"),
    Distro.CENTOS: ("yum", "dnf"),
    Distro.FEDORA: ("yum", "dnf"),
    Distro.RHEL: ("yum", "dnf"),
    Distro.UBUNTU: ("apt",),
    Distro.DEBIAN: ("apt",),
}

# Non-Linux families: one self-bootstrapping manager each.
# Families absent from both tables have no automatic installation.
FAMILY_MANAGERS: dict[OSFamily, str] = {
    OSFamily.DARWIN: "brew",
    OSFamily.WINDOWS: "choco",
}
