"""
Discovery configuration model — loaded from discovery.yml.

Every field has a default, so a missing file yields the stock
behavior: install on miss, elevate with sudo, sweep 192.168.1.0/24.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class InstallSettings(BaseModel):
    """Package installation policy."""

    enabled: bool = True
    bootstrap: bool = True          # allow installing brew / choco itself


class ElevationSettings(BaseModel):
    """Privilege-elevation policy."""

    use_sudo: bool = True


class ScanSettings(BaseModel):
    """Remote system discovery targets."""

    subnet: str = "192.168.1.0/24"


class ShareSettings(BaseModel):
    """Network share discovery targets."""

    smb_host: str = "localhost"
    powershell_module: str = "PowerView"


class PathSettings(BaseModel):
    """Data files read during discovery."""

    os_release: str = "/etc/os-release"
    login_defs: str = "/etc/login.defs"


class CommandSettings(BaseModel):
    """Command execution settings."""

    timeout: int | None = None      # seconds; None = no timeout


class DiscoveryConfig(BaseModel):
    """Root configuration for a discovery run."""

    version: int = 1

    install: InstallSettings = Field(default_factory=InstallSettings)
    elevation: ElevationSettings = Field(default_factory=ElevationSettings)
    scan: ScanSettings = Field(default_factory=ScanSettings)
    shares: ShareSettings = Field(default_factory=ShareSettings)
    paths: PathSettings = Field(default_factory=PathSettings)
    commands: CommandSettings = Field(default_factory=CommandSettings)
