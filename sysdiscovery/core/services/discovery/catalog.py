"""
Discovery catalog — the technique categories and their candidate chains.

This module is data: which commands answer which question on which
platform, in which order. The engine in ``engine.py`` walks it.
"""

from __future__ import annotations

from sysdiscovery.core.models.config import DiscoveryConfig
from sysdiscovery.core.models.platform import OSFamily
from sysdiscovery.core.services.discovery.engine import (
    Candidate,
    DiscoveryStep,
    Notice,
    Probe,
)
from sysdiscovery.core.services.tool_install.data.recipes import get_tool

LINUX = OSFamily.LINUX
DARWIN = OSFamily.DARWIN
WINDOWS = OSFamily.WINDOWS
ALL_FAMILIES = tuple(OSFamily)


def _run(*argv: str, tool: str | None = None, **kwargs) -> Candidate:
    """Candidate gated on ``tool`` (default: the program itself)."""
    return Candidate(argv=tuple(argv), tool=get_tool(tool or argv[0]), **kwargs)


def _install(*argv: str, tool: str | None = None, **kwargs) -> Candidate:
    """Candidate that installs its tool when missing."""
    return _run(*argv, tool=tool, install=True, **kwargs)


def _always(*argv: str, **kwargs) -> Candidate:
    """Candidate with no presence gate."""
    return Candidate(argv=tuple(argv), **kwargs)


def _fail(message: str) -> Notice:
    return ("failure", message)


def _warn(message: str) -> Notice:
    return ("warning", message)


def _hint(message: str) -> Notice:
    return ("hint", message)


# ── T1082 ───────────────────────────────────────────────────────


def system_information() -> DiscoveryStep:
    hardware = (
        _run("lshw", elevate=True),
        _install("lshw", elevate=True),
        _run("dmidecode", elevate=True),
        _run("hwinfo", elevate=True),
    )
    no_hardware = (_warn(
        "Warning: No detailed hardware info tool found. Skipping detailed hardware info."
    ),)
    return DiscoveryStep(
        technique="T1082",
        title="System Information Discovery",
        probes=(
            Probe(
                name="System Information Discovery",
                chains={
                    WINDOWS: (_run("systeminfo"), _install("lshw", elevate=True)),
                    LINUX: hardware,
                    DARWIN: hardware,
                },
                preamble={
                    LINUX: (_always("uname", "-a"),),
                    DARWIN: (_always("uname", "-a"),),
                },
                exhausted={
                    WINDOWS: (_fail("Error: Neither 'systeminfo' nor 'lshw' is available."),),
                    LINUX: no_hardware,
                    DARWIN: no_hardware,
                },
            ),
        ),
    )


# ── T1033 ───────────────────────────────────────────────────────


def user_discovery() -> DiscoveryStep:
    return DiscoveryStep(
        technique="T1033",
        title="System Owner / User Discovery",
        probes=(
            Probe(
                name="Current User Discovery",
                chains={family: (_always("whoami"),) for family in ALL_FAMILIES},
            ),
            Probe(
                name="Logged-in User Discovery",
                chains={family: (_always("users"),) for family in ALL_FAMILIES},
            ),
        ),
    )


# ── T1087.001 ───────────────────────────────────────────────────


def local_account_discovery() -> DiscoveryStep:
    getent = (_install("getent", "group", "sudo"),)
    getent_missing = (_fail("Error: 'getent' command is still not available."),)
    return DiscoveryStep(
        technique="T1087.001",
        title="Account Discovery – Local Account",
        probes=(
            Probe(
                name="Local Account Discovery",
                chains={
                    WINDOWS: (_install("net", "localgroup", "administrators"),),
                    LINUX: getent,
                    DARWIN: getent,
                },
                exhausted={
                    WINDOWS: (_fail("Error: 'net' command is still not available."),),
                    LINUX: getent_missing,
                    DARWIN: getent_missing,
                },
            ),
        ),
    )


# ── T1016 ───────────────────────────────────────────────────────


def network_configuration() -> DiscoveryStep:
    interfaces = (_run("ip", "addr"), _run("ifconfig"))
    routes = (_run("netstat", "-rn"), _run("route", "-n"), _run("ip", "route"))
    return DiscoveryStep(
        technique="T1016",
        title="System Network Configuration Discovery",
        probes=(
            Probe(
                name="Network Interface Discovery",
                chains={
                    **{family: interfaces for family in ALL_FAMILIES},
                    LINUX: interfaces + (
                        _install("ip", "addr"),
                        _install("ifconfig"),
                    ),
                },
                exhausted={
                    LINUX: (_fail("Error: Neither 'ip' nor 'ifconfig' commands are available."),),
                    DARWIN: (_warn(
                        "'ip' command not found. 'ifconfig' should be available on macOS."
                    ),),
                    WINDOWS: (_fail("Unsupported OS for Network Interface Discovery."),),
                    OSFamily.UNKNOWN: (_fail("Unsupported OS for Network Interface Discovery."),),
                },
            ),
            Probe(
                name="Routing Table Discovery",
                chains={
                    **{family: routes for family in ALL_FAMILIES},
                    LINUX: routes + (_install("netstat", "-rn"),),
                },
                exhausted={
                    LINUX: (_fail("Error: No suitable command found for routing information."),),
                    DARWIN: (_warn(
                        "No fallback available for macOS. "
                        "Please ensure 'netstat' or 'route' is installed."
                    ),),
                    WINDOWS: (_fail("Unsupported OS for Routing Table Discovery."),),
                    OSFamily.UNKNOWN: (_fail("Unsupported OS for Routing Table Discovery."),),
                },
            ),
            Probe(
                name="Share and Mount Discovery",
                chains={
                    WINDOWS: (
                        _run("net", "share"),
                        _run("wmic", "share", "get", "Name,", "Path"),
                        _install("net", "share"),
                    ),
                    LINUX: (_run("df", "-h"), _install("df", "-h")),
                    DARWIN: (_run("df", "-h"),),
                },
                exhausted={
                    WINDOWS: (_fail("Error: 'net' command is still not available."),),
                    LINUX: (_fail("Error: 'df' command is still not available."),),
                    DARWIN: (_warn(
                        "'df' command not found on macOS. Please ensure 'df' is installed."
                    ),),
                },
            ),
        ),
    )


# ── T1018 ───────────────────────────────────────────────────────


def remote_system_discovery(config: DiscoveryConfig) -> DiscoveryStep:
    subnet = config.scan.subnet
    nmap_intro = f"Scanning local network for active hosts with 'nmap -sn {subnet}':"
    arp_intro = "Scanning local network for active hosts with 'arp-scan --localnet':"
    nmap = _run("nmap", "-sn", subnet, intro=nmap_intro)
    arp_scan = _run("arp-scan", "--localnet", elevate=True, intro=arp_intro)
    return DiscoveryStep(
        technique="T1018",
        title="Remote System Discovery",
        probes=(
            Probe(
                name="Remote System Discovery",
                chains={
                    WINDOWS: (
                        _run(
                            "net", "group", "Domain Computers", "/domain",
                            fallback_on_failure=True,
                            fallback_notice=(
                                "'net group' command failed. Attempting to use WMIC as fallback."
                            ),
                        ),
                        _run("wmic", "computersystem", "get", "name"),
                        _install("net", "group", "Domain Computers", "/domain"),
                    ),
                    LINUX: (
                        nmap,
                        arp_scan,
                        _install("nmap", "-sn", subnet),
                        _install("arp-scan", "--localnet", elevate=True),
                    ),
                    # No install fallback on macOS: the scanners are not
                    # part of the non-interactive Homebrew set there.
                    DARWIN: (nmap, arp_scan),
                },
                exhausted={
                    WINDOWS: (_fail(
                        "Error: No suitable command found for remote system discovery."
                    ),),
                    LINUX: (
                        _warn("No network scanning tools available. Skipping remote system discovery."),
                        _hint("Consider installing 'nmap' or 'arp-scan' using your package manager."),
                    ),
                    DARWIN: (
                        _warn("No network scanning tools found on macOS. Skipping remote system discovery."),
                        _hint("Consider installing 'nmap' using Homebrew:"),
                        _hint("brew install nmap"),
                    ),
                },
            ),
        ),
    )


# ── T1201 ───────────────────────────────────────────────────────


def password_policy_discovery(config: DiscoveryConfig) -> DiscoveryStep:
    login_defs = config.paths.login_defs
    read_login_defs = _always(
        "cat", login_defs,
        elevate=True,
        requires_file=login_defs,
        intro=f"Displaying local password policies from '{login_defs}':",
    )
    return DiscoveryStep(
        technique="T1201",
        title="Password Policy Discovery",
        probes=(
            Probe(
                name="Password Policy Discovery",
                chains={
                    WINDOWS: (
                        _run("net", "accounts"),
                        _run("wmic", "path", "Win32_PasswordPolicy", "get", "/format:list"),
                        _install("net", "accounts"),
                    ),
                    LINUX: (read_login_defs,),
                    DARWIN: (read_login_defs,),
                },
                exhausted={
                    WINDOWS: (_fail("Error: 'net' command is still not available."),),
                    # The missing-file error is already reported.
                    LINUX: (),
                    DARWIN: (),
                },
            ),
        ),
    )


# ── T1135 ───────────────────────────────────────────────────────


def network_share_discovery(config: DiscoveryConfig) -> DiscoveryStep:
    module = config.shares.powershell_module
    script = f"Import-Module {module}; Invoke-ShareFinder"
    intro = "Attempting to execute 'Invoke-ShareFinder' via PowerShell:"
    hint = f"Failed to execute 'Invoke-ShareFinder'. Ensure {module} is installed."
    smb_chain = (
        _run("smbclient", "-L", config.shares.smb_host, "-N"),
        _run("nmblookup", "-S", "*"),
        _install("smbclient", "-L", config.shares.smb_host, "-N"),
    )
    return DiscoveryStep(
        technique="T1135",
        title="Network Share Discovery",
        probes=(
            Probe(
                name="Network Share Discovery",
                chains={
                    WINDOWS: (
                        _run("pwsh", "-Command", script, intro=intro, failure_hint=hint),
                        _run("powershell", "-Command", script, intro=intro, failure_hint=hint),
                    ),
                    LINUX: smb_chain,
                    DARWIN: smb_chain,
                },
                exhausted={
                    WINDOWS: (_fail("Error: PowerShell is not available."),),
                    LINUX: (
                        _warn("No SMB client tools available. Skipping network share discovery."),
                        _hint("Consider installing 'smbclient' or 'nmblookup' using your package manager."),
                    ),
                    DARWIN: (
                        _warn("No SMB client tools available. Skipping network share discovery."),
                        _hint("Consider installing 'smbclient' using Homebrew."),
                    ),
                },
            ),
        ),
    )


def build_steps(config: DiscoveryConfig | None = None) -> list[DiscoveryStep]:
    """All discovery steps in run order."""
    config = config or DiscoveryConfig()
    return [
        system_information(),
        user_discovery(),
        local_account_discovery(),
        network_configuration(),
        remote_system_discovery(config),
        password_policy_discovery(config),
        network_share_discovery(config),
    ]
