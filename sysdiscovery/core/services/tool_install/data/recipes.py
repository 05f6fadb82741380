"""
L0 Data — Tool recipes.

Every executable a discovery step may probe, keyed by command name,
with the package that provides it when it differs.
"""

from __future__ import annotations

from sysdiscovery.core.models.platform import DEBIAN_FAMILY, REDHAT_FAMILY
from sysdiscovery.core.models.tool import Tool

TOOL_RECIPES: dict[str, Tool] = {
    # ── System information ──────────────────────────────────────
    "systeminfo": Tool(cli="systeminfo", label="Windows system information tool"),
    "lshw": Tool(cli="lshw", label="Hardware information tool"),
    "dmidecode": Tool(cli="dmidecode", label="DMI table decoder"),
    "hwinfo": Tool(cli="hwinfo", label="Hardware information tool"),

    # ── Users and accounts ──────────────────────────────────────
    "net": Tool(cli="net", label="Network command tool"),
    # getent ships with the C library; the package name depends on
    # the distro family and there is none to install elsewhere.
    "getent": Tool(
        cli="getent",
        label="Account lookup tool",
        distro_packages={
            **{d: "libc-bin" for d in DEBIAN_FAMILY},
            **{d: "glibc-common" for d in REDHAT_FAMILY},
        },
    ),

    # ── Network configuration ───────────────────────────────────
    "ip": Tool(cli="ip", package="iproute2", label="IP configuration tool"),
    "ifconfig": Tool(cli="ifconfig", package="net-tools", label="Interface configuration tool"),
    "netstat": Tool(cli="netstat", package="net-tools", label="Network statistics tool"),
    "route": Tool(cli="route", package="net-tools", label="Routing table tool"),
    "df": Tool(cli="df", package="coreutils", label="Disk usage tool"),
    "wmic": Tool(cli="wmic", label="WMI command-line tool"),

    # ── Remote systems ──────────────────────────────────────────
    "nmap": Tool(cli="nmap", label="Network scanning tool"),
    "arp-scan": Tool(cli="arp-scan", label="ARP scanning tool"),

    # ── Shares ──────────────────────────────────────────────────
    "smbclient": Tool(cli="smbclient", label="SMB client tool"),
    "nmblookup": Tool(cli="nmblookup", label="NetBIOS name lookup tool"),
    "pwsh": Tool(cli="pwsh", label="PowerShell Core"),
    "powershell": Tool(cli="powershell", label="Windows PowerShell"),
}


def get_tool(cli: str) -> Tool:
    """Look up a recipe, falling back to a bare tool for unknown names."""
    return TOOL_RECIPES.get(cli) or Tool(cli=cli)
