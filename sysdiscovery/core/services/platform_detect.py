"""
Platform detection — OS family and Linux distribution.

Runs once per discovery run. Never fails: anything unrecognised
becomes ``Unknown``, which downstream components treat as "no
platform-specific branch" rather than as an error.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

from sysdiscovery.core.models.platform import Distro, OSFamily, PlatformIdentity

logger = logging.getLogger(__name__)

DEFAULT_OS_RELEASE = Path("/etc/os-release")

# os-release ID → Distro
_DISTRO_IDS: dict[str, Distro] = {
    "amzn": Distro.AMAZON_LINUX,
    "ubuntu": Distro.UBUNTU,
    "fedora": Distro.FEDORA,
    "centos": Distro.CENTOS,
    "debian": Distro.DEBIAN,
    "rhel": Distro.RHEL,
}

# uname -s prefixes of the POSIX emulation layers on Windows
_WINDOWS_PREFIXES = ("CYGWIN", "MINGW", "MSYS")


def classify_family(system_name: str) -> OSFamily:
    """Map a kernel/OS identity string (``uname -s``) to an OS family."""
    name = (system_name or "").strip()
    if name.startswith("Linux"):
        return OSFamily.LINUX
    if name.startswith("Darwin"):
        return OSFamily.DARWIN
    if name.upper().startswith(_WINDOWS_PREFIXES) or name == "Windows":
        return OSFamily.WINDOWS
    return OSFamily.UNKNOWN


def parse_os_release(text: str) -> dict[str, str]:
    """Parse os-release ``KEY=value`` lines into a dict.

    Quotes around values are stripped; comments and blank lines
    are ignored.
    """
    fields: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        fields[key.strip()] = value
    return fields


def classify_distro(os_release: dict[str, str]) -> Distro:
    """Map the os-release ``ID`` field to a Distro."""
    distro_id = os_release.get("ID", "").strip().lower()
    return _DISTRO_IDS.get(distro_id, Distro.UNKNOWN)


def detect_platform(
    system_name: str | None = None,
    os_release_path: Path = DEFAULT_OS_RELEASE,
) -> PlatformIdentity:
    """Detect the host platform.

    Args:
        system_name: Kernel identity string. Defaults to
            ``platform.system()`` (the ``uname -s`` equivalent).
        os_release_path: Where to read the Linux OS-release descriptor.

    Returns:
        An immutable PlatformIdentity.
    """
    if system_name is None:
        system_name = platform.system()

    family = classify_family(system_name)
    distro = Distro.UNKNOWN

    if family is OSFamily.LINUX:
        try:
            text = os_release_path.read_text(encoding="utf-8", errors="replace")
        except (FileNotFoundError, OSError):
            logger.debug("No os-release at %s — generic Linux", os_release_path)
        else:
            distro = classify_distro(parse_os_release(text))

    identity = PlatformIdentity(family=family, distro=distro)
    logger.info("Detected platform %s (kernel=%r)", identity, system_name)
    return identity
