"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from sysdiscovery.core.services.tool_install.detection.probe import (  # noqa: F401
    CapabilityProber,
)
