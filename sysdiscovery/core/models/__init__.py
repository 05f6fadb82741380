"""
Domain models — Pydantic types for system discovery.

All models are re-exported here for convenient access:

    from sysdiscovery.core.models import PlatformIdentity, Tool, Action, Receipt
"""

from sysdiscovery.core.models.action import Action, Receipt
from sysdiscovery.core.models.config import DiscoveryConfig
from sysdiscovery.core.models.platform import Distro, OSFamily, PlatformIdentity
from sysdiscovery.core.models.step import (
    ProbeResult,
    RunReport,
    StepOutcome,
    StepResult,
)
from sysdiscovery.core.models.tool import Tool

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # config.py
    "DiscoveryConfig",
    # platform.py
    "Distro",
    "OSFamily",
    "PlatformIdentity",
    # step.py
    "ProbeResult",
    "RunReport",
    "StepOutcome",
    "StepResult",
    # tool.py
    "Tool",
]
