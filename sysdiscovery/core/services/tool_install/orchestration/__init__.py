"""
L5 Orchestration — ``__init__.py`` re-exports.
"""

from sysdiscovery.core.services.tool_install.orchestration.ensure import (  # noqa: F401
    ToolEnsurer,
)
