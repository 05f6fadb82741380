"""
L4 Execution — ``__init__.py`` re-exports.
"""

from sysdiscovery.core.services.tool_install.execution.bootstrap import (  # noqa: F401
    bootstrap_manager,
    extend_path,
)
