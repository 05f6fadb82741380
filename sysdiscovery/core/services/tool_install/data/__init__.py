"""
L0 Data — ``__init__.py`` re-exports.

Pure data: tool recipes and the package-manager dispatch tables.
"""

from sysdiscovery.core.services.tool_install.data.package_managers import (  # noqa: F401
    FAMILY_MANAGERS,
    LINUX_MANAGERS,
    PACKAGE_MANAGERS,
    PackageManager,
)
from sysdiscovery.core.services.tool_install.data.recipes import (  # noqa: F401
    TOOL_RECIPES,
    get_tool,
)
