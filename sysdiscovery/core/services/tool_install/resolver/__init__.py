"""
L2 Resolver — ``__init__.py`` re-exports.
"""

from sysdiscovery.core.services.tool_install.resolver.method_selection import (  # noqa: F401
    PackageResolver,
    build_install_actions,
)
