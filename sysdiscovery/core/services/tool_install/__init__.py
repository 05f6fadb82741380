"""
Tool installation service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → resolver → detection → execution →
orchestration)::

    from sysdiscovery.core.services.tool_install import ToolEnsurer
"""

# ── L0: Data ──
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

# ── L2: Resolver ──
from sysdiscovery.core.services.tool_install.resolver.method_selection import (  # noqa: F401
    PackageResolver,
    build_install_actions,
)

# ── L3: Detection ──
from sysdiscovery.core.services.tool_install.detection.probe import (  # noqa: F401
    CapabilityProber,
)

# ── L4: Execution ──
from sysdiscovery.core.services.tool_install.execution.bootstrap import (  # noqa: F401
    bootstrap_manager,
    extend_path,
)

# ── L5: Orchestration ──
from sysdiscovery.core.services.tool_install.orchestration.ensure import (  # noqa: F401
    ToolEnsurer,
)
