"""
Discovery steps — the technique catalog and the engine that walks it.
"""

from sysdiscovery.core.services.discovery.catalog import build_steps  # noqa: F401
from sysdiscovery.core.services.discovery.engine import (  # noqa: F401
    Candidate,
    DiscoveryEngine,
    DiscoveryStep,
    Probe,
)
