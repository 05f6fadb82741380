"""
L3 Detection — Capability probing.

Answers one question: is this name resolvable as an executable on
PATH right now? Read-only, never raises. Absence is an ordinary
``False``.
"""

from __future__ import annotations

import logging
import shutil
from typing import Callable

logger = logging.getLogger(__name__)


class CapabilityProber:
    """PATH lookup for tool presence.

    The lookup function is injectable so tests can describe a host
    without touching the real PATH. It is called on every probe: a
    tool installed mid-run is seen by the next call.
    """

    def __init__(self, which: Callable[[str], str | None] = shutil.which) -> None:
        self._which = which

    def locate(self, name: str) -> str | None:
        """Full path of ``name`` on PATH, or None."""
        if not name:
            return None
        try:
            return self._which(name)
        except (OSError, ValueError) as e:
            logger.debug("PATH lookup for %r failed: %s", name, e)
            return None

    def exists(self, name: str) -> bool:
        """Whether ``name`` resolves to an executable."""
        found = self.locate(name)
        logger.debug("probe %s → %s", name, found or "absent")
        return found is not None
