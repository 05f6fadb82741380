"""
L4 Execution — Package-manager bootstrap.

Installs a self-hosting package manager (Homebrew, Chocolatey) by
fetching and executing its official installer script, then makes its
install directory visible to PATH lookups in this process.
"""

from __future__ import annotations

import logging
import os

from sysdiscovery.adapters.base import Adapter
from sysdiscovery.core.models.action import Action, Receipt
from sysdiscovery.core.services.tool_install.data.package_managers import PackageManager

logger = logging.getLogger(__name__)


def extend_path(directories: tuple[str, ...] | list[str]) -> list[str]:
    """Prepend existing ``directories`` to this process's PATH.

    Mutates ``os.environ["PATH"]`` so later probes and child processes
    see the newly installed manager. Directories already on PATH or
    absent on disk are skipped.

    Returns:
        The directories actually added.
    """
    current = os.environ.get("PATH", "")
    entries = current.split(os.pathsep) if current else []
    added: list[str] = []
    for directory in directories:
        if directory in entries or not os.path.isdir(directory):
            continue
        added.append(directory)

    if added:
        os.environ["PATH"] = os.pathsep.join(added + entries)
        logger.info("Added to PATH: %s", ", ".join(added))
    return added


def bootstrap_manager(
    manager: PackageManager,
    adapter: Adapter,
    *,
    use_sudo: bool = True,
    timeout: int | None = None,
) -> Receipt:
    """Run ``manager``'s bootstrap installer.

    The receipt's status is informational only; callers re-probe for
    the manager's executable to decide whether the bootstrap worked.
    """
    if not manager.bootstrap:
        return Receipt.skip(
            adapter=adapter.name,
            action_id=f"bootstrap-{manager.id}",
            reason=f"{manager.display_name} has no bootstrap installer",
        )

    action = Action(
        id=f"bootstrap-{manager.id}",
        name=f"Install {manager.display_name}",
        argv=list(manager.bootstrap),
        timeout=timeout,
        env=dict(manager.bootstrap_env),
    )
    logger.info("Bootstrapping %s", manager.display_name)
    receipt = adapter.run(action, use_sudo=use_sudo)
    if receipt.failed:
        logger.warning("%s bootstrap failed: %s", manager.display_name, receipt.error)

    extend_path(manager.bootstrap_paths)
    return receipt
