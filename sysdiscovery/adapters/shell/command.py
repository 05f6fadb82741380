"""
Command adapter — run a named program with arguments.

This is the single place where discovery and install commands reach
``subprocess``. Output is captured and handed back in the receipt so
the transcript can print it; exit status is reported, never judged.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time

from sysdiscovery.adapters.base import Adapter, ExecutionContext
from sysdiscovery.core.models.action import Receipt

logger = logging.getLogger(__name__)


def _is_root() -> bool:
    """Whether the current process already runs with root privileges."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def elevate(argv: list[str], use_sudo: bool = True) -> list[str]:
    """Prefix ``argv`` with ``sudo`` when elevation is possible and needed.

    Already root, sudo disabled, or no ``sudo`` binary (Windows,
    minimal containers): the command runs as-is.
    """
    if not use_sudo or _is_root():
        return list(argv)
    if shutil.which("sudo") is None:
        logger.debug("sudo not available, running %s unprivileged", argv[0])
        return list(argv)
    return ["sudo"] + list(argv)


def _partial(stream: str | bytes | None) -> str:
    """Text captured before a timeout; may arrive as bytes even in text mode."""
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        stream = stream.decode(errors="replace")
    return stream.rstrip()


class CommandAdapter(Adapter):
    """Execute commands and capture exit status plus output.

    Commands run without a shell; anything that needs shell syntax is
    wrapped in ``bash -c`` by the caller. stdin is inherited so that
    ``sudo`` can prompt on the terminal.
    """

    @property
    def name(self) -> str:
        return "command"

    def execute(self, context: ExecutionContext) -> Receipt:
        action = context.action
        if not action.argv:
            return Receipt.failure(self.name, action.id, "Missing command")

        argv = elevate(action.argv, context.use_sudo) if action.elevate else list(action.argv)
        ran = {"argv": argv, "elevated": argv[0] == "sudo" and action.program != "sudo"}
        logger.debug("Executing: %s", argv)
        env = {**os.environ, **action.env} if action.env else None
        start = time.monotonic()

        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=action.timeout,
                env=env,
            )
        except FileNotFoundError:
            return Receipt.failure(self.name, action.id, f"Command not found: {argv[0]}", **ran)
        except subprocess.TimeoutExpired as e:
            # Keep whatever the program printed before it was killed
            return Receipt.failure(
                self.name,
                action.id,
                f"Command timed out after {action.timeout}s",
                output=_partial(e.stdout),
                stderr=_partial(e.stderr),
                **ran,
            )
        except Exception as e:
            logger.exception("Subprocess error: %s", argv)
            return Receipt.failure(self.name, action.id, f"Command execution error: {e}", **ran)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = proc.stdout.rstrip()
        stderr = proc.stderr.rstrip()

        if proc.returncode == 0:
            return Receipt.success(
                self.name,
                action.id,
                stdout,
                stderr=stderr,
                duration_ms=elapsed_ms,
                **ran,
            )

        logger.debug("%s exited with %d", argv[0], proc.returncode)
        return Receipt.failure(
            self.name,
            action.id,
            stderr or f"Command exited with code {proc.returncode}",
            exit_code=proc.returncode,
            output=stdout,
            stderr=stderr,
            duration_ms=elapsed_ms,
            **ran,
        )
