"""
Transcript — the human-readable narration of a discovery run.

Core services narrate through this interface; the CLI supplies a
colored renderer, tests supply ``MemoryTranscript``. Message kinds map
to colors: success is green, attempts and warnings yellow, failures red.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Transcript(ABC):
    """Abstract narrator. Subclasses implement ``emit``."""

    @abstractmethod
    def emit(self, kind: str, message: str) -> None:
        """Write one message of the given kind."""

    def banner(self, message: str) -> None:
        self.emit("banner", f"=== {message} ===")

    def heading(self, title: str, technique: str) -> None:
        self.emit("heading", f"=== {title} ({technique}) ===")

    def detail(self, message: str) -> None:
        self.emit("detail", message)

    def command(self, display: str, *, after_install: bool = False) -> None:
        suffix = " after installation" if after_install else ""
        self.emit("command", f"Executing '{display}'{suffix}:")

    def command_intro(self, message: str) -> None:
        self.emit("command", message)

    def output(self, text: str) -> None:
        if text:
            self.emit("output", text)

    def attempt(self, message: str) -> None:
        self.emit("attempt", message)

    def success(self, message: str) -> None:
        self.emit("success", message)

    def warning(self, message: str) -> None:
        self.emit("warning", message)

    def failure(self, message: str) -> None:
        self.emit("failure", message)

    def hint(self, message: str) -> None:
        self.emit("hint", message)

    def blank(self) -> None:
        self.emit("blank", "")


class MemoryTranscript(Transcript):
    """Records ``(kind, message)`` events in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def emit(self, kind: str, message: str) -> None:
        self.events.append((kind, message))

    def messages(self, kind: str | None = None) -> list[str]:
        """All messages, optionally filtered by kind."""
        return [m for k, m in self.events if kind is None or k == kind]

    @property
    def text(self) -> str:
        return "\n".join(m for _, m in self.events)
