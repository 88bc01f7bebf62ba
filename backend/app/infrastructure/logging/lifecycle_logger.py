"""Colored lifecycle logger — ANSI-colored console lines for record mutations.

Every create, update, soft delete and restore goes through one of these
helpers so the audit trail of a record can be followed in the terminal.

Color scheme:
    🟢 Green   — Create / Restore
    🔵 Blue    — Update
    🟡 Yellow  — Soft delete
    🔴 Red     — Errors
"""

import logging
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    GRAY = "\033[90m"


class LifecycleStage:
    """Predefined lifecycle events with colors and icons."""

    CREATE = ("CREATE", _Colors.GREEN, "🆕")
    UPDATE = ("UPDATE", _Colors.BLUE, "✏️")
    SOFT_DELETE = ("SOFT_DELETE", _Colors.YELLOW, "🗑️")
    RESTORE = ("RESTORE", _Colors.GREEN, "♻️")
    ERROR = ("ERROR", _Colors.RED, "❌")


class LifecycleLogger:
    """Color-coded logger for entity lifecycle events.

    Usage:
        log = LifecycleLogger("ClientLifecycle")
        log.event(LifecycleStage.CREATE, "Client 12 created", name="Alice")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def event(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log one lifecycle transition with its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.info(formatted)

    def skipped(self, stage: tuple[str, str, str], message: str) -> None:
        """Log a transition that left the record unchanged."""
        label, _, icon = stage
        self._logger.debug(f"{_Colors.DIM}{icon} [{label}] {message}{_Colors.RESET}")

    def rejected(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a refused transition in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(formatted)
