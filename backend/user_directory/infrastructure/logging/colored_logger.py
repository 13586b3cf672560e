"""Colored sync logger — ANSI-colored console logging for record store round-trips.

Every mutation is followed by a full reload of the collection, so one user
action produces two store calls. Coloring them per operation makes that
pairing easy to follow in the terminal.

Color scheme:
    🔵 Blue    — Refresh (list reload)
    🟢 Green   — Create
    🟡 Yellow  — Update
    🟣 Magenta — Delete
    🔴 Red     — Errors
    ⚪ Gray    — Details / counts
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


# ── Sync Operations ──────────────────────────────────────────────────

class SyncOperation:
    """Store operations with their label, color and icon."""

    REFRESH = ("REFRESH", _Colors.BLUE, "🔄")
    CREATE = ("CREATE", _Colors.GREEN, "➕")
    UPDATE = ("UPDATE", _Colors.YELLOW, "✏️")
    DELETE = ("DELETE", _Colors.MAGENTA, "🗑️")


def _format_kwargs(kwargs: dict[str, Any]) -> str:
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"


# ── SyncLogger ───────────────────────────────────────────────────────

class SyncLogger:
    """Color-coded logger for record store operations.

    Usage:
        log = SyncLogger("UserRecordService")
        with log.timed(SyncOperation.CREATE, "Inserting user", collection="users"):
            new_id = await store.insert("users", fields)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def start(self, operation: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = operation
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += _format_kwargs(kwargs)
        self._logger.debug(formatted)

    def done(self, operation: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = operation
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += _format_kwargs(kwargs)
        self._logger.info(formatted)

    def failed(
        self,
        operation: tuple[str, str, str],
        message: str,
        error: Exception | None = None,
    ) -> None:
        label, _, _ = operation
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            formatted += _format_kwargs(kwargs)
        self._logger.debug(formatted)

    @contextmanager
    def timed(self, operation: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start and outcome of a store call with elapsed time.

        Exceptions are logged and re-raised unchanged.
        """
        self.start(operation, message, **kwargs)
        started = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - started
            self.failed(operation, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - started
            self.done(operation, f"{message} — {elapsed:.2f}s", **kwargs)
