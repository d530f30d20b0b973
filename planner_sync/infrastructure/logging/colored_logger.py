"""Colored sync logger — ANSI-colored console logging for the optimistic sync flow.

Provides a SyncLogger with color-coded output per sync stage, making it easy
to follow an optimistic mutation and its background reconciliation in the
terminal.

Color scheme:
    🟢 Green   — Optimistic local apply / completion
    🔵 Blue    — Reconciliation
    🟣 Magenta — Remote store calls
    🟡 Yellow  — Initial load
    🔴 Red     — Errors
    ⚪ Gray    — Timing / details
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
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Sync Stage Definitions ───────────────────────────────────────────

class SyncStage:
    """Predefined sync stages with colors and icons."""

    OPTIMISTIC = ("OPTIMISTIC", _Colors.GREEN, "⚡")
    RECONCILE = ("RECONCILE", _Colors.BLUE, "🔁")
    REMOTE = ("REMOTE", _Colors.MAGENTA, "🌐")
    LOAD = ("LOAD", _Colors.YELLOW, "📥")


# ── SyncLogger ───────────────────────────────────────────────────────

class SyncLogger:
    """Color-coded logger for optimistic mutations and their reconciliation.

    Usage:
        log = SyncLogger("PlannerStore")
        log.step_start(SyncStage.OPTIMISTIC, "add_client", id=temp.id)
        with log.timed_step(SyncStage.REMOTE, "clients.insert"):
            row = await remote.create_client(payload)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the start of a sync step with its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful completion of a sync step."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a sync step error in red."""
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def warning(self, stage: tuple[str, str, str], message: str) -> None:
        label, _, icon = stage
        self._logger.warning(f"{_Colors.YELLOW}{icon} [{label}] {message}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Errors are re-raised without an error record; the caller reports them
        once. Only the elapsed time is noted, at debug level.
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception:
            elapsed = time.perf_counter() - start
            self._logger.debug(f"{_Colors.GRAY}   {message} aborted after {elapsed:.2f}s{_Colors.RESET}")
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.2f}s", **kwargs)


def _format_details(kwargs: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v}" for k, v in kwargs.items())
