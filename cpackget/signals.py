"""Watching for termination requests (Ctrl+C, SIGTERM) during long operations."""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable

log = logging.getLogger(__name__)

_WATCHED = (signal.SIGINT, signal.SIGTERM)

_terminated = threading.Event()
_previous_handlers: dict[int, object] = {}
_abort_check: Callable[[], bool] | None = None


def _restore_handlers() -> None:
    for signum, handler in list(_previous_handlers.items()):
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
    _previous_handlers.clear()


def _handle(signum, _frame) -> None:
    log.debug("Monitoring detected a signal: %s", signal.Signals(signum).name)
    _terminated.set()
    _restore_handlers()


def start_signal_watcher() -> None:
    """Trap termination signals and make ``should_abort`` report them."""
    global _abort_check
    log.debug("Starting signal monitoring")
    _terminated.clear()
    for signum in _WATCHED:
        if signum not in _previous_handlers:
            _previous_handlers[signum] = signal.signal(signum, _handle)
    _abort_check = _terminated.is_set


def stop_signal_watcher() -> None:
    """Stop watching, as if a termination signal had arrived."""
    _terminated.set()
    _restore_handlers()


def should_abort() -> bool:
    """Tell whether early termination was requested."""
    return _abort_check is not None and bool(_abort_check())


def set_abort_check(check: Callable[[], bool] | None) -> Callable[[], bool] | None:
    """Replace the function deciding whether to abort and return the previous one.

    ``None`` disables the check; anything else must be callable.
    """
    global _abort_check
    if check is not None and not callable(check):
        raise TypeError(f"abort check must be callable or None, not {type(check).__name__}")
    previous = _abort_check
    _abort_check = check
    return previous