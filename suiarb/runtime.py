"""Process-level helpers: crash reporting, clock and heartbeat."""

from __future__ import annotations

import logging
import sys
import threading
import time
import traceback
from collections.abc import Callable, Iterable
from datetime import timedelta
from types import TracebackType

_log = logging.getLogger(__name__)
_panic_log = logging.getLogger("panic_hook")

_MAX_ARG_LEN = 32

Notifier = Callable[[str, str], None]


def redact_cmdline(args: Iterable[str]) -> str:
    """Join arguments, hiding any longer than 32 bytes (e.g. private keys)."""
    return " ".join("[REDACTED]" if len(arg.encode()) > _MAX_ARG_LEN else arg for arg in args)


def format_panic_message(thread: str, msg: str, file: str | None = None, line: int | None = None) -> str:
    if file is not None:
        return f"thread '{thread}' panicked at '{msg}': {file}:{line}"
    return f"thread '{thread}' panicked at '{msg}'"


def _report(
    notifier: Notifier | None,
    thread_name: str,
    exc_type: type[BaseException],
    exc: BaseException | None,
    tb: TracebackType | None,
) -> None:
    text = str(exc) if exc is not None else ""
    msg = text or exc_type.__name__
    frames = traceback.extract_tb(tb) if tb is not None else []
    if frames:
        err_msg = format_panic_message(thread_name, msg, frames[-1].filename, frames[-1].lineno)
    else:
        err_msg = format_panic_message(thread_name, msg)

    cmdline = redact_cmdline(sys.argv)
    if notifier is not None:
        try:
            notifier(cmdline, err_msg)
        except Exception:
            _log.exception("failed to deliver crash report")
    _panic_log.error(err_msg)


def set_panic_hook(notifier: Notifier | None = None) -> None:
    """Report uncaught exceptions, in the main thread and in others, to the log and ``notifier``."""

    def sys_hook(exc_type, exc, tb):
        _report(notifier, threading.current_thread().name, exc_type, exc, tb)

    def thread_hook(args):
        name = args.thread.name if args.thread is not None else "<unnamed>"
        _report(notifier, name, args.exc_type, args.exc_value, args.exc_traceback)

    sys.excepthook = sys_hook
    threading.excepthook = thread_hook


def current_time_ms() -> int:
    return time.time_ns() // 1_000_000


def _heartbeat_worker(service_id: str, interval: timedelta) -> None:
    _log.info("Heartbeat worker started for %s", service_id)


def start_heartbeat(service_id: str, interval: timedelta | float) -> threading.Thread:
    """Start the heartbeat worker for ``service_id`` in a daemon thread."""
    if not isinstance(interval, timedelta):
        interval = timedelta(seconds=interval)
    worker = threading.Thread(
        target=_heartbeat_worker,
        args=(str(service_id), interval),
        name=f"heartbeat-{service_id}",
        daemon=True,
    )
    worker.start()
    return worker