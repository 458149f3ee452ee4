from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from types import TracebackType
from typing import Any

ExceptionHook = Callable[
    [type[BaseException], BaseException, TracebackType | None],
    Any,
]
ThreadingExceptionHook = Callable[[threading.ExceptHookArgs], Any]

_default_excepthook: ExceptionHook | None = None
_default_threading_excepthook: ThreadingExceptionHook | None = None


def _describe(exc_value: BaseException) -> dict[str, Any]:
    # sync errors carry the ids they failed on as attributes
    context: dict[str, Any] = {"exception_type": type(exc_value).__name__}
    for attribute in ("user_id", "status", "seconds_remaining"):
        if hasattr(exc_value, attribute):
            context[attribute] = getattr(exc_value, attribute)

    return context


def internal_exception_handler(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    logging.exception(
        "An unhandled exception occurred",
        exc_info=(exc_type, exc_value, exc_traceback),
        extra=_describe(exc_value),
    )


def internal_thread_exception_handler(
    args: threading.ExceptHookArgs,
) -> None:
    if args.exc_value is None:  # pragma: no cover
        logging.warning("Exception hook called without exception value.")
        return

    logging.exception(
        "An unhandled exception occurred in a thread",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        extra={
            **_describe(args.exc_value),
            "thread_name": args.thread.name if args.thread else None,
        },
    )


def hook_exception_handlers() -> None:
    global _default_excepthook
    _default_excepthook = sys.excepthook
    sys.excepthook = internal_exception_handler

    global _default_threading_excepthook
    _default_threading_excepthook = threading.excepthook
    threading.excepthook = internal_thread_exception_handler


def unhook_exception_handlers() -> None:
    global _default_excepthook
    if _default_excepthook is not None:
        sys.excepthook = _default_excepthook
        _default_excepthook = None

    global _default_threading_excepthook
    if _default_threading_excepthook is not None:
        threading.excepthook = _default_threading_excepthook
        _default_threading_excepthook = None
