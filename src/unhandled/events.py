"""
Fault event sources.

``EventSource`` is a plain in-process emitter. ``ProcessEventSource`` feeds it
from the interpreter's own fault hooks: ``sys.excepthook`` and
``threading.excepthook`` for uncaught exceptions, asyncio loop exception
handlers for unhandled rejections, and ``signal.signal`` for termination
signals. Hooks are installed lazily, the first time a listener subscribes to
the matching kind.
"""

import os
import sys
import signal
import asyncio
import threading
import weakref
from typing import Any, Callable, Dict, List, Optional

UNCAUGHT_EXCEPTION = "uncaughtException"
UNHANDLED_REJECTION = "unhandledRejection"

Listener = Callable[..., Any]


class EventSource:
    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}
        # Reentrant: signal handlers run on the main thread and may emit while on() holds it.
        self._lock = threading.RLock()

    def on(self, kind: str, callback: Listener) -> "EventSource":
        with self._lock:
            self._listeners.setdefault(kind, []).append(callback)
        return self

    def listeners(self, kind: str) -> List[Listener]:
        with self._lock:
            return list(self._listeners.get(kind, []))

    def emit(self, kind: str, *args: Any) -> bool:
        """Call every listener for ``kind`` in order. Returns True if any ran."""
        callbacks = self.listeners(kind)
        for callback in callbacks:
            callback(*args)
        return bool(callbacks)


def _signal_number(name: str) -> signal.Signals:
    sig = getattr(signal, name, None)
    if not isinstance(sig, signal.Signals):
        raise ValueError(f"Unknown signal: {name}")
    return sig


class ProcessEventSource(EventSource):
    _global_instance: Optional["ProcessEventSource"] = None

    def __init__(self):
        super().__init__()
        self._installed = set()
        self._loops = weakref.WeakSet()
        self._previous_excepthook = None
        self._previous_threading_excepthook = None

    @classmethod
    def instance(cls) -> "ProcessEventSource":
        """Shared source for the whole process, so hooks are installed once."""
        if cls._global_instance is None:
            cls._global_instance = cls()
        return cls._global_instance

    def on(self, kind: str, callback: Listener) -> "ProcessEventSource":
        self._install(kind)
        return super().on(kind, callback)

    def _install(self, kind: str):
        if kind in self._installed:
            return
        if kind == UNCAUGHT_EXCEPTION:
            self._previous_excepthook = sys.excepthook
            self._previous_threading_excepthook = threading.excepthook
            sys.excepthook = self._excepthook
            threading.excepthook = self._threading_excepthook
        elif kind == UNHANDLED_REJECTION:
            self._wrap_loop_factory()
            try:
                self.attach_loop(asyncio.get_running_loop())
            except RuntimeError:
                pass
        else:
            # ValueError off the main thread, OSError for signals that cannot be caught.
            signal.signal(_signal_number(kind), self._signal_handler)
        self._installed.add(kind)

    def _wrap_loop_factory(self):
        """Attach every loop the current policy creates from now on, e.g. inside asyncio.run()."""
        policy = asyncio.get_event_loop_policy()
        create = policy.new_event_loop

        def new_event_loop():
            loop = create()
            self.attach_loop(loop)
            return loop

        policy.new_event_loop = new_event_loop

    def attach_loop(self, loop: asyncio.AbstractEventLoop):
        """Route ``loop``'s unhandled task and future errors to rejection listeners."""
        if loop in self._loops:
            return
        previous = loop.get_exception_handler()

        def _handle(loop, context):
            error = context.get("exception")
            if error is None:
                error = context.get("message")
            if self.emit(UNHANDLED_REJECTION, error):
                return
            if previous is not None:
                previous(loop, context)
            else:
                loop.default_exception_handler(context)

        loop.set_exception_handler(_handle)
        self._loops.add(loop)

    def _excepthook(self, exc_type, exc, tb):
        try:
            emitted = self.emit(UNCAUGHT_EXCEPTION, exc)
        except SystemExit:
            # The interpreter is already shutting down with a non-zero status.
            return
        if not emitted:
            self._previous_excepthook(exc_type, exc, tb)

    def _threading_excepthook(self, args):
        # SystemExit in a thread is a normal exit, not a fault.
        if args.exc_type is SystemExit or not self.emit(UNCAUGHT_EXCEPTION, args.exc_value):
            self._previous_threading_excepthook(args)

    def _signal_handler(self, sig, frame):
        self.emit(signal.Signals(sig).name)


def exit_process(code: int):
    """
    Terminate the process with ``code``.

    On the main thread this raises SystemExit so atexit handlers and finally
    blocks still run. Other threads cannot end the process that way, so they
    flush stdio and call os._exit.
    """
    if threading.current_thread() is threading.main_thread():
        sys.exit(code)
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, OSError, ValueError):
            pass
    os._exit(code)
