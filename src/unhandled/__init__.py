"""Route uncaught exceptions, unhandled rejections and termination signals to logging or handlers."""
from typing import Any, Callable, Mapping, Optional

from . import config
from .events import EventSource, ProcessEventSource, exit_process
from .logger import Logger
from .registrar import register_all
from .resolver import Context, EventOverride, FaultEvent, ResolvedEventConfig, resolve
from .values import coalesce

__version__ = "1.0"

_DEFAULT = object()


def unhandled(
    handler: Optional[Callable[[FaultEvent], Any]] = None,
    logger: Any = _DEFAULT,
    verbose: Optional[bool] = None,
    exit: Optional[bool] = None,
    exception: Any = None,
    rejection: Any = None,
    sigint: Any = None,
    sigterm: Any = None,
    signals: Optional[Mapping[str, Any]] = None,
    context: Any = None,
) -> None:
    """
    Attach fault listeners to the process (or to ``context.events``).

    ``exception``, ``rejection``, ``sigint``, ``sigterm`` and the values of
    ``signals`` are per-event overrides, either ``EventOverride`` instances or
    mappings with ``handler``, ``exit`` and ``ignore`` keys. ``logger=None``
    silences all output; any object with an ``error(*args)`` method works.
    """
    if logger is _DEFAULT:
        logger = Logger()
    ctx = Context.from_value(context)

    configs = resolve(
        handler=handler,
        logger=logger,
        verbose=coalesce(verbose, config.VERBOSE),
        exit=coalesce(exit, config.EXIT_ON_EVENT),
        overrides={
            "uncaughtException": exception,
            "unhandledRejection": rejection,
            "SIGINT": sigint,
            "SIGTERM": sigterm,
        },
        signals=signals,
        events=coalesce(ctx.events, ProcessEventSource.instance()),
        exit_fn=coalesce(ctx.exit, exit_process),
    )
    register_all(configs)


__all__ = [
    "__version__",
    "unhandled",
    "config",
    "Context",
    "EventOverride",
    "EventSource",
    "FaultEvent",
    "Logger",
    "ProcessEventSource",
    "ResolvedEventConfig",
    "exit_process",
]
