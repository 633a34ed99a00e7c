"""
Resolve the global settings and per-event overrides into one config per watched event.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from . import config
from .events import UNCAUGHT_EXCEPTION, UNHANDLED_REJECTION
from .values import coalesce


@dataclass(frozen=True)
class FaultEvent:
    kind: str
    error: Any = None


Handler = Callable[[FaultEvent], Any]


@dataclass(frozen=True)
class EventOverride:
    handler: Optional[Handler] = None
    exit: Optional[bool] = None
    ignore: bool = False

    @classmethod
    def from_value(cls, value: Union["EventOverride", Mapping[str, Any], None]) -> "EventOverride":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls(
            handler=value.get("handler"),
            exit=value.get("exit"),
            ignore=coalesce(value.get("ignore"), False),
        )


@dataclass(frozen=True)
class Context:
    """Injected collaborators: the fault event source and the exit callable."""
    events: Any = None
    exit: Optional[Callable[[int], Any]] = None

    @classmethod
    def from_value(cls, value: Union["Context", Mapping[str, Any], None]) -> "Context":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls(events=value.get("events"), exit=value.get("exit"))


@dataclass(frozen=True)
class ResolvedEventConfig:
    kind: str
    message: str
    logger: Any
    verbose: bool
    handler: Optional[Handler]
    exit: Optional[bool]
    ignore: bool
    events: Any
    exit_fn: Optional[Callable[[int], Any]]


def _signal_message(name: str) -> str:
    return f"{name} Received"


def watched_events(signals: Optional[Mapping[str, Any]] = None) -> List[tuple]:
    """(kind, display message) pairs in registration order."""
    kinds = [
        (UNCAUGHT_EXCEPTION, "Un-caught Exception"),
        (UNHANDLED_REJECTION, "Un-handled Promise Rejection"),
        ("SIGINT", _signal_message("SIGINT")),
        ("SIGTERM", _signal_message("SIGTERM")),
    ]
    seen = {kind for kind, _ in kinds}
    extra = list(signals or {}) + list(config.WATCHED_SIGNALS)
    for name in extra:
        name = name.upper()
        if name not in seen:
            kinds.append((name, _signal_message(name)))
            seen.add(name)
    return kinds


def resolve(
    handler: Optional[Handler] = None,
    logger: Any = None,
    verbose: bool = False,
    exit: Optional[bool] = None,
    overrides: Optional[Dict[str, Any]] = None,
    signals: Optional[Mapping[str, Any]] = None,
    events: Any = None,
    exit_fn: Optional[Callable[[int], Any]] = None,
) -> List[ResolvedEventConfig]:
    """
    Build one ResolvedEventConfig per watched event kind.

    ``overrides`` is keyed by event kind. Per-kind values win over the global
    ones whenever they are not None, so an explicit ``exit=False`` on one kind
    beats a global ``exit=True``. ``ignore`` only ever comes from the override.
    """
    overrides = dict(overrides or {})
    for name, value in (signals or {}).items():
        overrides[name.upper()] = coalesce(overrides.get(name.upper()), value)

    resolved = []
    for kind, message in watched_events(signals):
        override = EventOverride.from_value(overrides.get(kind))
        resolved.append(ResolvedEventConfig(
            kind=kind,
            message=message,
            logger=logger,
            verbose=verbose,
            handler=coalesce(override.handler, handler),
            exit=coalesce(override.exit, exit),
            ignore=override.ignore,
            events=events,
            exit_fn=exit_fn,
        ))
    return resolved
