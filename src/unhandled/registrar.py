"""
Subscribe listeners for resolved fault event configs.
"""

from typing import Any, Iterable

from .resolver import FaultEvent, ResolvedEventConfig

EXIT_CODE = 1


def _log_error(logger: Any, *args: Any):
    error = getattr(logger, "error", None)
    if callable(error):
        error(*args)


def make_listener(cfg: ResolvedEventConfig):
    """Build the callback invoked by the event source for each occurrence of ``cfg.kind``."""

    def trace(*args: Any):
        if cfg.verbose:
            _log_error(cfg.logger, *args)

    def listener(error: Any = None):
        try:
            if cfg.handler is None:
                if error is None:
                    _log_error(cfg.logger, cfg.message)
                else:
                    _log_error(cfg.logger, f"{cfg.message} :", error)
            else:
                trace(f'Passing event "{cfg.kind}" to handler.')
                cfg.handler(FaultEvent(cfg.kind, error))
        except Exception as exc:
            _log_error(cfg.logger, f"Error in handler for '{cfg.kind}' event :", exc)

        if cfg.exit is True and callable(cfg.exit_fn):
            trace(f"Exiting process with code {EXIT_CODE}")
            cfg.exit_fn(EXIT_CODE)
        else:
            trace("Not exiting process per config")

    return listener


def register(cfg: ResolvedEventConfig) -> bool:
    """Subscribe a listener for ``cfg`` unless it is ignored. Returns True if subscribed."""
    if cfg.ignore:
        if cfg.verbose:
            _log_error(cfg.logger, f'Ignoring event "{cfg.kind}"')
        return False

    if cfg.verbose:
        _log_error(cfg.logger, f'Setting up listener for event "{cfg.kind}"')
    try:
        cfg.events.on(cfg.kind, make_listener(cfg))
    except (ValueError, OSError) as exc:
        _log_error(cfg.logger, f'Unable to listen for event "{cfg.kind}" :', exc)
        return False
    return True


def register_all(configs: Iterable[ResolvedEventConfig]):
    for cfg in configs:
        register(cfg)
