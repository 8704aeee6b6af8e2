"""Logging and profiling for ezcontrols, built on telelog.

Everything in the library logs through four helpers:

``configure(...)`` -- adopt an explicit telelog config or a named preset
``get_logger(name)`` -- cached logger bound to the active config
``record_event(name, ...)`` -- one structured line at the chosen level
``span(name, ...)`` -- profiled block with transient context and failure logging

Defaults come from ``EZCONTROLS_*`` environment variables.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "EZCONTROLS_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "ezcontrols")
PRESETS = ("development", "production", "performance")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_CONTEXT_STACKS: Dict[int, Dict[str, list[str]]] = {}


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set, frozenset)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _with_profiling(config: Any) -> Any:
    config.with_profiling(_env_flag("PROFILE", True))
    return config


def _preset_config(preset: str) -> Any:
    key = preset.strip().lower()
    if key == "performance_analysis":
        key = "performance"
    if key not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'; expected one of {PRESETS}.")

    config = tl.Config()
    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
        config.with_json_format(False)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(_env("LOG_FILE") or "ezcontrols.log")
        config.with_buffering(True)
    else:
        config.with_min_level("DEBUG")
        config.with_console_output(False)
        config.with_json_format(True)
        config.with_file_output(_env("LOG_FILE") or "ezcontrols-performance.log")
        config.with_buffering(True)
    return _with_profiling(config)


def _environment_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())

    console = not _env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR", False))

    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    if _env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(_env_int("LOG_BUFFER_SIZE", 2048))

    return _with_profiling(config)


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    Parameters
    ----------
    config:
        A ready ``telelog.Config`` to adopt as is.
    preset:
        One of ``"development"``, ``"production"`` or ``"performance"``.
        Mutually exclusive with ``config``.

    With neither argument the configuration is rebuilt from the
    ``EZCONTROLS_*`` environment. Cached loggers are dropped either way.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        _ACTIVE_CONFIG = _preset_config(preset)
    elif config is not None:
        _ACTIVE_CONFIG = config
    else:
        _ACTIVE_CONFIG = _environment_config()
    _LOGGER_CACHE.clear()
    _CONTEXT_STACKS.clear()


def _active_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _environment_config()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` registered under ``name``."""

    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _active_config())
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span`` so the block can log notes or report problems."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def _payload(self, extra: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        for key, value in (extra or {}).items():
            payload[key] = _stringify(value)
        return payload

    def note(self, message: str, **extra: Any) -> None:
        _emit(self.logger, "debug", f"span::{message}", self._payload(extra))

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))


def _push_context(log: Any, key: str, value: str) -> None:
    _CONTEXT_STACKS.setdefault(id(log), {}).setdefault(key, []).append(value)
    log.add_context(key, value)


def _pop_context(log: Any, key: str) -> None:
    stacks = _CONTEXT_STACKS.get(id(log), {})
    values = stacks.get(key, [])
    if values:
        values.pop()
    if values:
        log.add_context(key, values[-1])
    else:
        stacks.pop(key, None)
        log.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block of work and log it as ``name``.

    ``component`` tracks the block under that component name. ``metadata`` is
    pushed onto the logger context for the duration of the block; a nested
    span reusing a key restores the outer value when it exits. Exceptions are
    logged through ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    serialized = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in serialized.items():
        _push_context(log, key, value)

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component,
        metadata=dict(serialized),
    )
    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in serialized:
                _pop_context(log, key)


configure()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
