from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxlist = 8
_repr.maxtuple = 8
_repr.maxdict = 8


def _is_tile(value: Any) -> bool:
    return (
        isinstance(value, tuple)
        and len(value) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    )


def _summarize_tiles(tiles: Iterable[Any]) -> str:
    items = list(tiles)
    if not items:
        return "<0 tiles>"
    xs = [t[0] for t in items]
    ys = [t[1] for t in items]
    return f"<{len(items)} tiles x={min(xs)}..{max(xs)} y={min(ys)}..{max(ys)}>"


def _safe_repr(value: Any, *, max_length: int = 400) -> str:
    """Render ``value`` for a DEBUG line without dumping whole tile sets."""

    if isinstance(value, np.ndarray):
        if value.size == 0:
            return f"ndarray(shape={tuple(value.shape)}, empty)"
        return f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype}, min={value.min()}, max={value.max()})"
    if isinstance(value, (set, frozenset)) and value and all(_is_tile(v) for v in value):
        return _summarize_tiles(value)
    if isinstance(value, (set, frozenset)) and not value:
        return "<0 tiles>" if isinstance(value, frozenset) else "set()"
    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - broken __repr__
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = [_safe_repr(arg) for arg in args]
    parts.extend(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that logs entry, exit and exceptions at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", func.__name__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            enabled = logger.isEnabledFor(logging.DEBUG)
            if enabled:
                logger.debug("-> %s(%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                if enabled:
                    logger.debug("!! %s raised", qualname, exc_info=True)
                raise
            if enabled:
                if log_result:
                    logger.debug("<- %s = %s", qualname, _safe_repr(result))
                else:
                    logger.debug("<- %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the plain functions defined in a module with :func:`debug_log_call`."""

    module_name = namespace.get("__name__")
    if not isinstance(module_name, str):  # pragma: no cover - exec'd namespaces
        module_name = __name__
    logger = logger or logging.getLogger(module_name)
    skip_set: Set[str] = set(skip or ())

    for attr, value in list(namespace.items()):
        if attr in skip_set or not inspect.isfunction(value):
            continue
        if getattr(value, "__module__", None) != module_name:
            continue
        namespace[attr] = debug_log_call(logger, name=attr)(value)
