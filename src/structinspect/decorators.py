# topmark:header:start
#
#   project      : StructInspect
#   file         : decorators.py
#   file_relpath : src/structinspect/decorators.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-type registration and override installation.

``@struct_inspect`` wires a record type to the filter at definition time:

    @struct_inspect(omit=["nil_value", "empty_string"])
    @dataclass
    class User:
        name: str = ""
        email: str | None = None

The decorator stores the per-type input on the class and installs a compact
``__repr__``. Types that cannot be decorated (third-party records) are listed
under ``overrides`` in the configuration instead, and
[`enable_overrides`][structinspect.decorators.enable_overrides] installs the
same ``__repr__`` on each of them.
"""

from __future__ import annotations

import reprlib
import threading
from typing import TYPE_CHECKING, Final, TypeVar, overload

from structinspect import api
from structinspect.config.logging import get_logger
from structinspect.constants import STRUCT_INSPECT_ATTR
from structinspect.core.records import is_record_type
from structinspect.core.rules import coerce_input
from structinspect.rendering.compact import CYCLE_MARKER

if TYPE_CHECKING:
    from collections.abc import Callable

    from structinspect.config.logging import StructInspectLogger
    from structinspect.config.model import Settings
    from structinspect.registry.overrides import OverrideRegistry

logger: StructInspectLogger = get_logger(__name__)

_T = TypeVar("_T", bound=type)

# Marks a class that had no __repr__ of its own before patching
_MISSING: Final[object] = object()

_patched: dict[type, object] = {}
_patched_lock = threading.Lock()


@reprlib.recursive_repr(fillvalue=CYCLE_MARKER)
def compact_repr(self: object) -> str:
    """``__repr__`` installed on decorated and overridden record types."""
    return api.inspect(self)


@overload
def struct_inspect(cls: _T, /) -> _T: ...


@overload
def struct_inspect(*, omit: object = None) -> Callable[[_T], _T]: ...


def struct_inspect(cls: _T | None = None, /, *, omit: object = None) -> _T | Callable[[_T], _T]:
    """Class decorator registering a record type with an optional per-type input.

    Args:
        cls (_T | None): The decorated class (when used without parentheses).
        omit (object): Per-type omission input: a names list, a keyed mapping,
            a `RuleSet` or a `RuleSetInput` variant. ``None`` keeps the
            process-wide rules.

    Returns:
        _T | Callable[[_T], _T]: The class itself, or a decorator.

    Raises:
        TypeError: If the class is not a dataclass or named tuple.
    """

    def wrap(target: _T) -> _T:
        if not is_record_type(target):
            raise TypeError(
                f"@struct_inspect requires a dataclass or named tuple, got {target.__qualname__}"
            )
        setattr(target, STRUCT_INSPECT_ATTR, coerce_input(omit))
        target.__repr__ = compact_repr  # type: ignore[method-assign, assignment]
        logger.debug("Registered %s", target.__qualname__)
        return target

    if cls is None:
        return wrap
    return wrap(cls)


def enable_overrides(settings: Settings | None = None) -> tuple[type, ...]:
    """Install the compact ``__repr__`` on every type in the override registry.

    ``dict`` is never patched; untyped mappings are filtered when rendered
    through `structinspect.inspect` or nested in a filtered record.

    Args:
        settings (Settings | None): Settings to install first with
            [`configure`][structinspect.api.configure]; None keeps the current ones.

    Returns:
        tuple[type, ...]: The types patched by this call.
    """
    if settings is not None:
        api.configure(settings)
    registry: OverrideRegistry = api.current_registry()

    newly: list[type] = []
    with _patched_lock:
        for cls in registry.types():
            if cls is dict or cls in _patched:
                continue
            _patched[cls] = cls.__dict__.get("__repr__", _MISSING)
            cls.__repr__ = compact_repr  # type: ignore[method-assign, assignment]
            newly.append(cls)
    logger.debug("Enabled overrides on %d type(s)", len(newly))
    return tuple(newly)


def disable_overrides() -> None:
    """Restore the original ``__repr__`` of every type patched by `enable_overrides`."""
    with _patched_lock:
        for cls, original in _patched.items():
            if original is _MISSING:
                delattr(cls, "__repr__")
            else:
                cls.__repr__ = original  # type: ignore[method-assign, assignment]
        _patched.clear()


def overridden_types() -> tuple[type, ...]:
    """Return the types currently patched by `enable_overrides`."""
    with _patched_lock:
        return tuple(_patched)
