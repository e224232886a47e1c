# topmark:header:start
#
#   project      : StructInspect
#   file         : records.py
#   file_relpath : src/structinspect/core/records.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Record introspection.

StructInspect treats two kinds of values as records:

* **typed records**: dataclass instances and named-tuple instances. Their
  field list starts with the synthetic type-tag field
  (``TYPE_TAG_FIELD``) whose value is the record's class;
* **untyped mappings**: any ``Mapping`` that is not a typed record (``dict``
  is the universal untyped mapping type).

The ``empty_struct`` category needs the all-defaults instance of a typed
record's own type. By default the type is called without arguments; types
that cannot be built that way (mandatory fields, validating constructors) may
register an explicit factory with
[`register_default_factory`][structinspect.core.records.register_default_factory].
"""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from structinspect.config.logging import get_logger
from structinspect.constants import TYPE_TAG_FIELD
from structinspect.core.errors import DefaultInstanceError

if TYPE_CHECKING:
    from collections.abc import Callable

    from structinspect.config.logging import StructInspectLogger

logger: StructInspectLogger = get_logger(__name__)

_default_factories: dict[type, Callable[[], object]] = {}
_factories_lock = threading.Lock()


def _is_namedtuple_type(cls: type) -> bool:
    return issubclass(cls, tuple) and isinstance(getattr(cls, "_fields", None), tuple)


def is_record_type(cls: object) -> bool:
    """Return True if ``cls`` is a typed record type (dataclass or named tuple).

    Args:
        cls (object): Candidate type.

    Returns:
        bool: True for dataclass classes and named-tuple classes.
    """
    if not isinstance(cls, type):
        return False
    return dataclasses.is_dataclass(cls) or _is_namedtuple_type(cls)


def is_record(value: object) -> bool:
    """Return True if ``value`` is an instance of a typed record type."""
    return is_record_type(type(value))


def is_untyped_mapping(value: object) -> bool:
    """Return True if ``value`` is a mapping that is not a typed record."""
    return isinstance(value, Mapping) and not is_record(value)


def is_inspectable(value: object) -> bool:
    """Return True if ``value`` has a field list (typed record or untyped mapping)."""
    return is_record(value) or isinstance(value, Mapping)


def record_fields(value: object, *, include_type_tag: bool = True) -> list[tuple[Any, object]]:
    """Return the ordered ``(name, value)`` pairs of a record.

    Typed records list the type-tag pair first, then their declared fields in
    declaration order. Untyped mappings list their items in iteration order.

    Args:
        value (object): A typed record or an untyped mapping.
        include_type_tag (bool): Prefix typed records with the type-tag pair.

    Returns:
        list[tuple[Any, object]]: The field pairs.

    Raises:
        TypeError: If ``value`` is neither a typed record nor a mapping.
    """
    pairs: list[tuple[Any, object]]
    cls: type = type(value)
    if dataclasses.is_dataclass(cls):
        pairs = [(f.name, getattr(value, f.name)) for f in dataclasses.fields(cls)]
    elif _is_namedtuple_type(cls):
        pairs = list(zip(cls._fields, value))  # type: ignore[attr-defined, call-overload]
    elif isinstance(value, Mapping):
        return list(value.items())
    else:
        raise TypeError(f"{cls.__qualname__} is neither a record type nor a mapping")

    if include_type_tag:
        pairs.insert(0, (TYPE_TAG_FIELD, cls))
    return pairs


def register_default_factory(cls: type, factory: Callable[[], object]) -> None:
    """Register the zero-argument factory producing ``cls``'s all-defaults instance.

    Args:
        cls (type): The record type.
        factory (Callable[[], object]): Zero-argument callable returning a
            default instance of ``cls``.
    """
    with _factories_lock:
        _default_factories[cls] = factory
    logger.debug("Registered default factory for %s", cls.__qualname__)


def unregister_default_factory(cls: type) -> None:
    """Remove a factory registered for ``cls`` (no-op when none is registered)."""
    with _factories_lock:
        _default_factories.pop(cls, None)


def default_instance(cls: type) -> object:
    """Return a freshly built all-defaults instance of ``cls``.

    Args:
        cls (type): The record type.

    Returns:
        object: The default instance.

    Raises:
        DefaultInstanceError: If the registered factory, or ``cls()``, fails.
    """
    factory: Callable[[], object] | None = _default_factories.get(cls)
    try:
        return factory() if factory is not None else cls()
    except Exception as exc:
        # Any constructor failure means "no default instance"; callers decide how to degrade.
        raise DefaultInstanceError(cls, str(exc) or type(exc).__name__) from exc


def structurally_equal(a: object, b: object) -> bool:
    """Return True if ``a`` and ``b`` are equal by value, recursively.

    Typed records compare equal when they have the same type and pairwise
    structurally equal fields (regardless of the type's own ``__eq__``).
    Mappings compare by keys and values, lists and tuples element-wise.
    Booleans never equal integers. Other values fall back to ``==``.

    Args:
        a (object): First value.
        b (object): Second value.

    Returns:
        bool: True when structurally equal.
    """
    # Pairs currently being compared; a revisited pair is assumed equal.
    in_progress: set[tuple[int, int]] = set()

    def _eq(x: object, y: object) -> bool:
        if x is y:
            return True
        if isinstance(x, bool) or isinstance(y, bool):
            return False
        key: tuple[int, int] = (id(x), id(y))
        if key in in_progress:
            return True

        if is_record(x) or is_record(y):
            if type(x) is not type(y):
                return False
            in_progress.add(key)
            try:
                fx = record_fields(x, include_type_tag=False)
                fy = record_fields(y, include_type_tag=False)
                return len(fx) == len(fy) and all(
                    nx == ny and _eq(vx, vy) for (nx, vx), (ny, vy) in zip(fx, fy)
                )
            finally:
                in_progress.discard(key)

        if isinstance(x, Mapping) and isinstance(y, Mapping):
            if len(x) != len(y) or any(k not in y for k in x):
                return False
            in_progress.add(key)
            try:
                return all(_eq(x[k], y[k]) for k in x)
            finally:
                in_progress.discard(key)

        if isinstance(x, (list, tuple)) and isinstance(y, (list, tuple)):
            if type(x) is not type(y) or len(x) != len(y):
                return False
            in_progress.add(key)
            try:
                return all(_eq(ix, iy) for ix, iy in zip(x, y))
            finally:
                in_progress.discard(key)

        try:
            return bool(x == y)
        except Exception as exc:
            logger.debug("Equality check failed for %r and %r: %s", x, y, exc)
            return False

    return _eq(a, b)


def display_name(value: object) -> str:
    """Return the display name of a record: the type's qualified name, or ``""``.

    Untyped mappings have no type name and use the empty designator.
    """
    if is_record(value):
        return type(value).__qualname__
    return ""
