# topmark:header:start
#
#   project      : StructInspect
#   file         : emptiness.py
#   file_relpath : src/structinspect/core/emptiness.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Emptiness classification of field values.

One predicate per [`OmitCategory`][structinspect.core.categories.OmitCategory].
A value is empty under a `RuleSet` when it matches any enabled category.

Python-specific notes:
    * ``bool`` is a subclass of ``int``; ``False`` never matches
      ``zero_integer_value`` and ``True``/``False`` only match their own
      categories.
    * ``zero_float_value`` matches ``+0.0`` only; ``-0.0`` is kept.
    * Named tuples are typed records: they never match ``empty_tuple``.
    * ``empty_struct`` builds the default instance of the value's own type and
      compares structurally. A type without a usable default instance is never
      empty (the field is kept).
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from structinspect.config.logging import get_logger
from structinspect.core.categories import OmitCategory
from structinspect.core.errors import DefaultInstanceError
from structinspect.core.records import default_instance, is_record, structurally_equal

if TYPE_CHECKING:
    from collections.abc import Callable

    from structinspect.config.logging import StructInspectLogger
    from structinspect.core.rules import RuleSet

logger: StructInspectLogger = get_logger(__name__)


def _is_nil(value: object) -> bool:
    return value is None


def _is_zero_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value == 0


def _is_zero_float(value: object) -> bool:
    return isinstance(value, float) and value == 0.0 and math.copysign(1.0, value) > 0


def _is_empty_string(value: object) -> bool:
    return isinstance(value, str) and len(value) == 0


def _is_empty_list(value: object) -> bool:
    return isinstance(value, list) and len(value) == 0


def _is_empty_map(value: object) -> bool:
    return isinstance(value, Mapping) and not is_record(value) and len(value) == 0


def _is_empty_tuple(value: object) -> bool:
    return isinstance(value, tuple) and not is_record(value) and len(value) == 0


def _is_true(value: object) -> bool:
    return value is True


def _is_false(value: object) -> bool:
    return value is False


def is_default_record(value: object) -> bool:
    """Return True if ``value`` is a typed record equal to its type's default instance.

    Args:
        value (object): Candidate value.

    Returns:
        bool: False for non-records and for types that cannot be default-constructed.
    """
    if not is_record(value):
        return False
    try:
        default: object = default_instance(type(value))
    except DefaultInstanceError as exc:
        logger.debug("%s; treating the value as not empty", exc)
        return False
    return structurally_equal(value, default)


PREDICATES: Final[Mapping[OmitCategory, Callable[[object], bool]]] = MappingProxyType(
    {
        OmitCategory.NIL_VALUE: _is_nil,
        OmitCategory.ZERO_INTEGER_VALUE: _is_zero_integer,
        OmitCategory.ZERO_FLOAT_VALUE: _is_zero_float,
        OmitCategory.EMPTY_STRING: _is_empty_string,
        OmitCategory.EMPTY_LIST: _is_empty_list,
        OmitCategory.EMPTY_MAP: _is_empty_map,
        OmitCategory.EMPTY_STRUCT: is_default_record,
        OmitCategory.EMPTY_TUPLE: _is_empty_tuple,
        OmitCategory.TRUE_VALUE: _is_true,
        OmitCategory.FALSE_VALUE: _is_false,
    }
)


def matches_category(value: object, category: OmitCategory) -> bool:
    """Return True if ``value`` matches ``category``, regardless of any rule set."""
    return PREDICATES[category](value)


def matching_categories(value: object, rules: RuleSet) -> tuple[OmitCategory, ...]:
    """Return the enabled categories of ``rules`` that ``value`` matches."""
    return tuple(c for c in rules.enabled_categories() if PREDICATES[c](value))


def is_empty(value: object, rules: RuleSet) -> bool:
    """Return True if ``value`` matches any category enabled in ``rules``.

    Args:
        value (object): The field value.
        rules (RuleSet): The effective rule set.

    Returns:
        bool: True when the value is considered empty.
    """
    return any(PREDICATES[c](value) for c in rules.enabled_categories())
