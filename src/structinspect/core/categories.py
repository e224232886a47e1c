# topmark:header:start
#
#   project      : StructInspect
#   file         : categories.py
#   file_relpath : src/structinspect/core/categories.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Emptiness categories and rule-flag names.

Each `OmitCategory` names one predicate over a field value (``None``, ``0``,
``""``, ...). A `RuleSet` carries one boolean per category plus the dedicated
``type_tag`` flag, which controls the synthetic type-tag field by name rather
than by value.

The ``.value`` of each category is the key used in TOML tables, keyword
overrides and names-only lists; aliases are accepted when parsing.
"""

from __future__ import annotations

from typing import Final

from structinspect.core.enum_mixins import KeyedStrEnum, norm_token


class OmitCategory(KeyedStrEnum):
    """Value categories that may be treated as empty (and therefore omitted)."""

    NIL_VALUE = ("nil_value", "None", ("nil", "none", "none_value", "null"))
    ZERO_INTEGER_VALUE = ("zero_integer_value", "integer 0", ("zero_int", "zero_integer"))
    ZERO_FLOAT_VALUE = ("zero_float_value", "float +0.0", ("zero_float",))
    EMPTY_STRING = ("empty_string", 'empty string ""', ("empty_str",))
    EMPTY_LIST = ("empty_list", "empty list []")
    EMPTY_MAP = ("empty_map", "empty mapping {}", ("empty_dict", "empty_mapping"))
    EMPTY_STRUCT = (
        "empty_struct",
        "record equal to its type's defaults",
        ("empty_record", "empty_dataclass"),
    )
    EMPTY_TUPLE = ("empty_tuple", "empty tuple ()")
    TRUE_VALUE = ("true_value", "True", ("true",))
    FALSE_VALUE = ("false_value", "False", ("false",))


# Dedicated flag hiding the synthetic type-tag field
TYPE_TAG_FLAG: Final[str] = "type_tag"
TYPE_TAG_FLAG_ALIASES: Final[frozenset[str]] = frozenset(
    {"type_tag", "struct_module", "hide_type_tag", "type"}
)

# Key carrying the exclude-by-name list in keyed overrides and TOML tables
EXCEPT_KEY: Final[str] = "except"
EXCEPT_KEY_ALIASES: Final[frozenset[str]] = frozenset({"except", "except_fields", "exclude"})

# Every boolean flag on a RuleSet, in declaration order
FLAG_NAMES: Final[tuple[str, ...]] = (*(c.value for c in OmitCategory), TYPE_TAG_FLAG)


def parse_flag_name(raw: object) -> str | None:
    """Return the canonical flag name for a category token or the type-tag flag.

    Args:
        raw (object): A category member, a canonical key, a member name or an alias.

    Returns:
        str | None: The canonical flag name (a `RuleSet` attribute), or ``None``
        when ``raw`` names no flag.
    """
    category: OmitCategory | None = OmitCategory.parse(raw)
    if category is not None:
        return category.value
    if isinstance(raw, str) and norm_token(raw) in TYPE_TAG_FLAG_ALIASES:
        return TYPE_TAG_FLAG
    return None


def is_except_key(raw: object) -> bool:
    """Return True if ``raw`` is the key of the exclude-by-name list."""
    return isinstance(raw, str) and norm_token(raw) in EXCEPT_KEY_ALIASES
