# topmark:header:start
#
#   project      : StructInspect
#   file         : compact.py
#   file_relpath : src/structinspect/rendering/compact.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compact text rendering of filtered records.

Typed records render as ``Name(a=1, b='x')`` and untyped mappings as
``{'a': 1}``, keeping only the pairs returned by
[`filter_fields`][structinspect.core.filtering.filter_fields].

Field values are rendered with `repr`, except nested records and mappings for
which ``lookup`` returns a rule set: those are filtered and rendered
recursively with their own rules. A record reached again while it is being
rendered is shown as ``...``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from structinspect.config.logging import get_logger
from structinspect.constants import TYPE_TAG_FIELD
from structinspect.core.filtering import filter_fields
from structinspect.core.records import display_name, is_inspectable, is_record, record_fields

if TYPE_CHECKING:
    from collections.abc import Callable

    from structinspect.config.logging import StructInspectLogger
    from structinspect.core.rules import RuleSet

    RulesLookup = Callable[[object], "RuleSet | None"]

logger: StructInspectLogger = get_logger(__name__)

CYCLE_MARKER = "..."


def render(value: object, rules: RuleSet, *, lookup: RulesLookup | None = None) -> str:
    """Render a record or mapping with the fields kept by ``rules``.

    Args:
        value (object): A typed record or an untyped mapping.
        rules (RuleSet): The effective rules for ``value`` itself.
        lookup (RulesLookup | None): Returns the rules for a nested value, or
            None to render it with `repr`.

    Returns:
        str: The compact representation.

    Raises:
        TypeError: If ``value`` is neither a typed record nor a mapping.
    """
    if not is_inspectable(value):
        raise TypeError(f"Cannot render {type(value).__qualname__}: not a record or mapping")

    active: set[int] = set()

    def _render(obj: object, obj_rules: RuleSet) -> str:
        active.add(id(obj))
        try:
            pairs: list[tuple[Any, object]] = filter_fields(record_fields(obj), obj_rules)
            if is_record(obj):
                body: str = ", ".join(f"{name}={_field(name, val)}" for name, val in pairs)
                return f"{display_name(obj)}({body})"
            return "{" + ", ".join(f"{k!r}: {_field(k, val)}" for k, val in pairs) + "}"
        finally:
            active.discard(id(obj))

    def _field(name: object, val: object) -> str:
        if name == TYPE_TAG_FIELD and isinstance(val, type):
            return val.__qualname__
        if id(val) in active:
            return CYCLE_MARKER
        if lookup is not None and is_inspectable(val):
            nested: RuleSet | None = lookup(val)
            if nested is not None:
                return _render(val, nested)
        return repr(val)

    text: str = _render(value, rules)
    logger.trace("Rendered %s: %s", type(value).__qualname__, text)
    return text
