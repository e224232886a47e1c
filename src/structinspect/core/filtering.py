# topmark:header:start
#
#   project      : StructInspect
#   file         : filtering.py
#   file_relpath : src/structinspect/core/filtering.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Field filtering.

Given a record's ordered ``(name, value)`` pairs and a resolved `RuleSet`,
return the pairs to display. For each pair, in order:

1. the synthetic type-tag field is dropped when ``rules.type_tag`` is set or
   its name is listed in ``rules.except_fields``, and kept otherwise;
2. a name listed in ``rules.except_fields`` is dropped;
3. a value matching any enabled emptiness category is dropped;
4. anything else is kept unchanged.

Kept pairs keep their relative order. Nested records are not filtered here;
the renderer filters them with their own rule set.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from structinspect.config.logging import get_logger
from structinspect.constants import TYPE_TAG_FIELD
from structinspect.core.emptiness import is_empty

if TYPE_CHECKING:
    from collections.abc import Iterable

    from structinspect.config.logging import StructInspectLogger
    from structinspect.core.rules import RuleSet

logger: StructInspectLogger = get_logger(__name__)


def should_omit(name: object, value: object, rules: RuleSet) -> bool:
    """Return True if the field ``name`` with ``value`` is hidden under ``rules``.

    Args:
        name (object): Field name.
        value (object): Field value.
        rules (RuleSet): The effective rule set.

    Returns:
        bool: True when the field is omitted.
    """
    if name == TYPE_TAG_FIELD:
        return rules.type_tag or name in rules.except_fields
    if name in rules.except_fields:
        return True
    return is_empty(value, rules)


def filter_fields(
    fields: Iterable[tuple[Any, object]],
    rules: RuleSet,
) -> list[tuple[Any, object]]:
    """Return the ``(name, value)`` pairs to display, in their original order.

    Args:
        fields (Iterable[tuple[Any, object]]): The record's ordered field pairs.
        rules (RuleSet): The effective rule set.

    Returns:
        list[tuple[Any, object]]: The kept pairs (a subsequence of ``fields``).
    """
    kept: list[tuple[Any, object]] = []
    for name, value in fields:
        if should_omit(name, value, rules):
            logger.trace("Omitting field %r", name)
            continue
        kept.append((name, value))
    return kept
