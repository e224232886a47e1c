# topmark:header:start
#
#   project      : StructInspect
#   file         : __init__.py
#   file_relpath : src/structinspect/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructInspect package.

StructInspect customizes how dataclasses, named tuples and mappings are
rendered for debugging and logging: fields whose values are "empty" under the
active omission rules are left out. Rules come from three layers (builtin
defaults, process-wide configuration, per-type configuration).
"""

from __future__ import annotations

from structinspect.api import (
    configure,
    current_settings,
    inspect,
    process_wide_rules,
    reset,
    rules_for,
)
from structinspect.config.model import MutableSettings, Settings
from structinspect.constants import STRUCTINSPECT_VERSION, TYPE_TAG_FIELD
from structinspect.core.categories import OmitCategory
from structinspect.core.emptiness import is_empty
from structinspect.core.errors import DefaultInstanceError, StructInspectError
from structinspect.core.filtering import filter_fields
from structinspect.core.records import (
    record_fields,
    register_default_factory,
    unregister_default_factory,
)
from structinspect.core.rules import (
    AlreadyResolved,
    Empty,
    KeyedOverrides,
    NamesOnly,
    RuleSet,
    builtin_defaults,
    effective_rules,
    resolve,
)
from structinspect.decorators import disable_overrides, enable_overrides, struct_inspect

__version__: str = STRUCTINSPECT_VERSION

__all__: list[str] = [
    "TYPE_TAG_FIELD",
    "AlreadyResolved",
    "DefaultInstanceError",
    "Empty",
    "KeyedOverrides",
    "MutableSettings",
    "NamesOnly",
    "OmitCategory",
    "RuleSet",
    "Settings",
    "StructInspectError",
    "__version__",
    "builtin_defaults",
    "configure",
    "current_settings",
    "disable_overrides",
    "effective_rules",
    "enable_overrides",
    "filter_fields",
    "inspect",
    "is_empty",
    "process_wide_rules",
    "record_fields",
    "register_default_factory",
    "reset",
    "resolve",
    "rules_for",
    "struct_inspect",
    "unregister_default_factory",
]
