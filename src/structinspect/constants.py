# topmark:header:start
#
#   project      : StructInspect
#   file         : constants.py
#   file_relpath : src/structinspect/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructInspect Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    STRUCTINSPECT_VERSION: str = get_version("structinspect")
except PackageNotFoundError:  # running from a source checkout
    STRUCTINSPECT_VERSION = "0.0.0"

# Synthetic field carrying a typed record's class, matched by name only.
TYPE_TAG_FIELD: Final[str] = "__type__"

# Class attribute holding the per-type omission input set by `@struct_inspect`.
STRUCT_INSPECT_ATTR: Final[str] = "__struct_inspect__"

# Config discovery
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
STRUCTINSPECT_TOML_NAME: Final[str] = "structinspect.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "tool.structinspect"

# Environment
LOG_LEVEL_ENV_VAR: Final[str] = "STRUCTINSPECT_LOG_LEVEL"
