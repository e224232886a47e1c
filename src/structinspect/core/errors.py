# topmark:header:start
#
#   project      : StructInspect
#   file         : errors.py
#   file_relpath : src/structinspect/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the StructInspect library layer.

Inspection never raises to its caller: these exceptions are raised by helper
functions and caught at the boundary where a fail-open decision is made
(e.g. the ``empty_struct`` check keeps a field whose type cannot be
default-constructed).
"""

from __future__ import annotations


class StructInspectError(Exception):
    """Base class for all StructInspect library errors."""


class DefaultInstanceError(StructInspectError):
    """A record type could not produce its all-defaults instance.

    Attributes:
        record_type (type): The type that failed to default-construct.
    """

    def __init__(self, record_type: type, reason: str) -> None:
        self.record_type = record_type
        super().__init__(f"Cannot default-construct {record_type.__qualname__}: {reason}")


class OverrideTargetError(StructInspectError):
    """An override registry entry names a type that cannot be imported."""
