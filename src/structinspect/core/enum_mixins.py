# topmark:header:start
#
#   project      : StructInspect
#   file         : enum_mixins.py
#   file_relpath : src/structinspect/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generic Enum utilities for StructInspect (typing-friendly, UI-agnostic).

Provided:
    - ``KeyedStrEnum``: a ``str`` Enum whose ``.value`` is a stable machine key
      (the name used in TOML and keyword overrides), with a human label and
      parse aliases attached to each member.
    - ``norm_token``: the normalization applied to tokens before matching.

Example:
    ```python
    class Mode(KeyedStrEnum):
        A = ("alpha", "The alpha mode", ("a",))
        B = ("beta", "The beta mode")

    assert Mode.parse("A") is Mode.A
    assert Mode.parse("alpha") is Mode.A
    assert Mode.B.label == "The beta mode"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

_KS = TypeVar("_KS", bound="KeyedStrEnum")


def norm_token(s: str) -> str:
    """Normalize an identifier-like string to match config keys and aliases."""
    return s.strip().lower().replace("-", "_").replace(" ", "_")


class KeyedStrEnum(str, Enum):
    """Enum where `.value` is a stable machine key; metadata lives on attributes.

    Attributes:
        label (str): Human-readable label for the member.
        aliases (tuple[str, ...]): Alternative tokens accepted by `parse()`.
    """

    label: str
    aliases: tuple[str, ...]

    def __new__(
        cls: type[_KS],
        key: str,
        label: str,
        aliases: Iterable[str] = (),
    ) -> _KS:
        """Create a new KeyedStrEnum member with key, label, and optional aliases.

        Args:
            key (str): The stable machine key (stored as `.value`).
            label (str): The human-readable label for the enum member.
            aliases (Iterable[str]): Optional aliases for parsing. Defaults to empty.

        Returns:
            _KS: The newly created enum member.
        """
        obj: _KS = str.__new__(cls, key)
        obj._value_ = key
        obj.label = label
        obj.aliases = tuple(aliases)
        return obj

    def __str__(self) -> str:
        return self.value

    @property
    def key(self) -> str:
        """Stable machine key (same as `.value`)."""
        return self.value

    @classmethod
    def parse(cls: type[_KS], raw: object) -> _KS | None:
        """Parse a token into an enum member.

        Matches against the stable key (`.value`), the member name (`.name`) and
        any configured aliases. Matching is case-insensitive and normalizes
        '-' and ' ' to '_' via `norm_token()`. Members of ``cls`` are returned as is.

        Args:
            raw (object): The token to parse; non-strings never match.

        Returns:
            _KS | None: The matching member, or ``None``.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        token: str = norm_token(raw)

        for m in cls:
            if token == norm_token(m.value):
                return m
            if token == norm_token(m.name):
                return m
            for a in m.aliases:
                if token == norm_token(a):
                    return m
        return None
