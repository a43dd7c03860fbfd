"""Slash-separated keys that address nodes in a tree database."""

from __future__ import annotations

from functools import total_ordering


@total_ordering
class TreeDBKey:
    """A path-like key such as ``/key1/key2``; ``/`` is the root, ``""`` is null."""

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = str(value)

    @property
    def value(self) -> str:
        return self._value

    def is_root(self) -> bool:
        return self._value == "/"

    def is_null(self) -> bool:
        return self._value == ""

    def parent_key(self) -> TreeDBKey:
        """Return the key one level up, or the null key if there is none."""
        pos = self._value.rfind("/")
        if pos == 0 and len(self._value) > 1:
            return TreeDBKey("/")
        if pos != -1:
            return TreeDBKey(self._value[:pos])
        return TreeDBKey("")

    def base(self) -> str:
        """Return the last component of the key."""
        pos = self._value.rfind("/")
        if pos != -1:
            return self._value[pos + 1:]
        return self._value

    @staticmethod
    def _coerce(other: object) -> str | None:
        if isinstance(other, TreeDBKey):
            return other._value
        if isinstance(other, str):
            return other
        return None

    def __eq__(self, other: object) -> bool:
        other_value = self._coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value == other_value

    def __lt__(self, other: object) -> bool:
        other_value = self._coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value < other_value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"TreeDBKey({self._value!r})"