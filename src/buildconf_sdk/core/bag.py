"""Ordered string parameter storage backing every entity."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from buildconf_sdk.core.exceptions import ParameterTypeError


class ParameterBag:
    """An ordered ``str -> str`` mapping holding one entity's configuration.

    A missing key means "unset"; a key holding ``""`` is set.  Values are
    never coerced: codecs convert native values to strings before they get
    here.

    Example::

        bag = ParameterBag({"host": "https://bugs.example.com"})
        bag.set("pattern", "#(\\d+)")
        bag.set("host", None)       # same as bag.remove("host")
        list(bag)                   # ["pattern"]
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = {}
        if data:
            for key, value in data.items():
                self.set(key, value)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key, default)

    def set(self, key: str, value: str | None) -> None:
        """Store *value* under *key*; ``None`` removes the key."""
        if value is None:
            self.remove(key)
            return
        if not isinstance(key, str):
            raise ParameterTypeError(
                f"Parameter keys must be str, got {type(key).__name__}",
                details={"key": key},
            )
        if not isinstance(value, str):
            raise ParameterTypeError(
                f"Parameter '{key}' must be stored as str, got {type(value).__name__}",
                details={"key": key},
            )
        self._data[key] = value

    def has(self, key: str) -> bool:
        return key in self._data

    def has_any(self, keys: Iterable[str]) -> bool:
        """Return True if at least one of *keys* is present."""
        return any(key in self._data for key in keys)

    def remove(self, key: str) -> None:
        """Remove *key* if present; removing a missing key is a no-op."""
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def items(self) -> list[tuple[str, str]]:
        return list(self._data.items())

    def copy(self) -> ParameterBag:
        """Return an independent copy preserving insertion order."""
        return ParameterBag(self._data)

    def to_dict(self) -> dict[str, str]:
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParameterBag):
            return self._data == other._data
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ParameterBag({self._data!r})"
