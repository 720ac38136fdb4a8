"""Codecs converting native Python values to and from stored parameter strings.

Every codec follows the same contract:

* ``encode(None)`` returns ``None``, which the caller turns into a key removal.
* ``encode`` may also return ``None`` for a value the codec treats as
  "unset" (see :class:`BooleanCodec` with an empty ``false_value``).
* ``decode`` only ever sees present values and raises
  :class:`MalformedValueError` when the stored string does not fit.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

from buildconf_sdk.core.exceptions import (
    MalformedValueError,
    ParameterTypeError,
    UnknownEnumValueError,
)

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


class Codec(Generic[T]):
    """Base codec.  Subclasses implement ``_encode`` and ``_decode``."""

    native_type: type | tuple[type, ...] = object

    def encode(self, value: T | None, key: str = "") -> str | None:
        if value is None:
            return None
        if not isinstance(value, self.native_type):
            raise ParameterTypeError(
                f"Parameter '{key}' expects {self.describe()}, got {type(value).__name__}",
                details={"key": key, "value": repr(value)},
            )
        return self._encode(value, key)

    def decode(self, raw: str, key: str = "") -> T:
        return self._decode(raw, key)

    def describe(self) -> str:
        return getattr(self.native_type, "__name__", str(self.native_type))

    def _encode(self, value: Any, key: str) -> str | None:
        raise NotImplementedError

    def _decode(self, raw: str, key: str) -> T:
        raise NotImplementedError


class StringCodec(Codec[str]):
    native_type = str

    def _encode(self, value: str, key: str) -> str:
        return value

    def _decode(self, raw: str, key: str) -> str:
        return raw


class BooleanCodec(Codec[bool]):
    """Boolean codec with configurable literals.

    Many server-side fields store ``"true"`` for enabled and nothing at all
    for disabled.  With ``false_value=""`` encoding ``False`` yields ``None``
    so the key is dropped, and reading it back gives ``None`` rather than
    ``False``.
    """

    native_type = bool

    def __init__(self, true_value: str = "true", false_value: str = "false") -> None:
        if true_value == false_value:
            raise ValueError("true_value and false_value must differ")
        self.true_value = true_value
        self.false_value = false_value

    def _encode(self, value: bool, key: str) -> str | None:
        if value:
            return self.true_value
        return self.false_value or None

    def _decode(self, raw: str, key: str) -> bool:
        if raw == self.true_value:
            return True
        if raw == self.false_value:
            return False
        raise MalformedValueError(
            f"Parameter '{key}' holds {raw!r}, expected "
            f"{self.true_value!r} or {self.false_value!r}",
            code="ERR_BOOLEAN",
            details={"key": key, "value": raw},
        )

    def __repr__(self) -> str:
        return f"BooleanCodec(true_value={self.true_value!r}, false_value={self.false_value!r})"


# ASCII digits with an optional leading minus
_DECIMAL = re.compile(r"-?[0-9]+")


class IntCodec(Codec[int]):
    native_type = int

    def encode(self, value: int | None, key: str = "") -> str | None:
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool):
            raise ParameterTypeError(
                f"Parameter '{key}' expects int, got bool",
                details={"key": key, "value": repr(value)},
            )
        return super().encode(value, key)

    def _encode(self, value: int, key: str) -> str:
        return str(value)

    def _decode(self, raw: str, key: str) -> int:
        if _DECIMAL.fullmatch(raw) is None:
            raise MalformedValueError(
                f"Parameter '{key}' holds {raw!r}, which is not an integer",
                code="ERR_INTEGER",
                details={"key": key, "value": raw},
            )
        return int(raw)


class EnumCodec(Codec[E]):
    """Enum codec backed by an explicit member -> token table.

    Without a mapping each member is stored under its name.  Decoding never
    guesses: a token missing from the table raises
    :class:`UnknownEnumValueError`.
    """

    def __init__(self, enum_cls: type[E], mapping: Mapping[E, str] | None = None) -> None:
        self.enum_cls = enum_cls
        self.native_type = enum_cls
        if mapping is None:
            mapping = {member: member.name for member in enum_cls}
        missing = [m.name for m in enum_cls if m not in mapping]
        if missing:
            raise ValueError(f"Enum mapping for {enum_cls.__name__} is missing {missing}")
        self.mapping: dict[E, str] = dict(mapping)
        self._reverse: dict[str, E] = {token: member for member, token in self.mapping.items()}
        if len(self._reverse) != len(self.mapping):
            raise ValueError(f"Enum mapping for {enum_cls.__name__} has duplicate tokens")

    @property
    def tokens(self) -> list[str]:
        return list(self._reverse)

    def _encode(self, value: E, key: str) -> str:
        return self.mapping[value]

    def _decode(self, raw: str, key: str) -> E:
        try:
            return self._reverse[raw]
        except KeyError:
            raise UnknownEnumValueError(
                f"Parameter '{key}' holds unknown {self.enum_cls.__name__} token {raw!r}",
                code="ERR_ENUM",
                details={"key": key, "value": raw, "allowed": self.tokens},
            ) from None

    def __repr__(self) -> str:
        return f"EnumCodec({self.enum_cls.__name__})"
