"""Typed parameter descriptors.

Each descriptor is a typed getter/setter pair bound to one bag key through
a codec.  Declare them in a class body the same way pydantic fields are
declared::

    class FreeDiskSpace(BuildFeature):
        type = "jetbrains.agent.free.space"

        required_space = StringParameter("free-space-work")
        fail_build = BooleanParameter("free-space-fail-start", false_value="")

When no key is given the attribute name is converted to camelCase
(``branch_filter`` -> ``"branchFilter"``).
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from buildconf_sdk.core.codecs import (
    BooleanCodec,
    Codec,
    EnumCodec,
    IntCodec,
    StringCodec,
)

if TYPE_CHECKING:
    from buildconf_sdk.core.entity import Parametrized
    from buildconf_sdk.core.validation import ErrorConsumer

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


def camel_case(name: str) -> str:
    """Convert ``snake_case`` to ``camelCase``."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class Parameter(Generic[T]):
    """Base descriptor for a field stored in the owner's parameter bag.

    Args:
        key: Bag key.  Defaults to the camelCase attribute name.
        mandatory: Report a validation error when no accepted key is present.
        aliases: Additional keys accepted on read and during validation.
            Writing always targets ``key`` and drops the aliases.
        deprecated: Deprecation message emitted on every access.
        replaced_by: Attribute name of the field superseding this one.  A
            deprecated field sharing its replacement's key is never
            validated on its own; errors are reported for the replacement.
    """

    kind = "parameter"

    def __init__(
        self,
        key: str | None = None,
        *,
        codec: Codec[T],
        mandatory: bool = False,
        aliases: Iterable[str] = (),
        deprecated: str | None = None,
        replaced_by: str | None = None,
    ) -> None:
        self._key = key
        self.codec = codec
        self.mandatory = mandatory
        self.aliases: tuple[str, ...] = tuple(aliases)
        self.deprecated = deprecated
        self.replaced_by = replaced_by
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self._key is None:
            self._key = camel_case(name)

    @property
    def key(self) -> str:
        if self._key is None:
            raise AttributeError(f"{type(self).__name__} is not bound to a class attribute")
        return self._key

    @property
    def accepted_keys(self) -> tuple[str, ...]:
        return (self.key, *self.aliases)

    def owned_keys(self) -> set[str]:
        """Every bag key this field may write or read."""
        return set(self.accepted_keys)

    @overload
    def __get__(self, obj: None, objtype: type | None = None) -> Parameter[T]: ...

    @overload
    def __get__(self, obj: Parametrized, objtype: type | None = None) -> T | None: ...

    def __get__(self, obj: Parametrized | None, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        self._warn_deprecated()
        return self.read(obj)

    def __set__(self, obj: Parametrized, value: T | None) -> None:
        self._warn_deprecated()
        self.write(obj, value)

    def __delete__(self, obj: Parametrized) -> None:
        self.write(obj, None)

    def read(self, obj: Parametrized) -> T | None:
        bag = obj.params
        for key in self.accepted_keys:
            raw = bag.get(key)
            if raw is not None:
                return self.codec.decode(raw, key)
        return None

    def write(self, obj: Parametrized, value: T | None) -> None:
        encoded = self.codec.encode(value, self.key)
        for alias in self.aliases:
            obj.params.remove(alias)
        obj.params.set(self.key, encoded)

    def is_set(self, obj: Parametrized) -> bool:
        return obj.params.has_any(self.accepted_keys)

    def validate(self, obj: Parametrized, consumer: ErrorConsumer) -> None:
        if not self.mandatory or self.replaced_by is not None:
            return
        if not self.is_set(obj):
            consumer.consume_property_error(
                self.name, f"mandatory '{consumer.qualify(self.name)}' property is not specified"
            )

    def _warn_deprecated(self) -> None:
        if self.deprecated:
            warnings.warn(
                f"'{self.name}' is deprecated: {self.deprecated}",
                DeprecationWarning,
                stacklevel=3,
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, key={self._key!r})"


class StringParameter(Parameter[str]):
    kind = "string"

    def __init__(self, key: str | None = None, **kwargs: Any) -> None:
        super().__init__(key, codec=StringCodec(), **kwargs)


class BooleanParameter(Parameter[bool]):
    kind = "boolean"

    def __init__(
        self,
        key: str | None = None,
        *,
        true_value: str = "true",
        false_value: str = "false",
        **kwargs: Any,
    ) -> None:
        super().__init__(key, codec=BooleanCodec(true_value, false_value), **kwargs)


class IntParameter(Parameter[int]):
    kind = "integer"

    def __init__(self, key: str | None = None, **kwargs: Any) -> None:
        super().__init__(key, codec=IntCodec(), **kwargs)


class EnumParameter(Parameter[E]):
    kind = "enum"

    def __init__(
        self,
        enum_cls: type[E],
        key: str | None = None,
        *,
        mapping: Mapping[E, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(key, codec=EnumCodec(enum_cls, mapping), **kwargs)
        self.enum_cls = enum_cls
