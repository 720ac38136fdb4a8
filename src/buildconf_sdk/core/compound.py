"""Compound parameters: fields whose value is one of a closed set of variants.

The active variant's token is stored under the field's key, and the
variant's own fields are stored *flattened* in the same bag as the owner.
For example a pull-request feature using GitHub with token auth stores::

    providerType        = "github"
    serverUrl           = "https://api.github.com"
    authenticationType  = "token"
    secure:accessToken  = "credentialsJSON:..."

Assigning a different variant first removes every key owned by the
previously active variant so nothing stale is left for the new one to read.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, ClassVar, Self

import structlog

from buildconf_sdk.core.bag import ParameterBag
from buildconf_sdk.core.codecs import StringCodec
from buildconf_sdk.core.entity import Parametrized
from buildconf_sdk.core.exceptions import (
    ParameterTypeError,
    SchemaError,
    UnknownVariantError,
)
from buildconf_sdk.core.params import Parameter

if TYPE_CHECKING:
    from buildconf_sdk.core.validation import ErrorConsumer

logger = structlog.get_logger(__name__)


class CompoundParam(Parametrized):
    """Base class for one variant of a compound field.

    A variant built on its own keeps a private bag.  Once assigned to an
    owner it becomes a view over the owner's bag, so further changes made
    through it land in the owner.
    """

    discriminator: ClassVar[str] = ""

    def __init__(self, init: Callable[[Self], Any] | None = None, **fields: Any) -> None:
        super().__init__()
        self._apply_fields(fields)
        if init is not None:
            init(self)

    @classmethod
    def view(cls, bag: ParameterBag) -> Self:
        """Return an instance reading and writing *bag* directly."""
        obj = cls.__new__(cls)
        Parametrized.__init__(obj, bag)
        return obj

    def snapshot(self) -> dict[str, str]:
        """Values of this variant's declared fields.

        Raw keys set through :meth:`param` are not part of the snapshot.
        """
        owned = self.owned_keys()
        return {key: value for key, value in self.params.items() if key in owned}

    def _rebind(self, bag: ParameterBag) -> None:
        self.params = bag

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompoundParam):
            return NotImplemented
        return type(self) is type(other) and self.snapshot() == other.snapshot()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        masked = self._masked_params()
        shown = {key: masked[key] for key in self.snapshot()}
        return f"{type(self).__name__}({shown!r})"


class CompoundParameter(Parameter[CompoundParam]):
    """Descriptor for a sealed-variant field.

    Args:
        key: Bag key holding the variant token.
        variants: The closed set of :class:`CompoundParam` subclasses.

    Reading an unregistered token raises :class:`UnknownVariantError`.
    """

    kind = "compound"

    def __init__(
        self,
        key: str | None = None,
        *,
        variants: Iterable[type[CompoundParam]],
        **kwargs: Any,
    ) -> None:
        super().__init__(key, codec=StringCodec(), **kwargs)
        self._by_token: dict[str, type[CompoundParam]] = {}
        for variant in variants:
            if not variant.discriminator:
                raise SchemaError(f"Variant {variant.__name__} does not declare a token")
            if variant.discriminator in self._by_token:
                raise SchemaError(
                    f"Duplicate variant token {variant.discriminator!r}",
                    details={"token": variant.discriminator},
                )
            self._by_token[variant.discriminator] = variant
        if not self._by_token:
            raise SchemaError("A compound parameter needs at least one variant")

    @property
    def variants(self) -> dict[str, type[CompoundParam]]:
        return dict(self._by_token)

    def create(
        self,
        token: str,
        init: Callable[[Any], Any] | None = None,
        **fields: Any,
    ) -> CompoundParam:
        """Build a standalone variant by token."""
        return self._variant_for(token)(init, **fields)

    def owned_keys(self) -> set[str]:
        keys = set(self.accepted_keys)
        for variant in self._by_token.values():
            keys |= variant.owned_keys()
        return keys

    def active_token(self, obj: Parametrized) -> str | None:
        for key in self.accepted_keys:
            raw = obj.params.get(key)
            if raw is not None:
                return raw
        return None

    def read(self, obj: Parametrized) -> CompoundParam | None:
        token = self.active_token(obj)
        if token is None:
            return None
        return self._variant_for(token).view(obj.params)

    def write(self, obj: Parametrized, value: CompoundParam | None) -> None:
        if value is not None and not isinstance(value, tuple(self._by_token.values())):
            raise ParameterTypeError(
                f"Parameter '{self.key}' expects one of "
                f"{sorted(v.__name__ for v in self._by_token.values())}, "
                f"got {type(value).__name__}",
                details={"key": self.key},
            )
        incoming = value.snapshot() if value is not None else {}
        previous = self.active_token(obj)
        self._clear(obj, previous)
        if value is not None:
            obj.params.set(self.key, value.discriminator)
            for key, raw in incoming.items():
                obj.params.set(key, raw)
            value._rebind(obj.params)
        logger.debug(
            "compound_variant_assigned",
            field=self.name,
            previous=previous,
            current=value.discriminator if value is not None else None,
        )

    def validate(self, obj: Parametrized, consumer: ErrorConsumer) -> None:
        super().validate(obj, consumer)
        if not self.is_set(obj):
            return
        try:
            variant = self.read(obj)
        except UnknownVariantError as exc:
            consumer.consume_property_error(self.name, str(exc))
            return
        if variant is not None:
            with consumer.scope(self.name):
                variant.validate(consumer)

    def _clear(self, obj: Parametrized, previous: str | None) -> None:
        if previous is not None:
            variant = self._by_token.get(previous)
            if variant is not None:
                shared = self._sibling_keys(type(obj))
                for key in variant.owned_keys() - shared:
                    obj.params.remove(key)
            else:
                logger.warning(
                    "compound_unknown_variant_replaced",
                    field=self.name,
                    token=previous,
                )
        for key in self.accepted_keys:
            obj.params.remove(key)

    def _sibling_keys(self, owner: type[Parametrized]) -> set[str]:
        keys: set[str] = set()
        for parameter in owner.parameters().values():
            if parameter is not self:
                keys |= parameter.owned_keys()
        return keys

    def _variant_for(self, token: str) -> type[CompoundParam]:
        try:
            return self._by_token[token]
        except KeyError:
            raise UnknownVariantError(
                f"Parameter '{self.key}' holds unknown variant {token!r}",
                code="ERR_VARIANT",
                details={"key": self.key, "value": token, "allowed": sorted(self._by_token)},
            ) from None
