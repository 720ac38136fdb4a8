"""Entity base classes.

An entity is a build feature, project feature or trigger: a fixed ``type``
discriminator plus a :class:`ParameterBag`.  Fields are declared with the
descriptors from :mod:`buildconf_sdk.core.params` and
:mod:`buildconf_sdk.core.compound`.

Entities can be populated three ways, applied in this order::

    feature = FreeDiskSpace(
        lambda f: setattr(f, "fail_build", True),   # init callable, last
        base=template_feature,                      # copied first
        required_space="10gb",                      # keyword fields
    )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, Self

from buildconf_sdk.core.bag import ParameterBag
from buildconf_sdk.core.constants import MASKED_VALUE, SECURE_PREFIX, EntityKind
from buildconf_sdk.core.exceptions import ConfigurationError
from buildconf_sdk.core.params import Parameter
from buildconf_sdk.core.validation import ErrorConsumer


class Parametrized:
    """Anything backed by a parameter bag: entities and compound variants."""

    _parameters: ClassVar[dict[str, Parameter[Any]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        collected: dict[str, Parameter[Any]] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Parameter):
                    collected[name] = attr
        cls._parameters = collected

    def __init__(self, params: ParameterBag | None = None) -> None:
        self.params = params if params is not None else ParameterBag()

    @classmethod
    def parameters(cls) -> dict[str, Parameter[Any]]:
        """Declared fields in definition order, inherited ones first."""
        return dict(cls._parameters)

    @classmethod
    def owned_keys(cls) -> set[str]:
        keys: set[str] = set()
        for parameter in cls._parameters.values():
            keys |= parameter.owned_keys()
        return keys

    def param(self, key: str, value: str | None) -> None:
        """Set a raw parameter, bypassing typed fields."""
        self.params.set(key, value)

    def has_param(self, key: str) -> bool:
        return self.params.has(key)

    def validate(self, consumer: ErrorConsumer) -> None:
        for parameter in self._parameters.values():
            parameter.validate(self, consumer)

    def _apply_fields(self, fields: dict[str, Any]) -> None:
        for name, value in fields.items():
            if name not in self._parameters:
                raise ConfigurationError(
                    f"{type(self).__name__} has no field '{name}'",
                    details={"field": name, "known": sorted(self._parameters)},
                )
            setattr(self, name, value)

    def _masked_params(self) -> dict[str, str]:
        return {
            key: MASKED_VALUE if key.startswith(SECURE_PREFIX) else value
            for key, value in self.params.items()
        }


class Entity(Parametrized):
    """A configurable object with a fixed type discriminator.

    Subclasses set ``entity_type`` and, optionally, ``fixed_params`` which
    are written on construction (e.g. ``{"providerType": "Google"}``).

    Args:
        init: Callable receiving the new entity, run after keyword fields.
        base: Entity whose parameters are copied as the starting state.
            Later changes never affect *base*.
        id: Optional entity id (project features use it for references).
        **fields: Initial values for declared fields.
    """

    entity_type: ClassVar[str] = ""
    kind: ClassVar[EntityKind | None] = None
    fixed_params: ClassVar[dict[str, str]] = {}
    schema: ClassVar[Any] = None

    def __init__(
        self,
        init: Callable[[Self], Any] | None = None,
        *,
        base: Entity | None = None,
        id: str | None = None,
        **fields: Any,
    ) -> None:
        if not self.entity_type:
            raise ConfigurationError(f"{type(self).__name__} does not declare an entity_type")
        if base is not None:
            if not isinstance(base, Entity) or base.type != self.entity_type:
                raise ConfigurationError(
                    f"Cannot base {type(self).__name__} on {type(base).__name__}",
                    details={"expected_type": self.entity_type},
                )
            super().__init__(base.params.copy())
            self.id = id if id is not None else base.id
        else:
            super().__init__()
            self.id = id
        self._type = self.entity_type
        for key, value in self.fixed_params.items():
            self.params.set(key, value)
        self._apply_fields(fields)
        if init is not None:
            init(self)

    @property
    def type(self) -> str:
        """The discriminator; fixed for the lifetime of the entity."""
        return self._type

    def copy(self, **fields: Any) -> Self:
        """Return a new entity based on this one with *fields* applied."""
        return type(self)(base=self, **fields)

    def to_dict(self) -> dict[str, Any]:
        """Serializer hand-off: type, optional id, and params in insertion order."""
        result: dict[str, Any] = {"type": self.type}
        if self.id is not None:
            result["id"] = self.id
        result["params"] = self.params.to_dict()
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.id == other.id
            and self.params == other.params
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        id_part = f"id={self.id!r}, " if self.id is not None else ""
        return f"{type(self).__name__}({id_part}type={self.type!r}, params={self._masked_params()!r})"


class BuildFeature(Entity):
    kind = EntityKind.BUILD_FEATURE


class ProjectFeature(Entity):
    kind = EntityKind.PROJECT_FEATURE


class Trigger(Entity):
    kind = EntityKind.TRIGGER
