"""Mandatory-field validation.

Validation is a stateless walk over an entity and the active variant of each
of its compound fields.  Problems are collected, never raised, so callers can
report every missing property at once::

    errors = validate(feature)
    for error in errors:
        print(error.path, error.message)
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, ConfigDict

from buildconf_sdk.core.exceptions import EntityValidationError

if TYPE_CHECKING:
    from buildconf_sdk.core.entity import Parametrized

logger = structlog.get_logger(__name__)


class ValidationError(BaseModel):
    """A single validation problem.

    Attributes:
        property_path: Field names from the entity down to the offending
            property, e.g. ``("provider", "auth_type", "token")``.
        message: Human-readable description.
    """

    model_config = ConfigDict(frozen=True)

    property_path: tuple[str, ...]
    message: str

    @property
    def path(self) -> str:
        """Dotted form of :attr:`property_path`."""
        return ".".join(self.property_path)

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ErrorConsumer:
    """Collects :class:`ValidationError` objects during a validation walk.

    Nested scopes prefix every reported path with the enclosing field names.
    """

    def __init__(self) -> None:
        self._errors: list[ValidationError] = []
        self._prefix: list[str] = []

    @property
    def errors(self) -> list[ValidationError]:
        return list(self._errors)

    def qualify(self, name: str) -> str:
        """Return *name* prefixed with the current scope, dotted."""
        return ".".join([*self._prefix, name])

    def consume_property_error(self, name: str, message: str) -> None:
        path = tuple([*self._prefix, *name.split(".")])
        self._errors.append(ValidationError(property_path=path, message=message))

    @contextmanager
    def scope(self, *names: str) -> Iterator[ErrorConsumer]:
        """Report errors under ``names`` for the duration of the block."""
        self._prefix.extend(names)
        try:
            yield self
        finally:
            del self._prefix[len(self._prefix) - len(names):]

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)


def validate(entity: Parametrized) -> list[ValidationError]:
    """Validate *entity* and return every problem found.

    Never raises for missing or optional fields.
    """
    consumer = ErrorConsumer()
    entity.validate(consumer)
    logger.debug(
        "entity_validated",
        entity=type(entity).__name__,
        errors=len(consumer),
    )
    return consumer.errors


def require_valid(entity: Parametrized) -> None:
    """Raise :class:`EntityValidationError` when *entity* has any problem."""
    errors = validate(entity)
    if errors:
        summary = "; ".join(str(e) for e in errors)
        raise EntityValidationError(
            f"{type(entity).__name__} is invalid: {summary}", errors
        )
