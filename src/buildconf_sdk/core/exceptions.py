from __future__ import annotations

from typing import Any


class BuildConfError(Exception):
    """Base exception for all buildconf SDK errors.

    Attributes:
        code: Optional machine-readable error code (e.g. ``"ERR_ENUM"``).
        details: Arbitrary key/value context about the error.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(BuildConfError): ...


class SchemaError(BuildConfError): ...


class ParameterTypeError(BuildConfError, TypeError):
    """A native value of the wrong type was written to a typed parameter."""


# ---------------------------------------------------------------------------
# Malformed stored state (raised on read, never during validation)
# ---------------------------------------------------------------------------


class MalformedValueError(BuildConfError, ValueError):
    """A stored parameter value cannot be decoded by its codec.

    Indicates hand-edited or corrupted state that disagrees with the typed
    schema.  ``details`` carries the offending ``key`` and ``value``.
    """


class UnknownEnumValueError(MalformedValueError):
    """A stored enum token has no entry in the field's mapping table."""


class UnknownVariantError(MalformedValueError):
    """A compound discriminator token has no registered variant."""


# ---------------------------------------------------------------------------
# Lookup / validation
# ---------------------------------------------------------------------------


class EntityNotFoundError(BuildConfError, KeyError):
    """No schema is registered under the requested version and name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class EntityValidationError(BuildConfError):
    """Raised by :func:`require_valid` when an entity has validation errors.

    The collected errors are available as ``errors``.
    """

    def __init__(self, message: str, errors: list[Any]) -> None:
        super().__init__(message, code="ERR_VALIDATION", details={"count": len(errors)})
        self.errors = errors
