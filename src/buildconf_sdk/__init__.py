"""buildconf SDK: typed builders for build server configuration entities."""

from buildconf_sdk.__version__ import __version__
from buildconf_sdk.containers import BuildFeatures, ProjectFeatures, Triggers
from buildconf_sdk.core.bag import ParameterBag
from buildconf_sdk.core.codecs import BooleanCodec, EnumCodec, IntCodec, StringCodec
from buildconf_sdk.core.compound import CompoundParam, CompoundParameter
from buildconf_sdk.core.config import SdkConfig
from buildconf_sdk.core.constants import ApiVersion, EntityKind
from buildconf_sdk.core.entity import BuildFeature, Entity, ProjectFeature, Trigger
from buildconf_sdk.core.exceptions import (
    BuildConfError,
    ConfigurationError,
    EntityNotFoundError,
    EntityValidationError,
    MalformedValueError,
    ParameterTypeError,
    SchemaError,
    UnknownEnumValueError,
    UnknownVariantError,
)
from buildconf_sdk.core.params import (
    BooleanParameter,
    EnumParameter,
    IntParameter,
    StringParameter,
)
from buildconf_sdk.core.validation import (
    ErrorConsumer,
    ValidationError,
    require_valid,
    validate,
)
from buildconf_sdk.schema.models import EntitySchema, FieldSpec, VariantSpec
from buildconf_sdk.schema.registry import SchemaRegistry
from buildconf_sdk.utils.logging import configure_logging, get_logger

__all__ = [
    "__version__",
    # containers
    "BuildFeatures",
    "ProjectFeatures",
    "Triggers",
    # runtime
    "ParameterBag",
    "BooleanCodec",
    "EnumCodec",
    "IntCodec",
    "StringCodec",
    "BooleanParameter",
    "EnumParameter",
    "IntParameter",
    "StringParameter",
    "CompoundParam",
    "CompoundParameter",
    "Entity",
    "BuildFeature",
    "ProjectFeature",
    "Trigger",
    "ErrorConsumer",
    "ValidationError",
    "validate",
    "require_valid",
    # schema
    "EntitySchema",
    "FieldSpec",
    "VariantSpec",
    "SchemaRegistry",
    # config / constants
    "SdkConfig",
    "ApiVersion",
    "EntityKind",
    # errors
    "BuildConfError",
    "ConfigurationError",
    "EntityNotFoundError",
    "EntityValidationError",
    "MalformedValueError",
    "ParameterTypeError",
    "SchemaError",
    "UnknownEnumValueError",
    "UnknownVariantError",
    # logging
    "configure_logging",
    "get_logger",
]
