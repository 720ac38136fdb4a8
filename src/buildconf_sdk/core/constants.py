from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    BUILD_FEATURE = "buildFeature"
    PROJECT_FEATURE = "projectFeature"
    TRIGGER = "trigger"


class ApiVersion(StrEnum):
    V10 = "v10"
    V2017_2 = "v2017_2"
    V2018_1 = "v2018_1"
    V2018_2 = "v2018_2"
    V2019_2 = "v2019_2"
    LATEST = "latest"


# Parameter keys carrying secrets start with this prefix and are masked in reprs.
SECURE_PREFIX = "secure:"
MASKED_VALUE = "******"
