from __future__ import annotations

import os
from typing import Any, Literal

from pydantic import BaseModel

from buildconf_sdk.core.constants import ApiVersion


class SdkConfig(BaseModel):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = True
    default_version: ApiVersion = ApiVersion.LATEST
    """API version used by containers when none is passed explicitly."""

    @classmethod
    def from_env(cls) -> SdkConfig:
        """Create a :class:`SdkConfig` from ``BUILDCONF_*`` environment variables.

        Reads the following env vars (all optional):

        * ``BUILDCONF_LOG_LEVEL`` → ``log_level`` (``DEBUG``, ``INFO``, ``WARNING``, ``ERROR``)
        * ``BUILDCONF_LOG_JSON`` → ``log_json`` (``1``/``true``/``yes`` enable JSON output)
        * ``BUILDCONF_DEFAULT_VERSION`` → ``default_version`` (e.g. ``v2018_2``)

        Any variable that is not set or is empty is left at its default value.
        """
        kwargs: dict[str, Any] = {}

        log_level = os.environ.get("BUILDCONF_LOG_LEVEL")
        if log_level:
            kwargs["log_level"] = log_level.upper()

        log_json = os.environ.get("BUILDCONF_LOG_JSON")
        if log_json:
            kwargs["log_json"] = log_json.strip().lower() in ("1", "true", "yes", "on")

        version = os.environ.get("BUILDCONF_DEFAULT_VERSION")
        if version:
            kwargs["default_version"] = version

        return cls(**kwargs)
