"""Entity kinds of the ``v2017_2`` API."""

from __future__ import annotations

from typing import Any

from buildconf_sdk.core.constants import ApiVersion

VERSION = ApiVersion.V2017_2

SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "AzureDevopsConnection",
        "kind": "projectFeature",
        "version": VERSION,
        "type": "OAuthProvider",
        "description": "Project feature for Azure DevOps or VSTS connection settings.",
        "fixed_params": {"providerType": "tfs", "type": "token"},
        "fields": [
            {"name": "display_name", "mandatory": True},
            {"name": "server_url", "mandatory": True},
            {"name": "access_token", "key": "secure:accessToken", "mandatory": True},
        ],
    },
    {
        "name": "BuildReportTab",
        "kind": "projectFeature",
        "version": VERSION,
        "type": "ReportTab",
        "description": "Project feature defining a custom tab shown for all builds of the project.",
        "fixed_params": {"type": "BuildReportTab"},
        "fields": [
            {"name": "title", "mandatory": True},
            {"name": "start_page"},
        ],
    },
]


def __getattr__(name: str) -> Any:
    from buildconf_sdk.catalog import entity_class

    return entity_class(VERSION, name)
