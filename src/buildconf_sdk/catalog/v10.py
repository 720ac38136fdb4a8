"""Entity kinds of the ``v10`` API.

This generation predates mandatory-field validation: no field is mandatory.
"""

from __future__ import annotations

from typing import Any

from buildconf_sdk.core.constants import ApiVersion

VERSION = ApiVersion.V10

SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "GoogleConnection",
        "kind": "projectFeature",
        "version": VERSION,
        "type": "OAuthProvider",
        "description": "Project feature defining an OAuth connection settings for Google.",
        "fixed_params": {"providerType": "Google"},
        "fields": [
            {"name": "display_name"},
            {"name": "client_id", "key": "googleClientId"},
            {"name": "client_secret", "key": "secure:googleClientSecret"},
        ],
    },
    {
        "name": "SlackConnection",
        "kind": "projectFeature",
        "version": VERSION,
        "type": "OAuthProvider",
        "description": "Project feature defining a Slack connection.",
        "fixed_params": {"providerType": "slackConnection"},
        "fields": [
            {"name": "display_name"},
            {"name": "bot_token", "key": "secure:token"},
            {"name": "client_id"},
            {"name": "client_secret", "key": "secure:clientSecret"},
        ],
    },
    {
        "name": "RetryBuildTrigger",
        "kind": "trigger",
        "version": VERSION,
        "type": "retryBuildTrigger",
        "description": "Triggers the build if the previous build failed after a specified time delay.",
        "fields": [
            {"name": "delay_seconds", "kind": "integer", "key": "enqueueTimeout"},
            {"name": "attempts", "kind": "integer", "key": "retryAttempts"},
            {"name": "move_to_the_queue_top", "kind": "boolean"},
            {
                "name": "retry_with_the_same_revisions",
                "kind": "boolean",
                "key": "reRunBuildWithTheSameRevisions",
                "false_value": "",
            },
            {"name": "branch_filter"},
        ],
    },
]


def __getattr__(name: str) -> Any:
    from buildconf_sdk.catalog import entity_class

    return entity_class(VERSION, name)
