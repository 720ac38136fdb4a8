"""Entity kinds of the ``v2019_2`` API."""

from __future__ import annotations

from typing import Any

from buildconf_sdk.core.constants import ApiVersion

VERSION = ApiVersion.V2019_2

SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "BugzillaIssueTracker",
        "kind": "projectFeature",
        "version": VERSION,
        "type": "IssueTracker",
        "description": "Project feature enabling integration with Bugzilla.",
        "fixed_params": {"type": "bugzilla"},
        "fields": [
            {"name": "display_name", "key": "name", "mandatory": True},
            {"name": "host", "mandatory": True},
            {"name": "user_name", "key": "username"},
            {"name": "password", "key": "secure:password"},
            {"name": "issue_id_pattern", "key": "pattern", "mandatory": True},
        ],
    },
]


def __getattr__(name: str) -> Any:
    from buildconf_sdk.catalog import entity_class

    return entity_class(VERSION, name)
