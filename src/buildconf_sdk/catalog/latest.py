"""Entity kinds of the current, unversioned API."""

from __future__ import annotations

from typing import Any

from buildconf_sdk.core.constants import ApiVersion

VERSION = ApiVersion.LATEST

SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "VcsLabeling",
        "kind": "buildFeature",
        "version": VERSION,
        "type": "VcsLabeling",
        "description": "Build feature enabling automatic VCS labeling in a build.",
        "fields": [
            {
                "name": "vcs_root_ext_id",
                "key": "vcsRootId",
                "deprecated": "use vcs_root_id instead",
                "replaced_by": "vcs_root_id",
            },
            # "__ALL__" labels every VCS root
            {"name": "vcs_root_id", "mandatory": True},
            {"name": "labeling_pattern"},
            {"name": "successful_only", "kind": "boolean", "false_value": ""},
            {"name": "branch_filter"},
        ],
    },
]


def __getattr__(name: str) -> Any:
    from buildconf_sdk.catalog import entity_class

    return entity_class(VERSION, name)
