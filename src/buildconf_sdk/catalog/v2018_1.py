"""Entity kinds of the ``v2018_1`` API."""

from __future__ import annotations

from typing import Any

from buildconf_sdk.core.constants import ApiVersion

VERSION = ApiVersion.V2018_1

SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "AutoMerge",
        "kind": "buildFeature",
        "version": VERSION,
        "type": "AutoMergeFeature",
        "description": "Build feature enabling automatic merge in a build configuration or template.",
        "fields": [
            {"name": "branch_filter", "key": "teamcity.automerge.srcBranchFilter", "mandatory": True},
            {"name": "destination_branch", "key": "teamcity.automerge.dstBranch"},
            {"name": "commit_message", "key": "teamcity.automerge.message"},
            {
                "name": "merge_policy",
                "kind": "enum",
                "key": "teamcity.merge.policy",
                "enum_name": "MergePolicy",
                "options": {
                    "FAST_FORWARD": "fastForward",
                    "ALWAYS_MERGE": "alwaysCreateMergeCommit",
                },
            },
            # free-form on the server; MergeCondition lists the known tokens
            {"name": "merge_condition", "key": "teamcity.automerge.buildStatusCondition"},
            {
                "name": "run_policy",
                "kind": "enum",
                "key": "teamcity.automerge.run.policy",
                "enum_name": "RunPolicy",
                "options": {
                    "BEFORE_BUILD_FINISH": "runBeforeBuildFinish",
                    "AFTER_BUILD_FINISH": "runAfterBuildFinish",
                },
            },
        ],
    },
    {
        "name": "SshAgent",
        "kind": "buildFeature",
        "version": VERSION,
        "type": "ssh-agent-build-feature",
        "description": "Runs an SSH agent during a build with the specified SSH key loaded.",
        "fields": [
            {"name": "teamcity_ssh_key", "mandatory": True},
            {"name": "passphrase", "key": "secure:passphrase"},
        ],
    },
]

# Known tokens for AutoMerge.merge_condition.
MERGE_CONDITIONS: dict[str, str] = {
    "SUCCESSFUL_BUILD": "successful",
    "NO_NEW_FAILED_TESTS": "noNewTests",
}


def __getattr__(name: str) -> Any:
    from buildconf_sdk.catalog import entity_class

    return entity_class(VERSION, name)
