"""Entity kinds of the ``v2018_2`` API."""

from __future__ import annotations

from typing import Any

from buildconf_sdk.core.constants import ApiVersion

VERSION = ApiVersion.V2018_2

_VCS_ROOT_AUTH: dict[str, Any] = {
    "name": "VcsRoot",
    "token": "vcsRoot",
    "description": "Use credentials from the VCS root.",
}
_TOKEN_AUTH: dict[str, Any] = {
    "name": "Token",
    "token": "token",
    "description": "Authenticate with an access token.",
    "fields": [{"name": "token", "key": "secure:accessToken", "mandatory": True}],
}
_PASSWORD_AUTH: dict[str, Any] = {
    "name": "Password",
    "token": "password",
    "description": "Authenticate with a username and password.",
    "fields": [
        {"name": "username", "mandatory": True},
        {"name": "password", "key": "secure:password", "mandatory": True},
    ],
}


def _auth(*variants: dict[str, Any], key: str = "authenticationType") -> dict[str, Any]:
    return {"name": "auth_type", "kind": "compound", "key": key, "variants": list(variants)}


_PROVIDERS: list[dict[str, Any]] = [
    {
        "name": "Github",
        "token": "github",
        "fields": [
            {"name": "server_url"},
            _auth(_VCS_ROOT_AUTH, _TOKEN_AUTH),
            {"name": "filter_source_branch"},
            {"name": "filter_target_branch"},
            {
                "name": "filter_author_role",
                "kind": "enum",
                "enum_name": "GitHubRoleFilter",
                "options": {
                    "MEMBER": "MEMBER",
                    "MEMBER_OR_COLLABORATOR": "MEMBER_OR_COLLABORATOR",
                    "EVERYBODY": "EVERYBODY",
                },
            },
        ],
    },
    {
        "name": "Gitlab",
        "token": "gitlab",
        "fields": [
            {"name": "server_url"},
            _auth(_VCS_ROOT_AUTH, _TOKEN_AUTH),
            {"name": "filter_source_branch"},
            {"name": "filter_target_branch"},
        ],
    },
    {
        "name": "BitbucketServer",
        "token": "bitbucketServer",
        "fields": [
            {"name": "server_url"},
            _auth(_VCS_ROOT_AUTH, _PASSWORD_AUTH, _TOKEN_AUTH),
            {"name": "filter_source_branch"},
            {"name": "filter_target_branch"},
            {"name": "use_pull_request_branches", "kind": "boolean", "key": "useRequestBranches"},
        ],
    },
    {
        "name": "BitbucketCloud",
        "token": "bitbucketCloud",
        "fields": [
            _auth(_VCS_ROOT_AUTH, _PASSWORD_AUTH),
            {"name": "filter_target_branch"},
        ],
    },
    {
        "name": "AzureDevOps",
        "token": "azureDevOps",
        "fields": [
            {"name": "project_url"},
            _auth(_TOKEN_AUTH),
            {"name": "filter_source_branch"},
            {"name": "filter_target_branch"},
        ],
    },
    {
        "name": "JetbrainsSpace",
        "token": "jetbrainsSpace",
        "fields": [
            {"name": "filter_target_branch"},
            _auth(
                {
                    "name": "Connection",
                    "token": "spaceCredentialsConnection",
                    "fields": [
                        {"name": "connection_id", "key": "spaceConnectionId", "mandatory": True},
                    ],
                },
                key="spaceCredentialsType",
            ),
        ],
    },
]

SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "FreeDiskSpace",
        "kind": "buildFeature",
        "version": VERSION,
        "type": "jetbrains.agent.free.space",
        "description": "Ensures free disk space on the agent before the build.",
        "fields": [
            {"name": "required_space", "key": "free-space-work"},
            {
                "name": "fail_build",
                "kind": "boolean",
                "key": "free-space-fail-start",
                "false_value": "",
            },
        ],
    },
    {
        "name": "GoogleConnection",
        "kind": "projectFeature",
        "version": VERSION,
        "type": "OAuthProvider",
        "description": "Project feature defining an OAuth connection settings for Google.",
        "fixed_params": {"providerType": "Google"},
        "fields": [
            {"name": "display_name", "mandatory": True},
            {"name": "client_id", "key": "googleClientId", "mandatory": True},
            {"name": "client_secret", "key": "secure:googleClientSecret", "mandatory": True},
        ],
    },
    {
        "name": "PullRequests",
        "kind": "buildFeature",
        "version": VERSION,
        "type": "pullRequests",
        "description": "Loads pull request information from the code hosting provider.",
        "fields": [
            {
                "name": "vcs_root_ext_id",
                "key": "vcsRootId",
            },
            {
                "name": "provider",
                "kind": "compound",
                "key": "providerType",
                "mandatory": True,
                "variants": _PROVIDERS,
            },
        ],
    },
]


def __getattr__(name: str) -> Any:
    from buildconf_sdk.catalog import entity_class

    return entity_class(VERSION, name)
