"""Tests for the versioned entity catalog."""
from __future__ import annotations

import warnings

import pytest

from buildconf_sdk.catalog import create, default_registry, latest, v10, v2017_2, v2018_1, v2018_2, v2019_2
from buildconf_sdk.core.constants import ApiVersion, EntityKind
from buildconf_sdk.core.exceptions import UnknownEnumValueError, UnknownVariantError
from buildconf_sdk.core.validation import validate
from buildconf_sdk.schema.registry import SchemaRegistry


def _paths(entity: object) -> list[str]:
    return [error.path for error in validate(entity)]  # type: ignore[arg-type]


# ------------------------------------------------------------------ #
# Catalog plumbing
# ------------------------------------------------------------------ #


class TestCatalogModules:
    def test_default_registry_is_cached(self) -> None:
        assert default_registry() is default_registry()

    def test_every_version_registered(self, catalog: SchemaRegistry) -> None:
        assert catalog.versions() == list(ApiVersion)

    def test_module_attribute_resolves_class(self, catalog: SchemaRegistry) -> None:
        assert v2018_2.FreeDiskSpace is catalog.get("v2018_2", "FreeDiskSpace")
        assert v2018_2.FreeDiskSpace.__module__ == "buildconf_sdk.catalog.v2018_2"

    def test_unknown_attribute(self) -> None:
        with pytest.raises(AttributeError, match="Unknown entity 'Nope'"):
            getattr(v2018_2, "Nope")

    def test_versions_do_not_share_classes(self) -> None:
        assert v10.GoogleConnection is not v2018_2.GoogleConnection

    def test_kinds(self, catalog: SchemaRegistry) -> None:
        assert catalog.names("v10", EntityKind.TRIGGER) == ["RetryBuildTrigger"]
        assert catalog.names("v2017_2", EntityKind.PROJECT_FEATURE) == [
            "AzureDevopsConnection",
            "BuildReportTab",
        ]

    def test_create_helper(self) -> None:
        agent = create("v2018_1", "SshAgent", teamcity_ssh_key="deploy")
        assert type(agent) is v2018_1.SshAgent

    def test_load_picks_class_by_fixed_params(self, catalog: SchemaRegistry) -> None:
        slack = catalog.load(
            "v10", {"type": "OAuthProvider", "params": {"providerType": "slackConnection"}}
        )
        assert type(slack) is v10.SlackConnection


# ------------------------------------------------------------------ #
# Project features
# ------------------------------------------------------------------ #


class TestConnections:
    def test_v10_has_no_mandatory_fields(self, catalog: SchemaRegistry) -> None:
        for name in catalog.names("v10"):
            assert validate(catalog.create("v10", name)) == []

    def test_google_connection_fixed_params(self) -> None:
        google = v2018_2.GoogleConnection(display_name="Google", client_id="id")
        assert google.params.to_dict() == {
            "providerType": "Google",
            "displayName": "Google",
            "googleClientId": "id",
        }
        assert _paths(google) == ["client_secret"]

    def test_secret_is_masked_in_repr(self) -> None:
        google = v10.GoogleConnection(client_secret="credentialsJSON:s3cr3t")
        assert "s3cr3t" not in repr(google)
        assert "******" in repr(google)
        assert google.params.get("secure:googleClientSecret") == "credentialsJSON:s3cr3t"

    def test_slack_bot_token_key(self) -> None:
        slack = v10.SlackConnection(bot_token="xoxb")
        assert slack.params.get("secure:token") == "xoxb"

    def test_azure_devops_connection(self) -> None:
        conn = v2017_2.AzureDevopsConnection(display_name="ADO")
        assert conn.params.get("providerType") == "tfs"
        assert conn.params.get("type") == "token"
        assert _paths(conn) == ["server_url", "access_token"]

    def test_build_report_tab(self) -> None:
        tab = v2017_2.BuildReportTab(title="Coverage", start_page="coverage.zip!index.html")
        assert validate(tab) == []
        assert tab.params.get("startPage") == "coverage.zip!index.html"

    def test_bugzilla_reports_every_missing_field(self) -> None:
        tracker = v2019_2.BugzillaIssueTracker(host="https://bugzilla.example.com")
        errors = validate(tracker)
        assert [e.path for e in errors] == ["display_name", "issue_id_pattern"]
        assert errors[0].message == "mandatory 'display_name' property is not specified"

    def test_bugzilla_pattern_leaves_display_name(self) -> None:
        tracker = v2019_2.BugzillaIssueTracker(host="https://bugzilla.example.com")
        tracker.issue_id_pattern = r"#(\d+)"
        assert _paths(tracker) == ["display_name"]

    def test_bugzilla_complete(self) -> None:
        tracker = v2019_2.BugzillaIssueTracker(
            display_name="Bugzilla",
            host="https://bugzilla.example.com",
            issue_id_pattern=r"#(\d+)",
        )
        assert validate(tracker) == []
        assert tracker.params.get("name") == "Bugzilla"
        assert tracker.params.get("pattern") == r"#(\d+)"


# ------------------------------------------------------------------ #
# Build features and triggers
# ------------------------------------------------------------------ #


class TestBuildFeatures:
    def test_free_disk_space_true(self) -> None:
        feature = v2018_2.FreeDiskSpace(required_space="10gb", fail_build=True)
        assert feature.params.to_dict() == {
            "free-space-work": "10gb",
            "free-space-fail-start": "true",
        }

    def test_free_disk_space_false_removes_key(self) -> None:
        feature = v2018_2.FreeDiskSpace(required_space="10gb", fail_build=True)
        feature.fail_build = False
        assert not feature.has_param("free-space-fail-start")
        assert feature.fail_build is None

    def test_auto_merge_enum_tokens(self) -> None:
        merge = v2018_1.AutoMerge(
            branch_filter="+:feature/*",
            merge_policy=v2018_1.AutoMerge.MergePolicy.FAST_FORWARD,
            run_policy=v2018_1.AutoMerge.RunPolicy.AFTER_BUILD_FINISH,
        )
        assert merge.params.get("teamcity.merge.policy") == "fastForward"
        assert merge.params.get("teamcity.automerge.run.policy") == "runAfterBuildFinish"
        assert validate(merge) == []

    def test_auto_merge_decodes_stored_token(self) -> None:
        merge = v2018_1.AutoMerge()
        merge.param("teamcity.merge.policy", "alwaysCreateMergeCommit")
        assert merge.merge_policy is v2018_1.AutoMerge.MergePolicy.ALWAYS_MERGE

    def test_auto_merge_unknown_token(self) -> None:
        merge = v2018_1.AutoMerge()
        merge.param("teamcity.merge.policy", "bogus")
        with pytest.raises(UnknownEnumValueError):
            merge.merge_policy

    def test_auto_merge_condition_is_free_form(self) -> None:
        merge = v2018_1.AutoMerge(merge_condition=v2018_1.MERGE_CONDITIONS["SUCCESSFUL_BUILD"])
        assert merge.params.get("teamcity.automerge.buildStatusCondition") == "successful"

    def test_ssh_agent_mandatory_key(self) -> None:
        assert _paths(v2018_1.SshAgent(passphrase="p")) == ["teamcity_ssh_key"]

    def test_retry_trigger_integers(self) -> None:
        trigger = v10.RetryBuildTrigger(delay_seconds=60, attempts=3)
        assert trigger.params.to_dict() == {"enqueueTimeout": "60", "retryAttempts": "3"}
        assert trigger.kind is EntityKind.TRIGGER

    def test_retry_trigger_same_revisions_flag(self) -> None:
        trigger = v10.RetryBuildTrigger(retry_with_the_same_revisions=True)
        assert trigger.params.get("reRunBuildWithTheSameRevisions") == "true"
        trigger.retry_with_the_same_revisions = False
        assert trigger.params.to_dict() == {}


class TestVcsLabeling:
    def test_deprecated_field_writes_shared_key(self) -> None:
        with pytest.warns(DeprecationWarning, match="use vcs_root_id instead"):
            labeling = latest.VcsLabeling(vcs_root_ext_id="MyRoot")
        assert labeling.vcs_root_id == "MyRoot"
        assert validate(labeling) == []

    def test_missing_root_reported_once(self) -> None:
        errors = validate(latest.VcsLabeling(labeling_pattern="build-%system.build.number%"))
        assert [e.path for e in errors] == ["vcs_root_id"]

    def test_current_field_does_not_warn(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            labeling = latest.VcsLabeling(vcs_root_id="__ALL__", successful_only=True)
        assert labeling.params.to_dict() == {"vcsRootId": "__ALL__", "successfulOnly": "true"}


# ------------------------------------------------------------------ #
# Pull requests: nested compound fields
# ------------------------------------------------------------------ #


class TestPullRequests:
    def test_variant_classes_attached(self) -> None:
        pr = v2018_2.PullRequests
        assert pr.Github.discriminator == "github"
        assert pr.Github.Token.discriminator == "token"
        assert pr.JetbrainsSpace.Connection.discriminator == "spaceCredentialsConnection"
        assert list(pr.Github.GitHubRoleFilter) == [
            pr.Github.GitHubRoleFilter.MEMBER,
            pr.Github.GitHubRoleFilter.MEMBER_OR_COLLABORATOR,
            pr.Github.GitHubRoleFilter.EVERYBODY,
        ]

    def test_missing_provider(self) -> None:
        errors = validate(v2018_2.PullRequests())
        assert [e.path for e in errors] == ["provider"]
        assert errors[0].message == "mandatory 'provider' property is not specified"

    def test_github_with_token(self) -> None:
        pr = v2018_2.PullRequests
        feature = pr(
            provider=pr.Github(
                server_url="https://api.github.com",
                auth_type=pr.Github.Token(token="credentialsJSON:abc"),
                filter_author_role=pr.Github.GitHubRoleFilter.MEMBER,
            )
        )
        assert feature.params.to_dict() == {
            "providerType": "github",
            "serverUrl": "https://api.github.com",
            "authenticationType": "token",
            "secure:accessToken": "credentialsJSON:abc",
            "filterAuthorRole": "MEMBER",
        }
        assert isinstance(feature.provider, pr.Github)
        assert feature.provider.auth_type.token == "credentialsJSON:abc"
        assert validate(feature) == []

    def test_nested_mandatory_path(self) -> None:
        pr = v2018_2.PullRequests
        feature = pr(provider=pr.Github(auth_type=pr.Github.Token()))
        errors = validate(feature)
        assert [e.path for e in errors] == ["provider.auth_type.token"]
        assert errors[0].message == (
            "mandatory 'provider.auth_type.token' property is not specified"
        )

    def test_switching_provider_clears_previous_keys(self) -> None:
        pr = v2018_2.PullRequests
        feature = pr(
            vcs_root_ext_id="Root",
            provider=pr.Github(
                server_url="https://api.github.com",
                auth_type=pr.Github.Token(token="t"),
            ),
        )
        feature.provider = pr.BitbucketCloud(
            auth_type=pr.BitbucketCloud.Password(username="u", password="p"),
        )
        assert feature.params.to_dict() == {
            "vcsRootId": "Root",
            "providerType": "bitbucketCloud",
            "authenticationType": "password",
            "username": "u",
            "secure:password": "p",
        }

    def test_switching_nested_auth_through_view(self) -> None:
        pr = v2018_2.PullRequests
        feature = pr(
            provider=pr.BitbucketServer(
                auth_type=pr.BitbucketServer.Password(username="u", password="p"),
                use_pull_request_branches=True,
            )
        )
        feature.provider.auth_type = pr.BitbucketServer.Token(token="t")
        assert feature.params.to_dict() == {
            "providerType": "bitbucketServer",
            "useRequestBranches": "true",
            "authenticationType": "token",
            "secure:accessToken": "t",
        }

    def test_space_connection(self) -> None:
        pr = v2018_2.PullRequests
        feature = pr(provider=pr.JetbrainsSpace(auth_type=pr.JetbrainsSpace.Connection()))
        assert feature.params.get("spaceCredentialsType") == "spaceCredentialsConnection"
        assert _paths(feature) == ["provider.auth_type.connection_id"]

    def test_unknown_provider_token(self) -> None:
        feature = v2018_2.PullRequests()
        feature.param("providerType", "gitea")
        with pytest.raises(UnknownVariantError):
            feature.provider
        assert _paths(feature) == ["provider"]

    def test_removing_provider(self) -> None:
        pr = v2018_2.PullRequests
        feature = pr(provider=pr.Gitlab(server_url="https://gitlab.com"))
        del feature.provider
        assert feature.params.to_dict() == {}
