"""Tests for containers.py — BuildFeatures, ProjectFeatures, Triggers."""
from __future__ import annotations

import pytest

from buildconf_sdk.catalog import v10, v2018_1, v2018_2, v2019_2
from buildconf_sdk.containers import BuildFeatures, ProjectFeatures, Triggers
from buildconf_sdk.core.config import SdkConfig
from buildconf_sdk.core.constants import ApiVersion
from buildconf_sdk.core.exceptions import ConfigurationError, EntityNotFoundError
from buildconf_sdk.schema.registry import SchemaRegistry


class TestConstruction:
    def test_default_version_from_config(self) -> None:
        assert BuildFeatures().version is ApiVersion.LATEST
        config = SdkConfig(default_version=ApiVersion.V2018_1)
        assert BuildFeatures(config=config).version is ApiVersion.V2018_1

    def test_explicit_version(self) -> None:
        assert Triggers("v10").version is ApiVersion.V10

    def test_unknown_version(self) -> None:
        with pytest.raises(ValueError):
            Triggers("v1999")

    def test_repr(self) -> None:
        assert repr(BuildFeatures("v2018_2")) == "BuildFeatures(version='v2018_2', items=0)"


class TestAdd:
    def test_feature_appends_in_order(self) -> None:
        features = BuildFeatures("v2018_2")
        disk = features.feature(v2018_2.FreeDiskSpace(required_space="1gb"))
        agent = features.feature(v2018_1.SshAgent(teamcity_ssh_key="k"))
        assert list(features) == [disk, agent]
        assert len(features) == 2
        assert features[1] is agent

    def test_wrong_kind_rejected(self) -> None:
        features = BuildFeatures()
        with pytest.raises(ConfigurationError, match="only accepts buildFeature"):
            features.add(v10.RetryBuildTrigger())  # type: ignore[arg-type]

    def test_trigger(self) -> None:
        triggers = Triggers("v10")
        triggers.trigger(v10.RetryBuildTrigger(attempts=2))
        assert triggers.to_list() == [
            {"type": "retryBuildTrigger", "params": {"retryAttempts": "2"}}
        ]

    def test_extend(self) -> None:
        features = ProjectFeatures("v10")
        features.extend([v10.GoogleConnection(), v10.SlackConnection()])
        assert [type(f).__name__ for f in features] == ["GoogleConnection", "SlackConnection"]


class TestCreate:
    def test_create_by_name(self) -> None:
        features = BuildFeatures("v2018_2")
        disk = features.create("FreeDiskSpace", required_space="5gb")
        assert type(disk) is v2018_2.FreeDiskSpace
        assert len(features) == 1

    def test_create_with_init(self) -> None:
        features = BuildFeatures("v2018_2")
        disk = features.create("FreeDiskSpace", lambda f: setattr(f, "fail_build", True))
        assert disk.params.get("free-space-fail-start") == "true"

    def test_create_unknown_name(self) -> None:
        with pytest.raises(EntityNotFoundError):
            BuildFeatures("v2018_2").create("SshAgent")

    def test_create_wrong_kind(self) -> None:
        with pytest.raises(ConfigurationError):
            Triggers("v2018_2").create("FreeDiskSpace")

    def test_custom_registry(self, registry: SchemaRegistry) -> None:
        registry.register(
            {
                "name": "Custom",
                "kind": "trigger",
                "version": "v10",
                "type": "custom",
                "fields": [{"name": "cron"}],
            }
        )
        triggers = Triggers("v10", registry=registry)
        triggers.create("Custom", cron="0 0 * * *")
        assert triggers.registry is registry
        assert triggers.to_list()[0]["params"] == {"cron": "0 0 * * *"}


class TestValidateAndLoad:
    def test_validate_prefixes_index(self) -> None:
        features = ProjectFeatures("v2019_2")
        features.feature(v10.GoogleConnection())
        features.feature(v2019_2.BugzillaIssueTracker(host="h"))
        errors = features.validate()
        assert [e.path for e in errors] == [
            "BugzillaIssueTracker[1].display_name",
            "BugzillaIssueTracker[1].issue_id_pattern",
        ]

    def test_load_round_trip(self) -> None:
        features = ProjectFeatures("v10")
        features.feature(v10.GoogleConnection(id="g", display_name="G"))
        features.feature(v10.SlackConnection(bot_token="xoxb"))

        restored = ProjectFeatures("v10")
        restored.load(features.to_list())
        assert list(restored) == list(features)
        assert [type(f) for f in restored] == [v10.GoogleConnection, v10.SlackConnection]
