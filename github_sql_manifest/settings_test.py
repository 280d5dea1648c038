"""Unit tests for settings loading and validation."""

import pytest
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .settings import Settings, load_settings, validate_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)  # no stray .env file
    for var in ["GITHUB_TOKEN", "MANIFEST_OWNER", "MANIFEST_MODE", "MANIFEST_PLATFORMS", "MANIFEST_KEYWORDS", "MANIFEST_TAGS"]:
        monkeypatch.delenv(var, raising=False)


def describe_Settings():
    def it_reads_the_token_and_prefixed_variables(monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        monkeypatch.setenv("MANIFEST_OWNER", "octo")
        monkeypatch.setenv("MANIFEST_PLATFORMS", '["leetcode"]')

        settings = Settings()

        assert settings.github_token == "ghp_test"
        assert settings.owner == "octo"
        assert settings.platforms == ["leetcode"]

    def it_splits_comma_separated_lists(monkeypatch):
        monkeypatch.setenv("MANIFEST_PLATFORMS", "leetcode, hackerrank")
        monkeypatch.setenv("MANIFEST_KEYWORDS", "sql")
        monkeypatch.setenv("MANIFEST_TAGS", "sql,,practice")

        settings = Settings(_env_file=None)

        assert settings.platforms == ["leetcode", "hackerrank"]
        assert settings.keywords == ["sql"]
        assert settings.tags == ["sql", "practice"]

    def it_keeps_list_overrides_as_given():
        assert Settings(_env_file=None, tags=["a,b"]).tags == ["a,b"]

    def it_rejects_a_broken_json_list(monkeypatch):
        monkeypatch.setenv("MANIFEST_PLATFORMS", "[leetcode")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def it_is_frozen():
        settings = Settings(owner="octo")

        with pytest.raises(ValidationError):
            settings.owner = "someone-else"

    def describe_resolved_title_style():
        def it_defaults_per_mode():
            assert Settings(mode="links").resolved_title_style == "folder"
            assert Settings(mode="content").resolved_title_style == "title"

        def it_prefers_the_explicit_style():
            assert Settings(mode="links", title_style="title").resolved_title_style == "title"


def describe_load_settings():
    def it_lets_overrides_win_over_the_environment(monkeypatch):
        monkeypatch.setenv("MANIFEST_OWNER", "from-env")

        assert load_settings(owner="from-cli").owner == "from-cli"

    def it_ignores_none_overrides(monkeypatch):
        monkeypatch.setenv("MANIFEST_OWNER", "from-env")

        assert load_settings(owner=None, mode=None).owner == "from-env"

    def it_rejects_invalid_values():
        with pytest.raises(ValidationError):
            load_settings(mode="pdf")


def describe_validate_settings():
    def it_requires_a_token_by_default():
        with pytest.raises(ConfigurationError, match="GITHUB_TOKEN"):
            validate_settings(Settings(owner="octo"))

    def it_allows_anonymous_runs_when_configured():
        validate_settings(Settings(owner="octo", require_token=False))

    def it_requires_an_owner():
        with pytest.raises(ConfigurationError, match="owner"):
            validate_settings(Settings(github_token="t"))
