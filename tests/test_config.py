"""Unit tests for configuration loading and validation."""

import warnings
from pathlib import Path

import pytest
from pydantic import ValidationError

from career_outlooks.config import ConfigurationError, load_config
from career_outlooks.config.environment import load_environment_config
from career_outlooks.config.loader import format_validation_errors
from career_outlooks.config.models import (
    DEFAULT_LMI_BASE_URL,
    AppConfig,
    DataConfig,
    MatchingConfig,
    OutlooksConfig,
)
from career_outlooks.config.validators import check_for_warnings
from career_outlooks.matching import RequirementMatcher, generate_pairs


def write_config(tmp_path: Path, content: str) -> Path:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(content)
    return config_file


BASE_DATA = """
data:
  unit_groups_path: unit_groups.json
  programs_path: programs.json
  outlooks_path: outlooks.json
"""


class TestLoadConfig:
    """Tests for load_config()."""

    def test_valid_config(self, fixtures_dir, clean_env):
        app_config, env_config = load_config(fixtures_dir / "valid_config.yaml")

        assert app_config.outlooks.source == "static"
        assert app_config.outlooks.cache_ttl_seconds == 30 * 86400
        assert app_config.matching.exclusion_phrases == ["years of experience"]
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert env_config.lmi_api_user_key is None
        assert env_config.environment == "local"

    def test_minimal_config_uses_defaults(self, fixtures_dir, clean_env):
        app_config, _ = load_config(fixtures_dir / "minimal_config.yaml")

        assert app_config.matching.exclusion_phrases == ["years of experience"]
        assert app_config.matching.credential_synonyms == {}
        assert app_config.outlooks.region_id == 59
        assert app_config.outlooks.base_url == DEFAULT_LMI_BASE_URL
        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "key-value"

    def test_data_paths_resolved_against_config_dir(self, fixtures_dir, clean_env):
        app_config, _ = load_config(fixtures_dir / "valid_config.yaml")

        assert app_config.data.unit_groups_path == fixtures_dir / "data" / "unit_groups.json"
        assert app_config.data.outlooks_path == fixtures_dir / "data" / "outlooks.yaml"

    def test_absolute_paths_kept(self, tmp_path, clean_env):
        absolute = tmp_path / "elsewhere" / "groups.json"
        config_file = write_config(
            tmp_path,
            f"""
data:
  unit_groups_path: {absolute}
  programs_path: programs.json
  outlooks_path: outlooks.json
""",
        )

        app_config, _ = load_config(config_file)

        assert app_config.data.unit_groups_path == absolute
        assert app_config.data.programs_path == tmp_path / "programs.json"

    def test_lmi_config_requires_user_key(self, fixtures_dir, clean_env):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(fixtures_dir / "lmi_config.yaml")

        assert "LMI_API_USER_KEY" in str(exc_info.value)

    def test_lmi_config_with_user_key(self, fixtures_dir, mock_env_vars):
        app_config, env_config = load_config(fixtures_dir / "lmi_config.yaml")

        assert app_config.outlooks.source == "lmi"
        assert app_config.outlooks.base_url == "https://lmi.example.test/gcapis"
        assert app_config.outlooks.cache_ttl_seconds == 60 * 86400
        assert env_config.lmi_api_user_key == "test-user-key"
        assert env_config.environment == "test"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_file = write_config(tmp_path, "data: [unclosed")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_config(config_file)

    def test_non_utf8_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_bytes(b"logging:\n  level: caf\xe9\n")

        with pytest.raises(ConfigurationError, match="not valid UTF-8"):
            load_config(config_file)

    def test_empty_file(self, tmp_path):
        config_file = write_config(tmp_path, "")

        with pytest.raises(ConfigurationError, match="empty"):
            load_config(config_file)

    def test_non_mapping_root(self, tmp_path):
        config_file = write_config(tmp_path, "- a\n- b\n")

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_config(config_file)

    def test_missing_data_section(self, tmp_path, clean_env):
        config_file = write_config(tmp_path, "logging:\n  level: INFO\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Missing required field: data" in exc_info.value.errors

    def test_static_source_needs_outlooks_path(self, tmp_path, clean_env):
        config_file = write_config(
            tmp_path,
            """
data:
  unit_groups_path: unit_groups.json
  programs_path: programs.json
outlooks:
  source: static
""",
        )

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert any("outlooks_path" in error for error in exc_info.value.errors)

    def test_invalid_source(self, tmp_path, clean_env):
        config_file = write_config(tmp_path, BASE_DATA + "outlooks:\n  source: carrier-pigeon\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert any("source" in error for error in exc_info.value.errors)

    def test_invalid_log_level_env(self, fixtures_dir, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError, match="Invalid LOG_LEVEL"):
            load_config(fixtures_dir / "minimal_config.yaml")

    def test_log_level_env_upper_cased(self, fixtures_dir, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        _, env_config = load_config(fixtures_dir / "minimal_config.yaml")

        assert env_config.log_level == "DEBUG"

    def test_empty_exclusion_list_keeps_experience_rule(self, tmp_path, clean_env):
        config_file = write_config(tmp_path, BASE_DATA + "matching:\n  exclusion_phrases: []\n")

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            app_config, _ = load_config(config_file)

        matcher = RequirementMatcher(app_config.matching.exclusion_phrases)
        document = {
            "unit_group": {"noc": "7237", "occupation": "Welders"},
            "items": ["Welding certificate and 3 years of experience."],
        }

        assert app_config.matching.exclusion_phrases == []
        assert matcher.match([document], generate_pairs(["certificate"], ["welding"])) == []

    def test_valid_config_emits_no_warnings(self, fixtures_dir, clean_env):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            load_config(fixtures_dir / "valid_config.yaml")


class TestConfigModels:
    """Tests for the pydantic configuration models."""

    def test_exclusion_phrases_normalized(self):
        config = MatchingConfig(exclusion_phrases=["  Years Of Experience ", "", "SUPERVISORY"])
        assert config.exclusion_phrases == ["years of experience", "supervisory"]

    def test_credential_synonyms_normalized(self):
        config = MatchingConfig(credential_synonyms={" Diploma ": ["College Diploma", " "]})
        assert config.credential_synonyms == {"diploma": ["college diploma"]}

    def test_credential_synonyms_need_entries(self):
        with pytest.raises(ValidationError, match="at least one synonym"):
            MatchingConfig(credential_synonyms={"diploma": []})

    def test_credential_label_cannot_be_blank(self):
        with pytest.raises(ValidationError):
            MatchingConfig(credential_synonyms={"  ": ["x"]})

    @pytest.mark.parametrize("ttl,seconds", [("60d", 5184000), ("P60D", 5184000), ("1h", 3600), ("PT90M", 5400)])
    def test_cache_ttl(self, ttl, seconds):
        assert OutlooksConfig(cache_ttl=ttl).cache_ttl_seconds == seconds

    @pytest.mark.parametrize("ttl", ["30s", "400d", "soon", "0d"])
    def test_cache_ttl_rejected(self, ttl):
        with pytest.raises(ValidationError):
            OutlooksConfig(cache_ttl=ttl)

    @pytest.mark.parametrize("timeout", [1, 301])
    def test_http_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError):
            OutlooksConfig(http_request_timeout=timeout)

    def test_base_url_trailing_slash_removed(self):
        assert OutlooksConfig(base_url=" https://api.example.test/ ").base_url == "https://api.example.test"

    def test_region_id_positive(self):
        with pytest.raises(ValidationError):
            OutlooksConfig(region_id=0)

    def test_default_source_is_plain_string(self):
        assert OutlooksConfig().source == "static"
        assert type(OutlooksConfig().source) is str

    def test_data_config_resolve(self, tmp_path):
        data = DataConfig(unit_groups_path="ug.json", programs_path="/abs/programs.json")
        resolved = data.resolve_relative_to(tmp_path)

        assert resolved.unit_groups_path == tmp_path / "ug.json"
        assert resolved.programs_path == Path("/abs/programs.json")
        assert resolved.outlooks_path is None

    def test_lmi_source_without_outlooks_path(self):
        config = AppConfig(
            data={"unit_groups_path": "ug.json", "programs_path": "p.json"},
            outlooks={"source": "lmi"},
        )
        assert config.outlooks.source == "lmi"

    def test_format_validation_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            AppConfig.model_validate({"data": {"unit_groups_path": "ug.json"}})

        messages = format_validation_errors(exc_info.value)

        assert "Missing required field: data -> programs_path" in messages


class TestEnvironment:
    """Tests for load_environment_config()."""

    def test_static_source_needs_no_key(self, clean_env):
        env_config = load_environment_config("static")

        assert env_config.lmi_api_user_key is None
        assert env_config.log_level is None
        assert env_config.environment == "local"

    def test_lmi_source_without_key(self, clean_env):
        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config("lmi")

        assert exc_info.value.suggestions
        assert "LMI_API_USER_KEY" in exc_info.value.errors[0]

    def test_reports_all_errors(self, clean_env, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config("lmi")

        assert len(exc_info.value.errors) == 2


class TestWarnings:
    """Tests for check_for_warnings()."""

    def test_no_matching_section(self):
        assert check_for_warnings({"data": {}}) == []

    def test_unknown_credential_override(self):
        messages = check_for_warnings({"matching": {"credential_synonyms": {"Masters": ["master's"]}}})
        assert messages == ["matching.credential_synonyms adds unknown credential 'masters'"]

    def test_duplicate_synonyms(self):
        messages = check_for_warnings(
            {"matching": {"credential_synonyms": {"diploma": ["Diploma", "diploma ", "college"]}}}
        )
        assert messages == ["Duplicate synonyms for credential 'diploma': diploma"]

    def test_blank_exclusion_list_is_not_a_warning(self):
        assert check_for_warnings({"matching": {"exclusion_phrases": ["  "]}}) == []


class TestConfigurationError:
    def test_message_lists_errors_and_suggestions(self):
        error = ConfigurationError("Broken", errors=["a", "b"], suggestions=["fix it"])
        text = str(error)

        assert text.startswith("Broken")
        assert "  1. a" in text
        assert "  2. b" in text
        assert "  - fix it" in text
