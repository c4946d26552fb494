"""Tests for config hierarchy."""

import pytest

from storyquest.config import hierarchy
from storyquest.config.hierarchy import (
    _coerce_env_value,
    _load_yaml_config,
    load_config_hierarchy,
)


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    """Keep the user's real config and env out of these tests."""
    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml")
    monkeypatch.chdir(tmp_path)
    for env_key in hierarchy._ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)


class TestLoadConfigHierarchy:
    def test_returns_defaults(self):
        config = load_config_hierarchy()
        assert config["text_model"] == "gpt-4o-mini"
        assert config["story_cache_probability"] == 0.3

    def test_runtime_overrides(self):
        config = load_config_hierarchy(text_model="gpt-4o", story_cache_probability=0.5)
        assert config["text_model"] == "gpt-4o"
        assert config["story_cache_probability"] == 0.5

    def test_none_overrides_ignored(self):
        config = load_config_hierarchy(text_model=None, store_path=None)
        assert config["text_model"] == "gpt-4o-mini"
        assert "store_path" not in config

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("STORYQUEST_TEXT_MODEL", "gpt-4.1")
        config = load_config_hierarchy()
        assert config["text_model"] == "gpt-4.1"

    def test_openai_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key")
        config = load_config_hierarchy()
        assert config["api_key"] == "sk-test-key"

    def test_runtime_beats_env(self, monkeypatch):
        monkeypatch.setenv("STORYQUEST_TEXT_MODEL", "gpt-4.1")
        config = load_config_hierarchy(text_model="gpt-4o")
        assert config["text_model"] == "gpt-4o"

    def test_env_float_coercion(self, monkeypatch):
        monkeypatch.setenv("STORYQUEST_STORY_CACHE_PROBABILITY", "0.75")
        config = load_config_hierarchy()
        assert config["story_cache_probability"] == 0.75

    def test_env_bool_coercion(self, monkeypatch):
        monkeypatch.setenv("STORYQUEST_CACHE_DISABLED", "true")
        config = load_config_hierarchy()
        assert config["cache_disabled"] is True

    def test_project_config(self, tmp_path):
        (tmp_path / "storyquest.yaml").write_text("text_model: gpt-4.1\nimage_size: 512x512\n")
        config = load_config_hierarchy()
        assert config["text_model"] == "gpt-4.1"
        assert config["image_size"] == "512x512"

    def test_global_then_project(self, tmp_path):
        global_path = tmp_path / "global" / "config.yaml"
        global_path.parent.mkdir()
        global_path.write_text("text_model: from-global\nimage_model: global-image\n")
        (tmp_path / "storyquest.yaml").write_text("text_model: from-project\n")
        config = load_config_hierarchy()
        assert config["text_model"] == "from-project"
        assert config["image_model"] == "global-image"


class TestLoadYamlConfig:
    def test_loads_valid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("key: value\n")
        assert _load_yaml_config(path) == {"key": "value"}

    def test_returns_none_for_missing(self, tmp_path):
        assert _load_yaml_config(tmp_path / "nonexistent.yaml") is None

    def test_returns_none_for_non_dict(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- item1\n- item2\n")
        assert _load_yaml_config(path) is None

    def test_returns_none_for_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("key: [unclosed\n")
        assert _load_yaml_config(path) is None


class TestCoerceEnvValue:
    def test_bool_true(self):
        assert _coerce_env_value("cache_disabled", "true") is True
        assert _coerce_env_value("cache_disabled", "1") is True
        assert _coerce_env_value("cache_disabled", "yes") is True

    def test_bool_false(self):
        assert _coerce_env_value("cache_disabled", "false") is False
        assert _coerce_env_value("cache_disabled", "0") is False

    def test_int_coercion(self):
        assert _coerce_env_value("max_retries", "5") == 5

    def test_bad_number_is_dropped(self):
        assert _coerce_env_value("max_retries", "many") is None
        assert _coerce_env_value("story_cache_probability", "often") is None

    def test_string_passthrough(self):
        assert _coerce_env_value("api_key", "sk-123") == "sk-123"


class TestEnvLayer:
    def test_every_setting_has_a_storyquest_var(self):
        assert hierarchy._ENV_MAP["STORYQUEST_STORY_MAX_TOKENS"] == "story_max_tokens"
        assert hierarchy._ENV_MAP["STORYQUEST_QUIZ_MAX_TOKENS"] == "quiz_max_tokens"
        assert hierarchy._ENV_MAP["STORYQUEST_MAX_RETRIES"] == "max_retries"

    def test_token_limits_from_env(self, monkeypatch):
        monkeypatch.setenv("STORYQUEST_STORY_MAX_TOKENS", "2000")
        monkeypatch.setenv("STORYQUEST_MAX_RETRIES", "1")
        config = load_config_hierarchy()
        assert config["story_max_tokens"] == 2000
        assert config["max_retries"] == 1

    def test_unparseable_env_keeps_lower_layer(self, monkeypatch, tmp_path):
        (tmp_path / "storyquest.yaml").write_text("max_retries: 5\n")
        monkeypatch.setenv("STORYQUEST_MAX_RETRIES", "lots")
        assert load_config_hierarchy()["max_retries"] == 5
