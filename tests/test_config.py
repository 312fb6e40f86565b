"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from itemsearch.config import (
    Config,
    SearchSettings,
    _deep_merge,
    load_config,
    load_settings,
)
from itemsearch.exceptions import ConfigError
from itemsearch.models import SearchMode


class TestSearchSettings:
    def test_default_values(self):
        settings = SearchSettings()
        assert settings.mode is SearchMode.GREEDY
        assert settings.excluded_keys == ["id", "key"]
        assert settings.max_workers == 0

    def test_from_dict(self):
        settings = SearchSettings.from_dict(
            {"mode": "eagle", "excluded_keys": ["uuid"], "max_workers": 4}
        )
        assert settings.mode is SearchMode.EAGLE
        assert settings.excluded_keys == ["uuid"]
        assert settings.max_workers == 4

    def test_mode_name_is_case_insensitive(self):
        assert SearchSettings.from_dict({"mode": " Eagle "}).mode is SearchMode.EAGLE

    def test_from_empty_dict(self):
        assert SearchSettings.from_dict({}) == SearchSettings()

    @pytest.mark.parametrize(
        "data",
        [{"mode": "sloppy"}, {"max_workers": -1}, {"excluded_keys": "id"}],
    )
    def test_invalid_values(self, data):
        with pytest.raises(ConfigError):
            SearchSettings.from_dict(data)


class TestConfigFiles:
    def test_from_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"mode": "fuzzy"}))

        assert Config.from_file(path) == {"mode": "fuzzy"}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert Config.from_file(path) == {}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("mode: [unclosed")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            Config.from_file(path)

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            Config.from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            Config.from_file(tmp_path / "missing.yaml")

    def test_config_paths(self, tmp_path):
        paths = Config.get_config_paths()
        assert paths[0] == tmp_path / "xdg" / "itemsearch" / "config.yaml"
        assert Path("itemsearch.yaml") in paths


class TestEnvironment:
    def test_no_overrides(self):
        assert Config.from_env() == {}

    def test_mode_and_workers(self, monkeypatch):
        monkeypatch.setenv("ITEMSEARCH_MODE", "EAGLE")
        monkeypatch.setenv("ITEMSEARCH_MAX_WORKERS", "8")

        assert Config.from_env() == {"mode": "eagle", "max_workers": 8}

    def test_invalid_workers(self, monkeypatch):
        monkeypatch.setenv("ITEMSEARCH_MAX_WORKERS", "many")

        with pytest.raises(ConfigError):
            Config.from_env()


class TestLoadConfig:
    def test_defaults_without_files(self):
        assert load_config() == {}
        assert load_settings() == SearchSettings()

    def test_project_file_is_loaded(self, tmp_path):
        (tmp_path / "itemsearch.yaml").write_text("mode: eagle\n")

        assert load_settings().mode is SearchMode.EAGLE

    def test_file_mode_is_case_insensitive(self, tmp_path):
        (tmp_path / "itemsearch.yaml").write_text("mode: Fuzzy\n")

        assert load_settings().mode is SearchMode.FUZZY

    def test_later_sources_win(self, tmp_path, monkeypatch):
        xdg = tmp_path / "xdg" / "itemsearch"
        xdg.mkdir(parents=True)
        (xdg / "config.yaml").write_text("mode: eagle\nmax_workers: 2\n")
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("mode: fuzzy\n")

        config = load_config(explicit)
        assert config == {"mode": "fuzzy", "max_workers": 2}

        monkeypatch.setenv("ITEMSEARCH_MODE", "greedy")
        assert load_settings(explicit).mode is SearchMode.GREEDY


class TestDeepMerge:
    def test_nested_dicts_are_merged(self):
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        override = {"a": {"y": 3}, "c": 4}

        assert _deep_merge(base, override) == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
        assert base == {"a": {"x": 1, "y": 2}, "b": 1}

    def test_merge_configs(self):
        assert Config.merge_configs({"a": 1}, {"a": 2}, {"b": 3}) == {"a": 2, "b": 3}
