"""Tests for config.py."""

from pathlib import Path

import pytest

from leveldata_translator.config import TranslatorOptions, config_path, load_config
from leveldata_translator.errors import ConfigError
from leveldata_translator.offset import Offset


class TestLoadConfig:
    def test_packaged_defaults(self):
        cfg = load_config()
        assert cfg["offset"] == {"vertical": 0.0, "lane": 3}
        assert cfg["slides"]["merge_unlinked"] is True
        assert config_path(cfg, "output") == Path("output")

    def test_user_file_merges_over_defaults(self, tmp_path):
        user = tmp_path / "user.yaml"
        user.write_text("offset:\n  lane: -2\npaths:\n  output: charts\n", encoding="utf-8")
        cfg = load_config(user)
        assert cfg["offset"] == {"vertical": 0.0, "lane": -2}
        assert cfg["paths"]["input"] == "input"
        assert config_path(cfg, "output") == Path("charts")

    def test_missing_user_file_is_ignored(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == load_config()

    def test_malformed_yaml(self, tmp_path):
        user = tmp_path / "bad.yaml"
        user.write_text("offset: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(user)

    def test_top_level_must_be_mapping(self, tmp_path):
        user = tmp_path / "list.yaml"
        user.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(user)


class TestTranslatorOptions:
    def test_from_defaults(self):
        options = TranslatorOptions.from_config(load_config())
        assert options.offset == Offset(vertical=0.0, lane=3)
        assert options.merge_unlinked
        assert not options.emit_metadata
        assert not options.minified

    def test_bad_offset(self):
        with pytest.raises(ConfigError):
            TranslatorOptions.from_config({"offset": {"lane": "three"}})

    def test_bad_section(self):
        with pytest.raises(ConfigError):
            TranslatorOptions.from_config({"slides": [1]})

    def test_plain_defaults_are_identity(self):
        assert TranslatorOptions().offset == Offset(0.0, 0)
