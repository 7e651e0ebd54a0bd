"""Configuration loading tests."""

from __future__ import annotations

import pytest

from sitelinker import LinkDecision, LinkEngine, settings
from sitelinker.engine.config import DEFAULTS, ConfigError, EngineConfig, load_config
from sitelinker.engine.injection import inject_links


def test_defaults_are_copied_per_load():
    first = load_config(None)
    first.raw["length_bonus"][5] = 99

    second = load_config(None)
    assert second.length_bonus(5) == 10.0
    assert DEFAULTS["length_bonus"][5] == 10.0
    assert second.min_paragraph_words == 12
    assert second.min_link_spacing_words == 250
    assert second.max_links == 10
    assert second.min_anchor_chars == 4


def test_yaml_overrides_merge_with_defaults(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("min_link_spacing_words: 100\nlength_bonus:\n  5: 20\n", encoding="utf-8")

    config = load_config(path)

    assert config.min_link_spacing_words == 100
    assert config.length_bonus(5) == 20.0
    assert config.length_bonus(4) == 8.0
    assert config.get("ratio_weight") == 40.0


def test_missing_file_falls_back_to_defaults(tmp_path):
    config = load_config(tmp_path / "absent.yaml")
    assert config.raw == EngineConfig(dict(DEFAULTS)).raw


def test_non_mapping_yaml_is_rejected(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_settings_load_engine_config_and_logging(monkeypatch, tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("max_links: 3\n", encoding="utf-8")
    monkeypatch.setenv("SITELINKER_CONFIG", str(path))

    settings.configure_logging()

    assert settings.engine_config().max_links == 3
    assert settings.LOGGING["loggers"]["sitelinker"]["level"] == settings.log_level


def test_engine_defaults_come_from_the_configured_yaml(monkeypatch, tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("max_links: 1\nmin_link_spacing_words: 40\n", encoding="utf-8")
    monkeypatch.setenv("SITELINKER_CONFIG", str(path))

    engine = LinkEngine()

    assert engine.config.max_links == 1
    assert engine.config.min_link_spacing_words == 40
    assert engine.config.length_bonus(5) == 10.0


def test_engine_uses_defaults_without_a_config_file(monkeypatch):
    monkeypatch.delenv("SITELINKER_CONFIG", raising=False)

    assert LinkEngine().config.max_links == 10


def test_inject_links_reads_the_configured_yaml(monkeypatch, tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("min_anchor_chars: 40\n", encoding="utf-8")
    monkeypatch.setenv("SITELINKER_CONFIG", str(path))
    decision = LinkDecision("sourdough baking", "/guides/sourdough", "", 80.0, 0)
    html = "<p>The complete guide to sourdough baking requires patience and the right flour</p>"

    assert inject_links(html, [decision]) == html
