"""Tests for configuration loading in mllt.core.models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from mllt.core.errors import ConfigError
from mllt.core.models import Config

MINIMAL = """
[site]
baseURL = "links.example.org"
content = "./content"
"""


def test_minimal_config_defaults():
    config = Config.from_str(MINIMAL)
    assert config.site.baseurl == "links.example.org"
    assert config.site.out_dir == Path("./html")
    assert config.site.theme is None
    assert config.site.assets is None
    assert config.site.strict is False
    assert config.site.workers == 1
    assert config.params == {}


def test_full_config(tmp_path):
    path = tmp_path / "mllt.toml"
    path.write_text(
        """
[site]
baseURL = "example.com"
publishdir = "./public"
content = "./content"
theme = "./theme"
assets = "./assets"
strict = true

[params]
title = "Example"
answer = 42

[[params.links]]
name = "Blog"
value = "https://blog.example.com"
"""
    )
    config = Config.from_file(path)

    assert config.site.out_dir == Path("./public")
    assert config.site.theme == Path("./theme")
    assert config.site.strict is True
    assert config.params["answer"] == 42
    assert config.params["links"] == [{"name": "Blog", "value": "https://blog.example.com"}]


def test_environment_overrides_file(monkeypatch):
    monkeypatch.setenv("MLLT_SITE__STRICT", "true")
    config = Config.from_str(MINIMAL)
    assert config.site.strict is True
    assert config.site.baseurl == "links.example.org"


def test_merge_with_applies_non_none_overrides():
    config = Config.from_str(MINIMAL)
    merged = config.merge_with(strict=True, out_dir=Path("dist"), theme=None)

    assert merged.site.strict is True
    assert merged.site.out_dir == Path("dist")
    assert merged.site.theme is None
    assert config.site.strict is False


def test_merge_with_rejects_unknown_settings():
    with pytest.raises(ValueError):
        Config.from_str(MINIMAL).merge_with(colour="blue")


def test_config_is_immutable():
    config = Config.from_str(MINIMAL)
    with pytest.raises(ValidationError):
        config.site.strict = True


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError) as excinfo:
        Config.from_file(tmp_path / "mllt.toml")
    assert excinfo.value.path == tmp_path / "mllt.toml"


def test_invalid_toml_raises():
    with pytest.raises(ConfigError):
        Config.from_str("[site\nbaseURL = ")


def test_missing_required_field_raises():
    with pytest.raises(ConfigError) as excinfo:
        Config.from_str('[site]\nbaseURL = "x"\n')
    assert "content" in str(excinfo.value)


def test_unknown_tables_are_ignored():
    config = Config.from_str(MINIMAL + '\n[deploy]\ntarget = "s3"\n')
    assert config.site.content == Path("./content")
    assert not hasattr(config, "deploy")
