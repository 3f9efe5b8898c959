"""Tests for mllt.scaffold."""

from __future__ import annotations

import logging

import pytest

from mllt.core.errors import ScaffoldError
from mllt.core.models import Config
from mllt.scaffold import SAMPLE_FILES, instantiate_site


def test_new_site_layout(tmp_path):
    project = tmp_path / "site"
    written = instantiate_site(project)

    assert [p.relative_to(project).as_posix() for p in written] == list(SAMPLE_FILES)
    assert (project / "assets").is_dir()
    config = Config.from_file(project / "mllt.toml")
    assert config.site.baseurl == "example.com"
    assert config.params["some_nonstring_value"] == 42


def test_existing_empty_directory_is_used(tmp_path):
    project = tmp_path / "site"
    project.mkdir()
    instantiate_site(project)
    assert (project / "content" / "index.hbs").exists()


def test_non_empty_directory_requires_clobber(tmp_path):
    project = tmp_path / "site"
    project.mkdir()
    (project / "notes.txt").write_text("keep me")

    with pytest.raises(ScaffoldError):
        instantiate_site(project)
    assert not (project / "mllt.toml").exists()


def test_clobber_overwrites_with_warning(tmp_path, caplog):
    project = tmp_path / "site"
    instantiate_site(project)
    (project / "mllt.toml").write_text("changed")

    with caplog.at_level(logging.WARNING, logger="mllt.scaffold"):
        instantiate_site(project, clobber=True)

    assert (project / "mllt.toml").read_text() != "changed"
    assert "overwritten" in caplog.text


def test_file_in_place_of_directory_raises(tmp_path):
    target = tmp_path / "site"
    target.write_text("")
    with pytest.raises(ScaffoldError):
        instantiate_site(target, clobber=True)
