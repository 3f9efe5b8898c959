"""Tests for mllt.assets."""

from __future__ import annotations

import os

import pytest

from mllt.assets import needs_copy, sync_assets
from mllt.core.errors import MetadataError


def _set_mtime(path, seconds):
    os.utime(path, ns=(seconds * 1_000_000_000, seconds * 1_000_000_000))


@pytest.fixture
def assets(tree):
    root = tree(
        "assets",
        {
            "img/logo.png": "PNG",
            "css/site.css": "body {}",
            "robots.txt": "User-agent: *",
        },
    )
    (root / "fonts" / "empty").mkdir(parents=True)
    return root


def test_first_sync_copies_everything(assets, tmp_path):
    out_dir = tmp_path / "out"
    report = sync_assets(assets, out_dir)

    assert sorted(p.relative_to(out_dir).as_posix() for p in report.copied) == [
        "css/site.css",
        "img/logo.png",
        "robots.txt",
    ]
    assert report.skipped == []
    assert (out_dir / "img" / "logo.png").read_text() == "PNG"
    assert (out_dir / "fonts" / "empty").is_dir()


def test_second_sync_copies_nothing(assets, tmp_path):
    out_dir = tmp_path / "out"
    sync_assets(assets, out_dir)

    report = sync_assets(assets, out_dir)

    assert report.copied == []
    assert len(report.skipped) == 3
    assert report.created_dirs == []


def test_touching_one_source_recopies_only_it(assets, tmp_path):
    out_dir = tmp_path / "out"
    sync_assets(assets, out_dir)

    css = assets / "css" / "site.css"
    css.write_text("body { margin: 0 }")
    stat = css.stat()
    _set_mtime(css, int(stat.st_mtime) + 10)

    report = sync_assets(assets, out_dir)

    assert report.copied == [out_dir / "css" / "site.css"]
    assert (out_dir / "css" / "site.css").read_text() == "body { margin: 0 }"


def test_newer_source_overwrites_existing_destination(tree, tmp_path):
    assets = tree("assets", {"img/logo.png": "new logo"})
    out_dir = tree("out", {"img/logo.png": "old logo"})
    _set_mtime(out_dir / "img" / "logo.png", 1_000_000)
    _set_mtime(assets / "img" / "logo.png", 2_000_000)

    report = sync_assets(assets, out_dir)

    assert report.copied == [out_dir / "img" / "logo.png"]
    assert (out_dir / "img" / "logo.png").read_text() == "new logo"


@pytest.mark.parametrize("dest_mtime", [2_000_000, 3_000_000])
def test_equal_or_newer_destination_is_left_alone(tree, dest_mtime):
    assets = tree("assets", {"img/logo.png": "new logo"})
    out_dir = tree("out", {"img/logo.png": "kept"})
    _set_mtime(assets / "img" / "logo.png", 2_000_000)
    _set_mtime(out_dir / "img" / "logo.png", dest_mtime)

    report = sync_assets(assets, out_dir)

    assert report.copied == []
    assert report.skipped == [out_dir / "img" / "logo.png"]
    assert (out_dir / "img" / "logo.png").read_text() == "kept"


def test_needs_copy_when_destination_missing(tmp_path):
    source = tmp_path / "a.txt"
    source.write_text("a")
    assert needs_copy(source, tmp_path / "missing.txt")


def test_needs_copy_missing_source_raises(tmp_path):
    destination = tmp_path / "a.txt"
    destination.write_text("a")
    with pytest.raises(MetadataError) as excinfo:
        needs_copy(tmp_path / "gone.txt", destination)
    assert excinfo.value.path == tmp_path / "gone.txt"


def test_ignored_assets_are_not_copied(tree, tmp_path):
    assets = tree(
        "assets",
        {".gitignore": "*.psd\nsrc/\n", "logo.png": "PNG", "logo.psd": "PSD", "src/raw.svg": "x"},
    )
    out_dir = tmp_path / "out"
    sync_assets(assets, out_dir)

    assert (out_dir / "logo.png").exists()
    assert not (out_dir / "logo.psd").exists()
    assert not (out_dir / "src").exists()


def test_parallel_sync_matches_sequential(assets, tmp_path):
    report = sync_assets(assets, tmp_path / "out", workers=3)
    assert len(report.copied) == 3
    assert sync_assets(assets, tmp_path / "out", workers=3).copied == []
