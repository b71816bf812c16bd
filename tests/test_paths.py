import os

import pytest

from app.core.errors import PathEscapesRoot
from app.services.paths import normalize_relative, resolve_relative
from app.utils.http import media_url, safe_rel_under


@pytest.mark.parametrize("raw, expected", [
    ("", ""),
    (".", ""),
    ("./", ""),
    ("alice", "alice"),
    ("alice/", "alice"),
    ("alice\\2023\\trip", "alice/2023/trip"),
    ("/alice/2023", "alice/2023"),
    ("//alice", "alice"),
    ("../alice", "alice"),
    ("../../../alice/2023", "alice/2023"),
    ("..\\..\\alice", "alice"),
    ("alice/./2023/../2024", "alice/2024"),
    ("/../alice", "alice"),
    ("../", ""),
    ("../../", ""),
    ("..\\", ""),
])
def test_normalize_relative(raw, expected):
    assert normalize_relative(raw) == expected


def test_root_resolves_to_itself(media_root):
    rel, absolute = resolve_relative(media_root, "")
    assert rel == ""
    assert absolute == media_root.resolve()


def test_leading_parents_are_stripped_not_followed(media_root):
    rel, absolute = resolve_relative(media_root, "../../alice")
    assert rel == "alice"
    assert absolute == media_root.resolve() / "alice"


@pytest.mark.parametrize("raw", ["..", "../..", "alice/../..", "a/b/../../..", "..\\.."])
def test_surviving_parent_segments_are_rejected(media_root, raw):
    with pytest.raises(PathEscapesRoot):
        resolve_relative(media_root, raw)


def test_symlink_out_of_root_is_rejected(tmp_path, media_root):
    outside = tmp_path / "outside"
    outside.mkdir()
    os.symlink(outside, media_root / "escape")
    with pytest.raises(PathEscapesRoot):
        resolve_relative(media_root, "escape")


def test_nul_byte_is_rejected(media_root):
    with pytest.raises(PathEscapesRoot):
        resolve_relative(media_root, "alice\x00/x")


def test_safe_rel_under_is_not_a_string_prefix_check(tmp_path):
    base = tmp_path / "media"
    sibling = tmp_path / "media2" / "x.jpg"
    base.mkdir()
    assert safe_rel_under(base, sibling) is None
    assert str(safe_rel_under(base, base / "a" / "b.jpg")) == "a/b.jpg"


def test_media_url_encodes_each_segment():
    assert media_url("alice/images/photo_20230101_120000.jpg") == \
        "/media/alice/images/photo_20230101_120000.jpg"
    assert media_url("summer 2023/#1 beach?.jpg") == "/media/summer%202023/%231%20beach%3F.jpg"
    assert media_url("a/b%c/ü.png") == "/media/a/b%25c/%C3%BC.png"


def test_parent_runs_with_trailing_slash_resolve_to_root(media_root):
    rel, absolute = resolve_relative(media_root, "../../")
    assert rel == ""
    assert absolute == media_root.resolve()
