import os
from pathlib import Path

import pytest

# 2023-11-14T22:13:20Z; every test timestamp is an offset from here
BASE_S = 1_700_000_000


def ns(offset_s: float) -> int:
    return int((BASE_S + offset_s) * 1_000_000_000)


def ms(offset_s: float) -> float:
    return ns(offset_s) / 1_000_000


def put(root: Path, rel: str, offset_s: float = 0, data: bytes = b"x") -> Path:
    """Create root/rel (parents included) with a pinned mtime."""
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)
    t = ns(offset_s)
    os.utime(p, ns=(t, t))
    return p


def pin_dir(path: Path, offset_s: float) -> None:
    t = ns(offset_s)
    os.utime(path, ns=(t, t))


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    root = tmp_path / "library"
    root.mkdir()
    return root


@pytest.fixture
def alice_tree(media_root: Path) -> Path:
    """
    library/
      alice/
        clip.mp4                              (+100s)
        images/photo_20230101_120000.jpg      (+0s, 500000 bytes)
    """
    put(media_root, "alice/images/photo_20230101_120000.jpg", 0, b"\0" * 500000)
    put(media_root, "alice/clip.mp4", 100, b"video")
    pin_dir(media_root / "alice" / "images", 10)
    pin_dir(media_root / "alice", 20)
    pin_dir(media_root, 30)
    return media_root
