# app/utils/http.py
from pathlib import Path
from typing import Optional
import urllib.parse

MEDIA_PREFIX = "/media/"


def safe_rel_under(base: Path, target: Path) -> Optional[Path]:
    """
    Return target's path relative to base if target is inside base, else None.
    Both sides are resolved first, so symlinks pointing out of base are caught.
    """
    try:
        return target.resolve().relative_to(base.resolve())
    except (ValueError, OSError):
        return None


def to_posix(value: str) -> str:
    return value.replace("\\", "/")


def media_url(rel_path: str) -> str:
    """/media/<path> with every segment percent-encoded on its own."""
    segments = [s for s in to_posix(rel_path).split("/") if s]
    return MEDIA_PREFIX + "/".join(urllib.parse.quote(s, safe="") for s in segments)
