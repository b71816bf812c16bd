# app/services/paths.py
# Turn a user-supplied relative path into (normalized relative, absolute) under the root.
from __future__ import annotations

import posixpath
import re
from pathlib import Path
from typing import Tuple

from app.core.errors import PathEscapesRoot
from app.utils.http import safe_rel_under, to_posix

_LEADING_PARENTS = re.compile(r"^(\.\./)+")


def normalize_relative(raw: str) -> str:
    """
    Best-effort cleanup of a requested path:
      - '' and '.' mean the root
      - backslashes become '/'
      - drop any leading '../' run (before and after posix-normalizing,
        since normpath eats the trailing slash of '../'), then any leading '/'
    The result is NOT guaranteed to stay inside the root (a bare '..' survives);
    resolve_relative() performs the containment check.
    """
    if not raw or raw == ".":
        return ""
    cleaned = _LEADING_PARENTS.sub("", to_posix(raw))
    cleaned = posixpath.normpath(cleaned) if cleaned else "."
    cleaned = _LEADING_PARENTS.sub("", cleaned).lstrip("/")
    return "" if cleaned == "." else cleaned


def resolve_relative(root: Path, raw: str) -> Tuple[str, Path]:
    """
    Return (relative, absolute) for a request path.
    Raises PathEscapesRoot when the resolved path is not inside root,
    including via '..' remnants or symlinks that point outside.
    """
    relative = normalize_relative(raw)
    if "\x00" in relative:
        raise PathEscapesRoot(raw)
    root = root.resolve()
    absolute = (root / relative).resolve() if relative else root
    if safe_rel_under(root, absolute) is None:
        raise PathEscapesRoot(raw)
    return relative, absolute
