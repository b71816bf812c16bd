# app/services/assemble.py
# Sorting, breadcrumb and totals: turns raw scan results into a FolderPayload.
from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, TypeVar

from app.schemas.media import (
    BreadcrumbEntry, FolderInfo, FolderPayload, FolderPreview, FolderTotals, MediaItem,
)
from app.utils.http import to_posix

_Dated = TypeVar("_Dated", MediaItem, FolderPreview)


def newest_first(items: Sequence[_Dated]) -> List[_Dated]:
    """Stable sort by `modified`, newest first."""
    return sorted(items, key=lambda it: it.modified, reverse=True)


def build_breadcrumb(relative: str) -> List[BreadcrumbEntry]:
    """root, then one entry per path segment with its accumulated path."""
    crumbs = [BreadcrumbEntry(name="root", path="")]
    acc = ""
    for part in (p for p in to_posix(relative).split("/") if p):
        acc = f"{acc}/{part}" if acc else part
        crumbs.append(BreadcrumbEntry(name=part, path=acc))
    return crumbs


def assemble_payload(
    root: Path,
    relative: str,
    absolute: Path,
    subfolders: Sequence[FolderPreview],
    media: Sequence[MediaItem],
) -> FolderPayload:
    subfolders = newest_first(subfolders)
    media = newest_first(media)
    # the root folder is named after the media root directory itself
    name = Path(relative).name if relative else root.name
    return FolderPayload(
        folder=FolderInfo(name=name, path=relative, absolute_path=str(absolute)),
        breadcrumb=build_breadcrumb(relative),
        subfolders=subfolders,
        media=media,
        totals=FolderTotals(media=len(media), subfolders=len(subfolders)),
    )
