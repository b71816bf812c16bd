# app/services/scanner.py
# Folder scanner: classify one directory's entries into subfolders and media,
# flatten "category" directories into their parent, preview each subfolder.
from __future__ import annotations

import os
import stat
import time
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from app.core.errors import MediaIOError, NotADirectory
from app.core.logging import get_logger
from app.schemas.media import FolderCounts, FolderPayload, FolderPreview, MediaItem
from app.services.assemble import assemble_payload
from app.services.cache import FolderCache
from app.services.paths import resolve_relative
from app.utils.http import media_url

logger = get_logger("scanner")

# Directories whose media is shown as if it lived in the parent folder.
CATEGORY_DIRS = frozenset({
    "image", "images", "video", "videos", "gif", "gifs", "media", "medias",
})

IMAGE_EXT = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tiff"}
VIDEO_EXT = {".mp4", ".mov", ".webm", ".mkv", ".avi", ".gif"}


def detect_media_kind(name: str) -> Optional[str]:
    """'gif' | 'image' | 'video' by extension (case-insensitive), else None."""
    ext = Path(name).suffix.lower()
    # .gif is also in VIDEO_EXT; it must be checked first
    if ext == ".gif":
        return "gif"
    if ext in IMAGE_EXT:
        return "image"
    if ext in VIDEO_EXT:
        return "video"
    return None


def is_category_dir(name: str) -> bool:
    return name.lower() in CATEGORY_DIRS


def _mtime_ms(st) -> float:
    return st.st_mtime_ns / 1_000_000


def _join(relative: str, name: str) -> str:
    return f"{relative}/{name}" if relative else name


def _count(counts: FolderCounts, kind: str) -> None:
    # gif and video share the 'videos' bucket; 'gifs' is never filled
    if kind == "image":
        counts.images += 1
    else:
        counts.videos += 1


class MediaScanner:
    """
    Read-only view of one media root.
      - get_folder(): resolve, cache-check by directory mtime, scan, assemble
      - build_preview(): bounded one-level summary of a subfolder
    Scans are sequential; the cache is the only shared state.
    """

    def __init__(self, root: Path, preview_limit: int = 6, max_items: int = 20000,
                 cache: Optional[FolderCache] = None) -> None:
        self.root = Path(root).resolve()
        self.preview_limit = preview_limit
        self.max_items = max_items
        self.cache = cache if cache is not None else FolderCache()

    # ---------- public ----------

    def get_folder(self, relative_path: str = "") -> FolderPayload:
        relative, absolute = resolve_relative(self.root, relative_path)
        try:
            st = absolute.stat()
        except OSError as e:
            raise MediaIOError(relative, e, missing=isinstance(e, FileNotFoundError)) from e
        if not stat.S_ISDIR(st.st_mode):
            raise NotADirectory(relative)

        cached = self.cache.lookup(relative, st.st_mtime_ns)
        if cached is not None:
            logger.debug(f"cache hit: '{relative}'")
            return cached

        t0 = time.perf_counter()
        try:
            subfolders, media = self._scan(absolute, relative)
        except OSError as e:
            raise MediaIOError(relative, e) from e

        payload = assemble_payload(self.root, relative, absolute, subfolders, media)
        self.cache.put(relative, st.st_mtime_ns, payload)
        logger.info(
            f"scanned '{relative or '/'}': media={len(media)} subfolders={len(subfolders)} "
            f"in {(time.perf_counter() - t0) * 1000:.1f} ms"
        )
        return payload

    def build_preview(self, absolute: Path, relative: str) -> FolderPreview:
        """
        One level only: nested non-category dirs are counted, never opened.
        counts cover every qualifying file; previews stop at preview_limit.
        """
        counts = FolderCounts()
        previews: List[MediaItem] = []
        modified: Optional[float] = None

        for child, st in self._entries(absolute):
            mtime = _mtime_ms(st)
            modified = mtime if modified is None else max(modified, mtime)
            child_rel = _join(relative, child.name)

            if stat.S_ISDIR(st.st_mode):
                if is_category_dir(child.name):
                    self._collect_category_preview(child, child_rel, previews, counts)
                else:
                    counts.subfolders += 1
                continue

            if not stat.S_ISREG(st.st_mode):
                continue
            kind = detect_media_kind(child.name)
            if not kind:
                continue
            _count(counts, kind)
            if len(previews) < self.preview_limit:
                previews.append(self._media_item(child.name, child_rel, st, kind))

        if modified is None:
            modified = _mtime_ms(absolute.stat())

        return FolderPreview(
            name=absolute.name,
            path=relative,
            modified=modified,
            counts=counts,
            previews=previews,
        )

    # ---------- internals ----------

    def _scan(self, absolute: Path, relative: str) -> Tuple[List[FolderPreview], List[MediaItem]]:
        subfolders: List[FolderPreview] = []
        media: List[MediaItem] = []
        processed = 0

        for child, st in self._entries(absolute):
            is_dir = stat.S_ISDIR(st.st_mode)
            kind = None if is_dir else detect_media_kind(child.name)
            if not is_dir and not (kind and stat.S_ISREG(st.st_mode)):
                continue
            if processed >= self.max_items:
                logger.warning(
                    f"'{relative or '/'}' hit max_items_per_folder={self.max_items}; "
                    f"stopped listing at '{child.name}'"
                )
                break
            child_rel = _join(relative, child.name)

            if is_dir:
                if is_category_dir(child.name):
                    processed += self._collect_category_media(
                        child, child_rel, media, self.max_items - processed
                    )
                else:
                    subfolders.append(self.build_preview(child, child_rel))
                    processed += 1
                continue

            media.append(self._media_item(child.name, child_rel, st, kind))
            processed += 1

        return subfolders, media

    def _collect_category_media(self, absolute: Path, relative: str,
                                media: List[MediaItem], limit: int) -> int:
        """Append up to `limit` media files of a category dir; return how many."""
        added = 0
        for child, st in self._entries(absolute):
            if added >= limit:
                break
            item = self._category_item(child, relative, st)
            if item is None:
                continue
            media.append(item)
            added += 1
        return added

    def _collect_category_preview(self, absolute: Path, relative: str,
                                  previews: List[MediaItem], counts: FolderCounts) -> None:
        for child, st in self._entries(absolute):
            item = self._category_item(child, relative, st)
            if item is None:
                continue
            _count(counts, item.kind)
            if len(previews) < self.preview_limit:
                previews.append(item)

    def _category_item(self, child: Path, relative: str, st) -> Optional[MediaItem]:
        # files only; a category dir's own subdirectories are ignored
        if not stat.S_ISREG(st.st_mode):
            return None
        kind = detect_media_kind(child.name)
        if not kind:
            return None
        return self._media_item(child.name, _join(relative, child.name), st, kind)

    @staticmethod
    def _media_item(name: str, rel_path: str, st, kind: str) -> MediaItem:
        return MediaItem(
            name=name,
            path=rel_path,
            url=media_url(rel_path),
            kind=kind,
            size=st.st_size,
            modified=_mtime_ms(st),
        )

    @staticmethod
    def _entries(directory: Path) -> Iterator[Tuple[Path, os.stat_result]]:
        """
        (child, stat) for each visible entry, in name order.
        Skipped: dotfiles, symlinks (never followed), names that are not
        valid UTF-8, and entries that vanish between listing and stat.
        """
        for child in sorted(directory.iterdir(), key=lambda p: p.name):
            if child.name.startswith("."):
                continue
            try:
                child.name.encode("utf-8")
            except UnicodeEncodeError:
                logger.debug(f"skipping non-UTF-8 name: {child!r}")
                continue
            if child.is_symlink():
                logger.debug(f"skipping symlink: {child}")
                continue
            try:
                st = child.stat()
            except FileNotFoundError:
                logger.debug(f"entry vanished during scan: {child}")
                continue
            yield child, st
