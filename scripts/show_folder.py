#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# scripts/show_folder.py
#
# Usage examples:
#   python scripts/show_folder.py                         # root of [paths].media_root
#   python scripts/show_folder.py alice/2023
#   python scripts/show_folder.py --root ~/Pictures trips --preview-limit 3
#   python scripts/show_folder.py alice --json | jq '.media[0]'
#   MEDIA_ROOT=/Volumes/Data/library python scripts/show_folder.py alice

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Sequence


def repo_root() -> Path:
    """Assumes this file lives in repo_root/scripts/"""
    return Path(__file__).resolve().parents[1]


# the API package lives in repo_root/mediashelf-api/app
sys.path.insert(0, str(repo_root() / "mediashelf-api"))

from app.core.config import load_settings  # noqa: E402
from app.core.errors import MediashelfError  # noqa: E402
from app.core.logging import setup_logging  # noqa: E402
from app.services.scanner import MediaScanner  # noqa: E402


def fmt_ms(ms: float) -> str:
    return datetime.fromtimestamp(ms / 1000).isoformat(sep=" ", timespec="seconds")


def print_table(title: str, headers: Sequence[str], rows: Iterable[Sequence]) -> None:
    """Render a simple ASCII table."""
    rows = [["" if v is None else str(v) for v in r] for r in rows]
    print(f"\n== {title} ==")
    if not rows:
        print("(no rows)")
        return
    widths = [len(h) for h in headers]
    for r in rows:
        for i, v in enumerate(r):
            widths[i] = max(widths[i], len(v))

    def line(fill: str = "-") -> None:
        print("+" + "+".join(fill * (w + 2) for w in widths) + "+")

    line()
    print("| " + " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers)) + " |")
    line("=")
    for r in rows:
        print("| " + " | ".join(v.ljust(widths[i]) for i, v in enumerate(r)) + " |")
    line()


def main(argv: List[str] = None) -> int:
    settings = load_settings()

    ap = argparse.ArgumentParser(description="Scan one folder and print what the API would return.")
    ap.add_argument("path", nargs="?", default="", help="folder relative to the media root (default: root)")
    ap.add_argument("--root", default=str(settings.media_root), help="media root (default from config/env)")
    ap.add_argument("--preview-limit", type=int, default=settings.preview_limit)
    ap.add_argument("--max-items", type=int, default=settings.max_items_per_folder)
    ap.add_argument("--json", action="store_true", help="print the raw JSON payload")
    ap.add_argument("-v", "--verbose", action="store_true", help="log scanner activity to stderr")
    args = ap.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "WARNING")

    scanner = MediaScanner(
        Path(args.root).expanduser(),
        preview_limit=args.preview_limit,
        max_items=args.max_items,
    )
    try:
        payload = scanner.get_folder(args.path)
    except MediashelfError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(payload.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
        return 0

    print(f"Folder: {payload.folder.absolute_path}")
    print("Path:   " + " / ".join(c.name for c in payload.breadcrumb))

    print_table(
        f"subfolders ({payload.totals.subfolders})",
        ["name", "modified", "images", "videos", "subfolders", "previews"],
        (
            [f.name, fmt_ms(f.modified), f.counts.images, f.counts.videos,
             f.counts.subfolders, len(f.previews)]
            for f in payload.subfolders
        ),
    )
    print_table(
        f"media ({payload.totals.media})",
        ["kind", "path", "size", "modified"],
        ([m.kind, m.path, m.size, fmt_ms(m.modified)] for m in payload.media),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
