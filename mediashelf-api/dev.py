# dev.py: run the Mediashelf API with uvicorn using host/port from mediashelf.toml
# ---------------------------------------------------------------
# What you get:
# - GET /api/folder?path=        → folder payload (subfolder previews + media)
# - GET /media/{path}            → serve originals from the media root
# - GET /health                  → liveness
#
# How to run:
#   python -m venv .venv && source .venv/bin/activate
#   pip install -e .
#   MEDIA_ROOT=/path/to/library python mediashelf-api/dev.py [--reload]

import argparse
import sys
from pathlib import Path

import uvicorn

# make `app` importable when launched as a plain script
sys.path.insert(0, str(Path(__file__).resolve().parent))

from app.core.config import load_settings  # noqa: E402


def main() -> None:
    settings = load_settings()
    ap = argparse.ArgumentParser(description="Run the Mediashelf API.")
    ap.add_argument("--host", default=settings.host)
    ap.add_argument("--port", type=int, default=settings.port)
    ap.add_argument("--reload", action="store_true", help="auto-reload on code changes")
    args = ap.parse_args()

    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
