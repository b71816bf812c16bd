# app/api/routes/folders.py
# Endpoints for browsing the media root:
# - GET /api/folder?path=
# - GET /health
# - GET /media/{path}
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

from app.core.errors import MediaIOError, NotADirectory, PathEscapesRoot
from app.core.logging import get_logger
from app.schemas.media import FolderPayload
from app.services.scanner import MediaScanner
from app.utils.http import safe_rel_under

logger = get_logger("api")

api_router = APIRouter(tags=["folders"])     # mounted under /api in main
public_router = APIRouter()                  # mounted without prefix in main

# Raw media bytes never change under the same URL often enough to matter.
MEDIA_CACHE_CONTROL = "public, max-age=86400"


def _scanner(request: Request) -> MediaScanner:
    return request.app.state.scanner


@public_router.get("/health")
def health():
    return {"status": "ok"}


@api_router.get("/folder", response_model=FolderPayload)
def get_folder(request: Request, path: Optional[str] = ""):
    """List one folder: subfolder previews + media (category dirs flattened)."""
    try:
        return _scanner(request).get_folder(path or "")
    except PathEscapesRoot as e:
        logger.warning(f"rejected path outside root: {e.requested!r}")
        raise HTTPException(403, str(e))
    except NotADirectory as e:
        raise HTTPException(400, str(e))
    except MediaIOError as e:
        if e.not_found:
            raise HTTPException(404, "directory not found")
        logger.error(f"failed to read '{e.path}': {e.cause}")
        raise HTTPException(400, str(e))


@public_router.get("/media/{path:path}")
def get_media(request: Request, path: str):
    root = _scanner(request).root
    abs_path = (root / path).resolve()
    if safe_rel_under(root, abs_path) is None:
        raise HTTPException(403, "forbidden path")
    if not abs_path.is_file():
        raise HTTPException(404, "file not found")
    return FileResponse(abs_path, headers={"Cache-Control": MEDIA_CACHE_CONTROL})
