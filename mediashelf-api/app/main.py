# app/main.py: only app wiring, no endpoints here.
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, load_settings
from app.core.logging import get_logger, setup_logging
from app.services.cache import FolderCache
from app.services.scanner import MediaScanner

# import routers
from app.api.routes import folders

logger = get_logger("main")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.logs_dir, settings.json_logs)

    app = FastAPI(title="Mediashelf API", version="0.1")
    app.state.settings = settings
    app.state.scanner = MediaScanner(
        settings.media_root,
        preview_limit=settings.preview_limit,
        max_items=settings.max_items_per_folder,
        cache=FolderCache(settings.cache_size),
    )

    # CORS (allow Vite dev by default)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # API routers
    app.include_router(folders.api_router, prefix="/api")

    # public (non-API) router: /health and /media/*
    app.include_router(folders.public_router)

    if not settings.media_root.is_dir():
        logger.warning(f"media root does not exist or is not a directory: {settings.media_root}")
    logger.info(
        f"mediashelf ready: media_root={settings.media_root} "
        f"preview_limit={settings.preview_limit} max_items={settings.max_items_per_folder}"
    )
    return app


app = create_app()
