# app/core/config.py
# Loads Mediashelf settings from a TOML file (defaults + overrides).
# - Reads MEDIASHELF_CONFIG or falls back to ./mediashelf.toml (CWD, then parents)
# - Environment variables override TOML (MEDIA_ROOT, PREVIEW_LIMIT, ...)
# - Paths are resolved once; the media root does not have to exist at load time

from __future__ import annotations
from pathlib import Path
import os
from typing import Dict, List, Optional
import tomli as tomllib  # py3.11+: tomllib in stdlib; using tomli for compatibility


# -------------------- Defaults (used if TOML omits keys) --------------------
_DEFAULTS = {
    "paths": {
        "media_root": ".",
    },
    "scan": {
        "preview_limit": 6,
        "max_items_per_folder": 20000,
        "cache_size": 512,
    },
    "server": {
        "host": "0.0.0.0",
        "port": 4000,
        "cors_origins": ["http://localhost:5173", "http://127.0.0.1:5173"],
    },
    "logging": {
        "level": "INFO",
        "logs_dir": "",      # empty = console only
        "json": False,
    },
}

# env var -> (section, key)
_ENV_OVERRIDES = {
    "MEDIA_ROOT": ("paths", "media_root"),
    "PREVIEW_LIMIT": ("scan", "preview_limit"),
    "MAX_ITEMS_PER_FOLDER": ("scan", "max_items_per_folder"),
    "MEDIASHELF_CACHE_SIZE": ("scan", "cache_size"),
    # SERVER_HOST rather than HOST: shells often export HOST for other purposes
    "SERVER_HOST": ("server", "host"),
    "PORT": ("server", "port"),
    "MEDIASHELF_LOG_LEVEL": ("logging", "level"),
}


def _find_config_path() -> Optional[Path]:
    """Find mediashelf.toml without user input.
    Priority:
      1) MEDIASHELF_CONFIG
      2) ./mediashelf.toml (CWD)
      3) ascend parents from CWD looking for mediashelf.toml
      4) app/mediashelf.toml (next to the app package)
    """
    cfg_env = os.getenv("MEDIASHELF_CONFIG")
    if cfg_env:
        p = Path(cfg_env).expanduser()
        if p.exists():
            return p

    cur = Path.cwd()
    while True:
        candidate = cur / "mediashelf.toml"
        if candidate.exists():
            return candidate
        if cur.parent == cur:
            break  # reached filesystem root
        cur = cur.parent

    app_default = Path(__file__).resolve().parents[1] / "mediashelf.toml"
    if app_default.exists():
        return app_default

    return None


def _load_config_toml(path: Optional[Path] = None) -> dict:
    """Load TOML from the given or best-match path; {} if none is found."""
    path = path or _find_config_path()
    if path and path.exists():
        with path.open("rb") as f:
            return tomllib.load(f)
    return {}


def _merge(cfg: dict) -> Dict[str, dict]:
    """Shallow per-section merge of user config over _DEFAULTS."""
    return {
        section: {**defaults, **(cfg.get(section) or {})}
        for section, defaults in _DEFAULTS.items()
    }


def _positive_int(name: str, value) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if n < 1:
        raise ValueError(f"{name} must be >= 1, got {n}")
    return n


class Settings:
    """
    Effective settings for one process.
    Built from merged TOML sections, or constructed directly.
    """
    def __init__(
        self,
        media_root: Path,
        preview_limit: int = 6,
        max_items_per_folder: int = 20000,
        cache_size: int = 512,
        host: str = "0.0.0.0",
        port: int = 4000,
        cors_origins: Optional[List[str]] = None,
        log_level: str = "INFO",
        logs_dir: Optional[Path] = None,
        json_logs: bool = False,
    ) -> None:
        self.media_root: Path = Path(media_root).expanduser().resolve()
        self.preview_limit: int = _positive_int("preview_limit", preview_limit)
        self.max_items_per_folder: int = _positive_int("max_items_per_folder", max_items_per_folder)
        self.cache_size: int = _positive_int("cache_size", cache_size)
        self.host: str = str(host)
        self.port: int = _positive_int("port", port)
        self.cors_origins: List[str] = list(cors_origins or [])
        self.log_level: str = str(log_level).upper()
        self.logs_dir: Optional[Path] = Path(logs_dir).expanduser() if logs_dir else None
        self.json_logs: bool = bool(json_logs)

    @classmethod
    def from_dict(cls, cfg: dict) -> "Settings":
        c = _merge(cfg)
        return cls(
            media_root=c["paths"]["media_root"],
            preview_limit=c["scan"]["preview_limit"],
            max_items_per_folder=c["scan"]["max_items_per_folder"],
            cache_size=c["scan"]["cache_size"],
            host=c["server"]["host"],
            port=c["server"]["port"],
            cors_origins=c["server"]["cors_origins"],
            log_level=c["logging"]["level"],
            logs_dir=c["logging"]["logs_dir"] or None,
            json_logs=c["logging"]["json"],
        )

    def __repr__(self) -> str:
        return (
            f"Settings(media_root={self.media_root}, preview_limit={self.preview_limit}, "
            f"max_items_per_folder={self.max_items_per_folder}, cache_size={self.cache_size}, "
            f"host={self.host}, port={self.port}, log_level={self.log_level})"
        )


def apply_env_overrides(cfg: dict, environ: Optional[dict] = None) -> dict:
    """Return a copy of cfg with any _ENV_OVERRIDES present in environ applied."""
    environ = os.environ if environ is None else environ
    out = {section: dict(values) for section, values in cfg.items() if isinstance(values, dict)}
    for var, (section, key) in _ENV_OVERRIDES.items():
        value = environ.get(var)
        if value is None or value == "":
            continue
        out.setdefault(section, {})[key] = value
    return out


def load_settings(path: Optional[Path] = None, environ: Optional[dict] = None) -> Settings:
    """TOML (if found) -> env overrides -> Settings."""
    cfg = _load_config_toml(path)
    return Settings.from_dict(apply_env_overrides(cfg, environ))
