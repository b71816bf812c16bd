# app/core/logging.py
# Logger setup for the API process (console + optional rotating file).
import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOGGER_NAME = "mediashelf"


def get_logger(name: str) -> logging.Logger:
    """Child logger under the 'mediashelf' namespace, e.g. 'mediashelf.scanner'."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "msg": record.getMessage(),
            "name": record.name,
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str = "INFO", logs_dir: Optional[Path] = None,
                  json_logs: bool = False) -> logging.Logger:
    """
    Console always; file only when logs_dir is set.
      - console: "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
      - file:    midnight rotation, 14 backups, plain or JSON lines
    Safe to call more than once (handlers are replaced, not stacked).
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(ch)

    if logs_dir:
        logs_dir = Path(logs_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.TimedRotatingFileHandler(
            logs_dir / "mediashelf.log", when="midnight", backupCount=14, encoding="utf-8"
        )
        if json_logs:
            fh.setFormatter(JsonFormatter())
        else:
            fh.setFormatter(logging.Formatter(
                "%(asctime)sZ [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S"
            ))
        logger.addHandler(fh)
        logger.debug(f"Log file: {logs_dir / 'mediashelf.log'}")

    return logger
