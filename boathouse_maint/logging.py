from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILE_NAME = "boathouse_maint.log"


def _resolve_log_dir(settings: object) -> Path | None:
    """Resolve LOG_DIR, treating relative paths as relative to the project root.

    Returns None when file logging is not configured.
    """

    raw = getattr(settings, "LOG_DIR", None)
    if raw is None or str(raw).strip() == "":
        return None
    p = raw if isinstance(raw, Path) else Path(str(raw))
    if p.is_absolute():
        return p

    project_root = Path(__file__).resolve().parents[1]
    return project_root / p


def setup_logging(settings: object) -> Path | None:
    """Configure root logging for a maintenance run.

    Always logs to the console; when LOG_DIR is set, also writes to a log
    file rotated at midnight, keeping `LOG_BACKUP_COUNT` old files.

    Returns the log file path, or None when only console logging is enabled.
    Safe to call multiple times (it resets handlers).
    """

    level_name = str(getattr(settings, "LOG_LEVEL", "INFO") or "INFO").upper().strip()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = []
    root.setLevel(level)
    root.addHandler(console_handler)

    log_file: Path | None = None
    log_dir = _resolve_log_dir(settings)
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME
        file_handler = TimedRotatingFileHandler(
            filename=str(log_file),
            when="midnight",
            interval=1,
            backupCount=max(0, int(getattr(settings, "LOG_BACKUP_COUNT", 14) or 0)),
            encoding="utf-8",
            utc=False,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # psycopg is chatty at DEBUG; only let it through when SQL echo is wanted.
    log_sql = bool(getattr(settings, "DB_LOG_SQL", False))
    logging.getLogger("psycopg").setLevel(logging.DEBUG if log_sql else logging.WARNING)

    logging.getLogger("boathouse_maint").debug(
        "logging configured (file=%s, level=%s, sql=%s)",
        os.fspath(log_file) if log_file else None,
        level_name,
        log_sql,
    )

    return log_file
