"""Centralized logging configuration for Airplane Mode."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

_APP_LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_APP_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DECISION_LOGGER_NAME = "airplane_mode.decisions"

# Handlers installed by the last setup_logging call
_installed: list[tuple[logging.Logger, logging.Handler]] = []


def setup_logging(log_dir: Path | None = None, level: int = logging.INFO) -> None:
    """Configure logging for the entire application.

    Call once at startup, after the config is loaded.
    """
    if log_dir is None:
        from airplane_mode.config import get_config
        log_dir = Path(get_config().log.dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    for owner, handler in _installed:
        owner.removeHandler(handler)
        handler.close()
    _installed.clear()

    root = logging.getLogger()
    root.setLevel(level)

    # Daily rotating file handler — all application logs
    app_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(log_dir / "airplane-mode.log"),
        when="midnight",
        interval=1,
        backupCount=14,
        encoding="utf-8",
    )
    app_handler.setLevel(level)
    app_handler.setFormatter(
        logging.Formatter(_APP_LOG_FORMAT, datefmt=_APP_LOG_DATE_FORMAT)
    )
    root.addHandler(app_handler)
    _installed.append((root, app_handler))

    # Dedicated decision logger — JSON Lines, size-rotated
    decision_logger = logging.getLogger(_DECISION_LOGGER_NAME)
    decision_logger.propagate = False
    decision_handler = logging.handlers.RotatingFileHandler(
        filename=str(log_dir / "decisions.jsonl"),
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    decision_handler.setLevel(logging.DEBUG)
    decision_handler.setFormatter(logging.Formatter("%(message)s"))
    decision_logger.addHandler(decision_handler)
    _installed.append((decision_logger, decision_handler))
    decision_logger.setLevel(logging.DEBUG)


def log_decision(kind: str, target: str, verdict: str) -> None:
    """Record one gate decision as a JSON Lines entry."""
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "kind": kind,
        "target": target,
        "verdict": verdict,
    }
    logging.getLogger(_DECISION_LOGGER_NAME).info(json.dumps(entry, ensure_ascii=False))
