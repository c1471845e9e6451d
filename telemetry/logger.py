# telemetry/logger.py
from __future__ import annotations

import json
import logging
import sqlite3
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from settings import LOG_LEVEL, TELEMETRY_DB


# -------------------------------------------------------------------
# Application logger
# -------------------------------------------------------------------
def get_logger(name: str = "advisor") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s", datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))
    logger.propagate = False
    return logger


# -------------------------------------------------------------------
# Event telemetry (sqlite)
# -------------------------------------------------------------------
def _conn() -> sqlite3.Connection:
    c = sqlite3.connect(TELEMETRY_DB)
    c.execute(
        """
        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            ts TEXT NOT NULL,
            user_id TEXT,
            event TEXT NOT NULL,
            payload TEXT NOT NULL
        )
        """
    )
    c.commit()
    return c


def log_event(event: str, payload: Dict[str, Any], user_id: Optional[str] = None) -> None:
    """
    Telemetry must NEVER crash production logic.
    Payload carries counts and flags, not raw profile text.
    """
    try:
        ts = datetime.now(timezone.utc).isoformat()
        with _conn() as c:
            c.execute(
                "INSERT INTO events (ts, user_id, event, payload) VALUES (?, ?, ?, ?)",
                (ts, user_id, event, json.dumps(payload, ensure_ascii=False)),
            )
            c.commit()
    except Exception as e:
        get_logger("telemetry").debug("log_event(%s) dropped: %s", event, e)


def recent_events(limit: int = 50) -> list[Dict[str, Any]]:
    try:
        with _conn() as c:
            rows = c.execute(
                "SELECT ts, user_id, event, payload FROM events ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
    except Exception:
        return []
    return [
        {"ts": ts, "user_id": uid, "event": ev, "payload": json.loads(payload)}
        for ts, uid, ev, payload in rows
    ]
