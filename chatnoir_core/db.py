from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from typing import Dict

PLAYER_WINS = 'player_wins'
CAT_WINS = 'cat_wins'
COUNTERS = (PLAYER_WINS, CAT_WINS)


def _ensure_db_dir(db_path: str) -> None:
    """Ensures the directory for the SQLite DB exists before connecting."""
    directory = os.path.dirname(db_path)
    if directory and not os.path.isdir(directory):
        os.makedirs(directory, exist_ok=True)


def _resolve_db_path(db_path: str) -> str:
    """Resolves a potentially unwritable DB path to a writable one, creating the directory if needed."""
    try:
        _ensure_db_dir(db_path)
        return db_path
    except OSError:
        pass
    candidates = [
        os.getenv('CHATNOIR_DB_DIR'),
        os.path.join(os.getcwd(), 'data'),
        '/tmp',
    ]
    base = os.path.basename(db_path) or 'chatnoir.db'
    for d in candidates:
        if not d:
            continue
        try:
            os.makedirs(d, exist_ok=True)
            return os.path.join(d, base)
        except OSError:
            continue
    # Last resort: current working directory
    return base


def _ensure_db(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS scores (
            name TEXT PRIMARY KEY,
            wins INTEGER NOT NULL,
            updated_at TEXT NOT NULL
        )
        """
    )
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(_resolve_db_path(db_path))
    _ensure_db(conn)
    return conn


def _now() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def db_load_scores(db_path: str) -> Dict[str, int]:
    """Reads both win counters; counters never written read as 0."""
    conn = _connect(db_path)
    try:
        scores = {name: 0 for name in COUNTERS}
        for name, wins in conn.execute("SELECT name, wins FROM scores"):
            if name in scores:
                scores[name] = int(wins)
        return scores
    finally:
        conn.close()


def db_increment_score(db_path: str, name: str) -> int:
    """Adds one win to the named counter and returns its new value."""
    if name not in COUNTERS:
        raise ValueError(f'Unknown counter: {name}')
    conn = _connect(db_path)
    try:
        conn.execute(
            """
            INSERT INTO scores (name, wins, updated_at) VALUES (?, 1, ?)
            ON CONFLICT(name) DO UPDATE SET wins = wins + 1, updated_at = excluded.updated_at
            """,
            (name, _now()),
        )
        conn.commit()
        row = conn.execute("SELECT wins FROM scores WHERE name = ?", (name,)).fetchone()
        return int(row[0])
    finally:
        conn.close()


def db_reset_scores(db_path: str) -> None:
    conn = _connect(db_path)
    try:
        conn.execute("DELETE FROM scores")
        conn.commit()
    finally:
        conn.close()
