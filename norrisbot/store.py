"""
JokeStore - SQLite-backed jokes and settings.

Two tables:
- info(name UNIQUE, val): key/value settings (only "lastrun" is used)
- jokes(id, joke, used): joke text and how many times it was served
"""

import logging
import os
import random
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .errors import JokeNotFound, NoJokesAvailable, StoreError, StoreUnavailable

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS info (
    name TEXT PRIMARY KEY,
    val TEXT DEFAULT NULL
);
CREATE TABLE IF NOT EXISTS jokes (
    id INTEGER PRIMARY KEY,
    joke TEXT NOT NULL,
    used INTEGER NOT NULL DEFAULT 0
);
"""


@dataclass(frozen=True)
class Joke:
    """A joke row."""
    id: int
    text: str
    used: int = 0


class JokeStore:
    """Joke and settings access over a single SQLite connection."""

    def __init__(self, conn: sqlite3.Connection, rng: Optional[random.Random] = None):
        self.conn = conn
        self.rng = rng or random.Random()

    @classmethod
    def open(cls, path: str, rng: Optional[random.Random] = None) -> "JokeStore":
        """
        Open an existing joke database.

        Args:
            path: Path to the SQLite file
            rng: Random source used to break ties between least-used jokes

        Raises:
            StoreUnavailable: file missing or not openable read-write
        """
        if not os.path.isfile(path):
            raise StoreUnavailable(f'Database path "{path}" does not exist or is not readable')

        try:
            # mode=rw keeps sqlite from creating an empty database on a bad path
            conn = sqlite3.connect(
                f"{Path(path).resolve().as_uri()}?mode=rw",
                uri=True,
                check_same_thread=False,
                isolation_level=None,
            )
            conn.execute("SELECT 1 FROM jokes LIMIT 1")
        except sqlite3.Error as e:
            raise StoreUnavailable(f'Cannot open database "{path}": {e}') from e

        logger.info(f"Opened joke store at {path}")
        return cls(conn, rng=rng)

    def close(self):
        self.conn.close()

    def get_setting(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        try:
            row = self.conn.execute(
                "SELECT val FROM info WHERE name = ? LIMIT 1", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read setting {key}: {e}") from e
        return row[0] if row else None

    def set_setting(self, key: str, value: str):
        """Update key in place, inserting it only if no row exists yet."""
        try:
            cur = self.conn.execute("UPDATE info SET val = ? WHERE name = ?", (value, key))
            if cur.rowcount == 0:
                self.conn.execute("INSERT INTO info(name, val) VALUES (?, ?)", (key, value))
        except sqlite3.Error as e:
            raise StoreError(f"Failed to write setting {key}: {e}") from e

    def pick_least_used_joke(self) -> Joke:
        """
        Pick a joke among those served the fewest times.

        Ties are broken uniformly at random with self.rng.

        Raises:
            NoJokesAvailable: jokes table is empty
        """
        try:
            rows = self.conn.execute(
                "SELECT id, joke, used FROM jokes "
                "WHERE used = (SELECT MIN(used) FROM jokes) ORDER BY id"
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read jokes: {e}") from e

        if not rows:
            raise NoJokesAvailable("No jokes in the database")

        joke_id, text, used = self.rng.choice(rows)
        return Joke(id=joke_id, text=text, used=used)

    def mark_served(self, joke_id: int):
        """Increment the usage counter of a joke by one."""
        try:
            cur = self.conn.execute("UPDATE jokes SET used = used + 1 WHERE id = ?", (joke_id,))
        except sqlite3.Error as e:
            raise StoreError(f"Failed to update joke {joke_id}: {e}") from e
        if cur.rowcount == 0:
            raise JokeNotFound(joke_id)

    def count_jokes(self) -> int:
        """Number of joke rows. Used by tests and seeding scripts."""
        try:
            return self.conn.execute("SELECT COUNT(*) FROM jokes").fetchone()[0]
        except sqlite3.Error as e:
            raise StoreError(f"Failed to count jokes: {e}") from e


def create_store(path: str, jokes: Iterable[str] = ()) -> int:
    """
    Create the database schema at path and seed it with jokes.

    Seeding helper for test fixtures and one-off database preparation;
    the bot never calls it. Existing tables and rows are kept, new jokes
    start with used = 0.

    Args:
        path: Path to the SQLite file (parent directory is created)
        jokes: Joke texts to insert

    Returns:
        Number of jokes inserted
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    conn = sqlite3.connect(path)
    try:
        conn.executescript(SCHEMA)
        cur = conn.executemany(
            "INSERT INTO jokes(joke, used) VALUES (?, 0)",
            [(text,) for text in jokes],
        )
        conn.commit()
        inserted = max(cur.rowcount, 0)
    finally:
        conn.close()

    logger.info(f"Seeded {inserted} jokes into {path}")
    return inserted
