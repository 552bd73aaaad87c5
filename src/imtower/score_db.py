"""
score_db.py: Best-score persistence backed by SQLite.
"""

import logging
import sqlite3

from .collaborators import ScoreStore, coerce_score
from .constants import DB_FILE, DEFAULT_PROFILE

logger = logging.getLogger(__name__)


class Database(ScoreStore):
    """Handles all interaction with the SQLite database."""
    def __init__(self, db_file: str = DB_FILE, profile: str = DEFAULT_PROFILE):
        self.profile = profile
        self.conn = sqlite3.connect(db_file)
        self.cur = self.conn.cursor()
        self.readable = True
        self.setup()

    def setup(self):
        """Creates tables if they don't exist. A file that is not a database is left untouched."""
        try:
            self._create_tables()
        except sqlite3.DatabaseError as e:
            self.readable = False
            logger.warning(f"Score file is unreadable, starting from 0: {e}")

    def _create_tables(self):
        # best is left untyped so a hand-edited value reads back as stored
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS BestScores (
                profile TEXT PRIMARY KEY,
                best
            )
        """)
        self.conn.commit()

    def load_best(self) -> int:
        """Fetches the best score for this profile, 0 when absent or malformed."""
        if not self.readable:
            return 0
        try:
            self.cur.execute(
                "SELECT best FROM BestScores WHERE profile=?", (self.profile,))
            row = self.cur.fetchone()
        except sqlite3.DatabaseError as e:
            logger.warning(f"Could not read best score: {e}")
            return 0
        if row is None:
            return 0
        return coerce_score(row[0])

    def save_best(self, best: int):
        """
        Stores a new best score. Never lowers an existing record, judged the
        same way load_best reads it, so a malformed row is simply replaced.
        """
        best = max(int(best), self.load_best())
        self.cur.execute("""
            INSERT INTO BestScores (profile, best) VALUES (?, ?)
            ON CONFLICT(profile) DO UPDATE SET best = excluded.best
        """, (self.profile, best))
        self.conn.commit()
        logger.debug(f"Saved best score {best} for profile {self.profile!r}")

    def close(self):
        self.conn.close()


class MemoryScoreStore(ScoreStore):
    """Keeps the best score for the lifetime of the process only."""
    def __init__(self, best: int = 0):
        self.best = best
        self.saves = 0

    def load_best(self) -> int:
        return coerce_score(self.best)

    def save_best(self, best: int):
        self.best = best
        self.saves += 1
