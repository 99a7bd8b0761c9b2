"""PostgreSQL storage implementation."""

import json
import logging
import os
import psycopg2
from psycopg2.extras import RealDictCursor

from core.interfaces import Storage
from core.models import ScenarioStat

logger = logging.getLogger(__name__)


class PostgresStorage(Storage):
    """PostgreSQL-based storage implementation."""

    def __init__(self, db_url: str = None):
        self.db_url = db_url or os.environ.get(
            'DATABASE_URL',
            'postgresql://localhost:5432/finyap'
        )
        self._conn = None
        self._initialized = False

    @property
    def conn(self):
        """Lazy connection initialization."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.db_url)
            if not self._initialized:
                self._init_db()
                self._initialized = True
        return self._conn

    def _init_db(self):
        """Create tables if they don't exist."""
        with self._conn.cursor() as cur:
            cur.execute("""
                CREATE TABLE IF NOT EXISTS sentences (
                    id SERIAL PRIMARY KEY,
                    scenario VARCHAR(255) NOT NULL,
                    finnish TEXT NOT NULL UNIQUE,
                    english TEXT NOT NULL
                )
            """)
            cur.execute("""
                CREATE TABLE IF NOT EXISTS plays (
                    id SERIAL PRIMARY KEY,
                    sentence_id INTEGER NOT NULL REFERENCES sentences(id),
                    was_correct BOOLEAN NOT NULL,
                    timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            cur.execute("""
                CREATE TABLE IF NOT EXISTS sentence_results (
                    id SERIAL PRIMARY KEY,
                    sentence_id INTEGER NOT NULL REFERENCES sentences(id),
                    completed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    total_duration_ms INTEGER NOT NULL,
                    was_successful BOOLEAN NOT NULL,
                    attempt_details JSONB
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_sentence_results_sentence
                ON sentence_results(sentence_id)
            """)
        self._conn.commit()

    def close(self):
        """Close the database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def sync_sentences(self, sentences: list) -> list:
        try:
            with self.conn.cursor() as cur:
                for s in sentences:
                    cur.execute(
                        "INSERT INTO sentences (scenario, finnish, english) VALUES (%s, %s, %s) "
                        "ON CONFLICT (finnish) DO NOTHING",
                        (s.scenario, s.finnish, s.english)
                    )
                cur.execute("SELECT id, finnish FROM sentences")
                ids = {finnish: sentence_id for sentence_id, finnish in cur.fetchall()}
            self.conn.commit()
        except psycopg2.Error as e:
            logger.error(f"Error syncing sentences: {e}")
            self.conn.rollback()
            raise
        return [s.with_id(ids[s.finnish]) for s in sentences]

    def log_play(self, sentence_id: int, was_correct: bool) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute(
                    "INSERT INTO plays (sentence_id, was_correct) VALUES (%s, %s)",
                    (sentence_id, was_correct)
                )
            self.conn.commit()
        except psycopg2.Error as e:
            logger.error(f"Error logging play to DB: {e}")
            self.conn.rollback()
            raise

    def log_sentence_result(self, result) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO sentence_results
                        (sentence_id, was_successful, total_duration_ms, attempt_details)
                    VALUES (%s, %s, %s, %s)
                """, (result.sentence_id, result.success, result.total_duration_ms,
                      json.dumps(result.attempt_details())))
            self.conn.commit()
        except psycopg2.Error as e:
            logger.error(f"Error logging sentence result to DB: {e}")
            self.conn.rollback()
            raise

    def get_scenario_stats(self) -> list:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute("""
                    SELECT
                        s.scenario,
                        COUNT(sr.id) AS total_plays,
                        COALESCE(SUM(CASE WHEN sr.was_successful THEN 1 ELSE 0 END), 0) AS correct_plays,
                        COUNT(DISTINCT s.id) AS sentence_count
                    FROM sentences s
                    LEFT JOIN sentence_results sr ON s.id = sr.sentence_id
                    GROUP BY s.scenario
                    ORDER BY s.scenario ASC
                """)
                rows = cur.fetchall()
        except psycopg2.Error as e:
            logger.error(f"Failed to query scenario stats: {e}")
            self.conn.rollback()
            raise
        return [
            ScenarioStat(row['scenario'], row['total_plays'], row['correct_plays'],
                         row['sentence_count'])
            for row in rows
        ]
