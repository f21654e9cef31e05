"""PostgreSQL storage implementation."""

import json
import logging
import os
import psycopg2
from psycopg2.extras import RealDictCursor

from core.interfaces import Storage

logger = logging.getLogger(__name__)


class PostgresStorage(Storage):
    """PostgreSQL-based storage implementation."""

    def __init__(self, config_file: str = None, db_url: str = None):
        self.config_file = config_file or os.path.expanduser('~/.config/vocanova/config.json')
        self.db_url = db_url or os.environ.get(
            'DATABASE_URL',
            'postgresql://localhost:5432/vocanova'
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
                CREATE TABLE IF NOT EXISTS user_progress (
                    user_id VARCHAR(255) PRIMARY KEY,
                    state JSONB NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            cur.execute("""
                CREATE TABLE IF NOT EXISTS quiz_results (
                    user_id VARCHAR(255) PRIMARY KEY,
                    results JSONB NOT NULL,
                    completed BOOLEAN NOT NULL DEFAULT TRUE,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
        self._conn.commit()

    def close(self):
        """Close the database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            raise FileNotFoundError(
                f"Config file not found at {self.config_file}\n"
                f'Please create it with: {{"google_stt_api_key": "YOUR_API_KEY_HERE"}}'
            )
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def _fetch_one(self, query: str, user_id: str) -> dict | None:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, (user_id,))
                return cur.fetchone()
        except psycopg2.Error as e:
            logger.error(f"Error reading {user_id}: {e}")
            self.conn.rollback()
            return None

    def _execute(self, query: str, params: tuple) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, params)
            self.conn.commit()
        except psycopg2.Error as e:
            logger.error(f"Error writing: {e}")
            self.conn.rollback()
            raise

    def load_progress(self, user_id: str = "default") -> dict | None:
        row = self._fetch_one("SELECT state FROM user_progress WHERE user_id = %s", user_id)
        return row['state'] if row else None

    def save_progress(self, state: dict, user_id: str = "default") -> None:
        self._execute("""
            INSERT INTO user_progress (user_id, state, updated_at)
            VALUES (%s, %s, CURRENT_TIMESTAMP)
            ON CONFLICT (user_id)
            DO UPDATE SET state = EXCLUDED.state, updated_at = CURRENT_TIMESTAMP
        """, (user_id, json.dumps(state)))

    def save_quiz_results(self, results: dict, user_id: str = "default") -> None:
        self._execute("""
            INSERT INTO quiz_results (user_id, results, completed, updated_at)
            VALUES (%s, %s, TRUE, CURRENT_TIMESTAMP)
            ON CONFLICT (user_id)
            DO UPDATE SET results = EXCLUDED.results, completed = TRUE,
                          updated_at = CURRENT_TIMESTAMP
        """, (user_id, json.dumps(results)))

    def load_quiz_results(self, user_id: str = "default") -> dict | None:
        row = self._fetch_one("SELECT results FROM quiz_results WHERE user_id = %s", user_id)
        return row['results'] if row else None

    def is_quiz_completed(self, user_id: str = "default") -> bool:
        row = self._fetch_one("SELECT completed FROM quiz_results WHERE user_id = %s", user_id)
        return bool(row and row['completed'])

    def clear_quiz_results(self, user_id: str = "default") -> None:
        self._execute("DELETE FROM quiz_results WHERE user_id = %s", (user_id,))
