"""
Database manager for Checktree.

This module persists the task board using DuckDB. Each task is stored as its
canonical JSON payload together with its board position and a content hash,
so saving a board only rewrites the tasks that actually changed.
"""

import duckdb
import hashlib
import json
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from ..models import Task


class DatabaseManager:
    """
    Manages the DuckDB database holding tasks and categories.
    """

    def __init__(self, db_path: str = "checktree.db"):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the DuckDB database file
        """
        self.db_path = db_path
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def _require_connection(self):
        if not self.connection:
            raise RuntimeError("Database connection not established")
        return self.connection

    def initialize_database(self):
        """
        Create all necessary tables if they don't exist.
        """
        connection = self._require_connection()

        connection.execute("""
            CREATE TABLE IF NOT EXISTS tasks (
                task_id VARCHAR PRIMARY KEY,
                position INTEGER NOT NULL,
                payload VARCHAR NOT NULL,
                content_hash VARCHAR NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        connection.execute("""
            CREATE TABLE IF NOT EXISTS categories (
                name VARCHAR PRIMARY KEY
            )
        """)

    @staticmethod
    def serialize_task(task: Task) -> str:
        """Canonical JSON of a task, using the stored camelCase keys."""
        return json.dumps(task.model_dump(mode="json", by_alias=True), sort_keys=True, ensure_ascii=True)

    def calculate_content_hash(self, task: Task) -> str:
        """
        Calculate SHA-256 hash of a task's canonical JSON representation.

        Args:
            task: The task to hash

        Returns:
            The SHA-256 hash as a hex string
        """
        return hashlib.sha256(self.serialize_task(task).encode('utf-8')).hexdigest()

    def _stored_state(self) -> Dict[str, Tuple[int, str]]:
        rows = self._require_connection().execute(
            "SELECT task_id, position, content_hash FROM tasks"
        ).fetchall()
        return {row[0]: (row[1], row[2]) for row in rows}

    def save_tasks(self, tasks: Iterable[Task]) -> int:
        """
        Store the board, writing only tasks that are new, edited or moved.

        Tasks no longer on the board are deleted. The whole save runs in a
        single transaction.

        Args:
            tasks: The tasks in board order

        Returns:
            Number of task rows written
        """
        connection = self._require_connection()
        tasks = list(tasks)
        stored = self._stored_state()
        written = 0

        connection.begin()
        try:
            for position, task in enumerate(tasks):
                content_hash = self.calculate_content_hash(task)
                if stored.get(task.id) == (position, content_hash):
                    continue

                connection.execute("""
                    INSERT OR REPLACE INTO tasks (task_id, position, payload, content_hash, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                """, [task.id, position, self.serialize_task(task), content_hash, datetime.now()])
                written += 1

            kept = {task.id for task in tasks}
            for task_id in set(stored) - kept:
                connection.execute("DELETE FROM tasks WHERE task_id = ?", [task_id])

            connection.commit()
        except Exception:
            connection.rollback()
            raise

        logging.info(f"Saved {written} of {len(tasks)} tasks")
        return written

    def _parse_payload(self, task_id: str, payload: str) -> Optional[Task]:
        try:
            return Task.model_validate_json(payload)
        except ValidationError as e:
            logging.error(f"Skipping unreadable task record {task_id}: {e}")
            return None

    def load_tasks(self) -> List[Task]:
        """
        Load the board in display order.

        Records written by older versions are migrated on the way in;
        records that cannot be validated are logged and skipped.

        Returns:
            List of tasks
        """
        rows = self._require_connection().execute("""
            SELECT task_id, payload FROM tasks ORDER BY position, task_id
        """).fetchall()

        tasks = [self._parse_payload(row[0], row[1]) for row in rows]
        return [task for task in tasks if task is not None]

    def get_task(self, task_id: str) -> Optional[Task]:
        """
        Retrieve a single task.

        Args:
            task_id: Identity of the task

        Returns:
            The task if found and readable, None otherwise
        """
        result = self._require_connection().execute(
            "SELECT payload FROM tasks WHERE task_id = ?", [task_id]
        ).fetchone()

        if result:
            return self._parse_payload(task_id, result[0])
        return None

    def save_categories(self, names: Iterable[str]) -> None:
        """Replace the stored category list."""
        connection = self._require_connection()
        wanted = set(names)
        stored = set(self.load_categories())

        # Only the difference is written; rows are never deleted and re-inserted
        connection.begin()
        try:
            for name in sorted(stored - wanted):
                connection.execute("DELETE FROM categories WHERE name = ?", [name])
            for name in sorted(wanted - stored):
                connection.execute("INSERT INTO categories (name) VALUES (?)", [name])
            connection.commit()
        except Exception:
            connection.rollback()
            raise

    def load_categories(self) -> List[str]:
        """Return the stored categories, sorted."""
        rows = self._require_connection().execute(
            "SELECT name FROM categories ORDER BY name"
        ).fetchall()
        return [row[0] for row in rows]

    def is_empty(self) -> bool:
        """True when no task has been stored yet."""
        result = self._require_connection().execute("SELECT COUNT(*) FROM tasks").fetchone()
        return not result or result[0] == 0
