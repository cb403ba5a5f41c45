"""
Unit tests for DuckDB persistence of the board.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from checktree.database import DatabaseManager
from checktree.importers import MockImporter
from checktree.models import Task


class TestDatabaseManager(unittest.TestCase):
    """Test database management functionality."""

    def setUp(self):
        """Set up test database."""
        self.temp_dir = tempfile.mkdtemp()
        self.db_path = Path(self.temp_dir) / "test.db"
        self.tasks = MockImporter().get_all_tasks()

    def tearDown(self):
        """Clean up test database."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_database_initialization(self):
        """Test database creation and table initialization."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()

            self.assertTrue(self.db_path.exists())
            self.assertTrue(db.is_empty())

    def test_requires_connection(self):
        """Test operations fail clearly without a connection."""
        db = DatabaseManager(str(self.db_path))
        with self.assertRaises(RuntimeError):
            db.load_tasks()

    def test_save_and_load_tasks(self):
        """Test the board survives a round trip in order."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            written = db.save_tasks(self.tasks)

            self.assertEqual(written, 3)
            self.assertEqual(db.load_tasks(), self.tasks)

    def test_unchanged_tasks_are_not_rewritten(self):
        """Test saving only writes new, edited or moved tasks."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            db.save_tasks(self.tasks)

            self.assertEqual(db.save_tasks(self.tasks), 0)

            edited = self.tasks[2].model_copy(update={"title": "Renamed"})
            self.assertEqual(db.save_tasks([self.tasks[0], self.tasks[1], edited]), 1)
            self.assertEqual(db.get_task("3").title, "Renamed")

    def test_removed_tasks_are_deleted(self):
        """Test tasks missing from the board are removed from storage."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            db.save_tasks(self.tasks)
            db.save_tasks(self.tasks[:1])

            self.assertEqual([task.id for task in db.load_tasks()], ["1"])
            self.assertIsNone(db.get_task("2"))

    def test_reordered_tasks(self):
        """Test a move is persisted as a position change."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            db.save_tasks(self.tasks)

            reordered = [self.tasks[2], self.tasks[0], self.tasks[1]]
            db.save_tasks(reordered)
            self.assertEqual([task.id for task in db.load_tasks()], ["3", "1", "2"])

    def test_content_hash_changes_with_content(self):
        """Test the hash tracks nested content."""
        db = DatabaseManager(str(self.db_path))
        task = self.tasks[1]
        toggled = task.model_copy(update={"content": task.content[1:]})

        self.assertEqual(db.calculate_content_hash(task), db.calculate_content_hash(task))
        self.assertNotEqual(db.calculate_content_hash(task), db.calculate_content_hash(toggled))

    def test_unreadable_record_is_skipped(self):
        """Test a corrupt stored payload does not break loading."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            db.save_tasks(self.tasks[:1])
            db.connection.execute(
                "INSERT INTO tasks (task_id, position, payload, content_hash) VALUES (?, ?, ?, ?)",
                ["broken", 1, '{"id": "broken"}', "x"],
            )

            self.assertEqual([task.id for task in db.load_tasks()], ["1"])

    def test_legacy_payload_is_migrated(self):
        """Test records without newer fields load with defaults."""
        payload = '{"id": "old", "title": "Old", "content": [{"id": "a", "type": "subitem", "text": "x"}]}'
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            db.connection.execute(
                "INSERT INTO tasks (task_id, position, payload, content_hash) VALUES (?, ?, ?, ?)",
                ["old", 0, payload, "x"],
            )

            task = db.get_task("old")
            self.assertIsInstance(task, Task)
            self.assertFalse(task.archived)
            self.assertFalse(task.content[0].completed)

    def test_categories(self):
        """Test the category list is replaced on save."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            db.save_categories(["Research", "Academic"])
            self.assertEqual(db.load_categories(), ["Academic", "Research"])

            db.save_categories(["Home"])
            self.assertEqual(db.load_categories(), ["Home"])


if __name__ == '__main__':
    unittest.main()
