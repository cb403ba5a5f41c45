"""
Unit tests for configuration management.
"""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from checktree.board import BoardManager
from checktree.config import ConfigManager
from checktree.importers import MockImporter
from checktree.models import Priority


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.database_filename, "checktree.db")
        self.assertEqual(config.new_task_title, "New Task")
        self.assertEqual(config.default_priority, "none")
        self.assertEqual(config.missing_target_policy, "end")
        self.assertEqual(config.backup_directory, "backups")

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
database:
  filename: "test.db"

board:
  new_task_title: "Untitled"

engine:
  missing_target_policy: "drop"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.database_filename, "test.db")
        self.assertEqual(config.new_task_title, "Untitled")
        self.assertEqual(config.missing_target_policy, "drop")
        # Keys absent from the file use the property defaults
        self.assertEqual(config.log_filename, "checktree.log")

    def test_invalid_yaml_falls_back_to_defaults(self):
        """Test a broken file does not stop the tool from starting."""
        with open(self.config_path, 'w') as f:
            f.write("database: [unclosed")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.database_filename, "checktree.db")

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get("logging.level"), "INFO")
        self.assertEqual(config.get("engine.missing_target_policy"), "end")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertEqual(config.get("database"), {"filename": "checktree.db"})

    def test_board_uses_configured_policy(self):
        """Test the board applies the configured missing-target policy and defaults."""
        with open(self.config_path, 'w') as f:
            f.write("board:\n  new_task_title: 'Untitled'\n  default_priority: 'low'\n"
                    "engine:\n  missing_target_policy: 'drop'\n")

        config = ConfigManager(str(self.config_path))
        board = BoardManager(MockImporter().get_all_tasks())

        with patch("checktree.board.manager.config", config):
            task = board.add_task()
            self.assertEqual(task.title, "Untitled")
            self.assertEqual(task.priority, Priority.LOW)

            # Target inside the moved subtree: the block is discarded
            self.assertTrue(board.move_block("2", "2-1", "2-1-1", "after"))
            self.assertEqual([block.id for block in board.get_task("2").content], ["2-2", "2-3", "2-4"])


if __name__ == '__main__':
    unittest.main()
