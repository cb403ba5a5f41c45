"""
JSON backup import and export for Checktree.

Backups are a JSON array of task records using camelCase keys. Records from
older versions may lack fields such as "archived", "createdAt", or the
"completed"/"children" fields of checkable items; they are filled with
defaults while loading.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from ..models import Task
from .base import BaseImporter

BACKUP_PREFIX = "checklist-v2-backup"


class JSONBackupImporter(BaseImporter):
    """
    Importer for JSON backup files written by export_tasks.
    """

    def __init__(self, backup_path: str):
        """
        Initialize the backup importer.

        Args:
            backup_path: Path to the backup file
        """
        self.backup_path = Path(backup_path)
        logging.info(f"Initialized JSON backup importer for: {self.backup_path}")

    def get_all_tasks(self) -> List[Task]:
        """
        Load every task from the backup file.

        Returns:
            List of tasks in file order

        Raises:
            FileNotFoundError: If the backup file does not exist
            ValueError: If the file is not a valid backup
        """
        if not self.backup_path.is_file():
            raise FileNotFoundError(f"Backup file not found: {self.backup_path}")

        try:
            data = json.loads(self.backup_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed JSON in {self.backup_path}: {e}") from e

        tasks = parse_task_records(data)
        logging.info(f"Loaded {len(tasks)} tasks from {self.backup_path}")
        return tasks


def parse_task_records(data: Any) -> List[Task]:
    """
    Validate raw backup data and build tasks from it.

    Args:
        data: Decoded JSON; must be a list of objects each having "id" and "title"

    Returns:
        List of tasks

    Raises:
        ValueError: If the data does not have the backup shape
    """
    if not isinstance(data, list) or not all(
        isinstance(record, dict) and "id" in record and "title" in record for record in data
    ):
        raise ValueError("Invalid file format: expected a list of tasks with 'id' and 'title'")

    try:
        return [Task.model_validate(record) for record in data]
    except ValidationError as e:
        raise ValueError(f"Invalid file format: {e}") from e


def backup_filename(day: Optional[date] = None) -> str:
    """Name of the backup file for a given day (today by default)."""
    day = day or date.today()
    return f"{BACKUP_PREFIX}-{day.isoformat()}.json"


def export_tasks(tasks: Iterable[Task], directory: str, day: Optional[date] = None) -> Path:
    """
    Write tasks to a dated backup file.

    Args:
        tasks: Tasks to export
        directory: Directory to write into (created if missing)
        day: Date used in the file name (today by default)

    Returns:
        Path of the written file
    """
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / backup_filename(day)

    records = [task.model_dump(mode="json", by_alias=True) for task in tasks]
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(records, f, indent=2, ensure_ascii=False)

    logging.info(f"Exported {len(records)} tasks to {path}")
    return path
