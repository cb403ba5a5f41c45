"""Task importers and exporters."""

from .base import BaseImporter
from .mock import MockImporter
from .json_backup import JSONBackupImporter, export_tasks, parse_task_records, backup_filename
from .suggestions import SuggestionImporter

__all__ = [
    "BaseImporter",
    "MockImporter",
    "JSONBackupImporter",
    "SuggestionImporter",
    "export_tasks",
    "parse_task_records",
    "backup_filename"
]
