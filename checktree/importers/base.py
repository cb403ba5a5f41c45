"""
Base importer interface for Checktree.

This module defines the abstract interface that all task sources must implement.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import Task


class BaseImporter(ABC):
    """
    Abstract base class for all task importers.

    Each importer turns data from a specific source (a backup file, the
    built-in sample board, an assistant's suggestions) into Task objects
    with well-formed content forests.
    """

    @abstractmethod
    def get_all_tasks(self) -> List[Task]:
        """
        Retrieve all tasks from the source.

        Returns:
            List of Task objects in display order
        """
        pass
