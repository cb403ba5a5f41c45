"""Persistence of the task board."""

from .manager import DatabaseManager

__all__ = ["DatabaseManager"]
