"""Task board operations on top of the tree engine."""

from .manager import BoardManager

__all__ = ["BoardManager"]
