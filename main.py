#!/usr/bin/env python3
"""
Checktree - Nestable Checklist Manager

Main entry point for the Checktree command line. Each command loads the board
from the database, applies one action through the board manager, and saves
the result.
"""

import logging
import sys
import argparse
from typing import List

from checktree import __version__
from checktree.board import BoardManager
from checktree.config import config
from checktree.database import DatabaseManager
from checktree.engine import count_progress
from checktree.importers import JSONBackupImporter, MockImporter, export_tasks
from checktree.models import CheckableItem, Forest, Task


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def format_forest(forest: Forest, depth: int = 0) -> List[str]:
    """
    Render a content forest as indented text lines.

    Args:
        forest: The blocks to render
        depth: Indentation level of the blocks

    Returns:
        One line per block, descendants included
    """
    lines = []
    indent = "  " * depth
    for block in forest:
        if isinstance(block, CheckableItem):
            mark = "x" if block.completed else " "
            lines.append(f"{indent}[{mark}] {block.text}  ({block.id})")
            lines.extend(format_forest(block.children, depth + 1))
        else:
            lines.append(f"{indent}  {block.text}  ({block.id})")
    return lines


def format_task_summary(task: Task) -> str:
    """One-line summary of a task with its progress."""
    progress = count_progress(task.content)
    flags = " [archived]" if task.archived else ""
    category = f" #{task.category}" if task.category else ""
    due = f" due {task.due_date.isoformat()}" if task.due_date else ""
    return (
        f"{task.id}: {task.title} ({task.priority.value}{category}{due}) "
        f"{progress.completed}/{progress.total} {progress.percent}%{flags}"
    )


def load_board(db: DatabaseManager) -> BoardManager:
    """
    Load the board, seeding the sample tasks into an empty database.
    """
    if db.is_empty():
        logging.info("Empty database, seeding sample tasks")
        board = BoardManager(MockImporter().get_all_tasks())
        save_board(db, board)
        return board

    return BoardManager(db.load_tasks(), db.load_categories() or None)


def save_board(db: DatabaseManager, board: BoardManager) -> None:
    """Persist tasks and categories."""
    db.save_tasks(board.tasks)
    db.save_categories(board.categories)


def run_command(args, board: BoardManager) -> bool:
    """
    Apply one command to the board.

    Returns:
        True if the board changed and must be saved
    """
    command = args.command

    if command == "list":
        for task in board.filter_tasks(
            show_archived=args.archived,
            priority=args.priority,
            category=args.category,
            status=args.status,
            query=args.search or "",
        ):
            print(format_task_summary(task))
        return False

    if command == "show":
        task = board.get_task(args.task)
        if not task:
            print(f"Task not found: {args.task}")
            return False
        print(format_task_summary(task))
        for line in format_forest(task.content):
            print(line)
        return False

    if command == "add-task":
        task = board.add_task(args.title, args.category)
        print(f"Created task {task.id}")
        return True

    if command == "add-item":
        if args.parent:
            block_id = board.add_nested_item(args.task, args.parent)
        else:
            block_id = board.add_block(args.task, "subitem")
        if block_id and args.text:
            board.update_block(args.task, block_id, text=args.text)
        print(f"Created item {block_id}" if block_id else "Task or parent item not found")
        return block_id is not None

    if command == "add-note":
        block_id = board.add_block(args.task, "text")
        if block_id and args.text:
            board.update_block(args.task, block_id, text=args.text)
        print(f"Created note {block_id}" if block_id else "Task not found")
        return block_id is not None

    if command == "edit":
        changed = board.update_block(args.task, args.block, text=args.text)
    elif command == "toggle":
        changed = board.toggle_item(args.task, args.item)
    elif command == "toggle-all":
        changed = board.toggle_all(args.task, not args.undone)
    elif command == "delete":
        changed = board.delete_block(args.task, args.block)
    elif command == "move":
        changed = board.move_block(args.task, args.source, args.target, args.position)
    elif command == "move-task":
        changed = board.move_task(args.source, args.target, args.position)
    elif command == "archive":
        changed = board.toggle_archive(args.task)
    elif command == "remove-task":
        changed = board.delete_task(args.task)
    elif command == "export":
        path = export_tasks(board.tasks, args.dir or config.backup_directory)
        print(f"Exported {len(board.tasks)} tasks to {path}")
        return False
    elif command == "import":
        board.reset(JSONBackupImporter(args.file).get_all_tasks())
        print(f"Imported {len(board.tasks)} tasks")
        return True
    elif command == "reset":
        board.reset(MockImporter().get_all_tasks())
        print("Board reset to the sample tasks")
        return True
    else:
        raise ValueError(f"Unknown command: {command}")

    print("Done." if changed else "Nothing changed.")
    return changed


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Checktree - Nestable Checklist Manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py list                             # List active tasks with progress
  python main.py show 2                           # Show the checklist tree of task 2
  python main.py toggle 2 2-1                     # Toggle an item and cascade
  python main.py move 2 2-3 --target 2-1-1 --position after
  python main.py export --dir backups             # Write a dated JSON backup
        """
    )

    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="Path to the database file (default: from config)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Checktree {__version__}"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List tasks")
    p.add_argument("--archived", action="store_true", help="Show archived tasks")
    p.add_argument("--priority", choices=["none", "low", "medium", "high", "urgent"])
    p.add_argument("--category")
    p.add_argument("--status", choices=["completed", "in-progress"])
    p.add_argument("--search")

    p = sub.add_parser("show", help="Show a task and its checklist tree")
    p.add_argument("task")

    p = sub.add_parser("add-task", help="Create a task")
    p.add_argument("title", nargs="?")
    p.add_argument("--category")

    p = sub.add_parser("add-item", help="Add a checklist item")
    p.add_argument("task")
    p.add_argument("text", nargs="?", default="")
    p.add_argument("--parent", help="Nest the item under this item")

    p = sub.add_parser("add-note", help="Add a note")
    p.add_argument("task")
    p.add_argument("text", nargs="?", default="")

    p = sub.add_parser("edit", help="Change the text of a block")
    p.add_argument("task")
    p.add_argument("block")
    p.add_argument("text")

    p = sub.add_parser("toggle", help="Toggle an item and cascade")
    p.add_argument("task")
    p.add_argument("item")

    p = sub.add_parser("toggle-all", help="Complete every item of a task")
    p.add_argument("task")
    p.add_argument("--undone", action="store_true", help="Clear every item instead")

    p = sub.add_parser("delete", help="Delete a block and its subtree")
    p.add_argument("task")
    p.add_argument("block")

    p = sub.add_parser("move", help="Move a block within a task")
    p.add_argument("task")
    p.add_argument("source")
    p.add_argument("--target")
    p.add_argument("--position", choices=["before", "after", "end"], default="end")

    p = sub.add_parser("move-task", help="Reorder tasks")
    p.add_argument("source")
    p.add_argument("target")
    p.add_argument("--position", choices=["before", "after"], default="before")

    p = sub.add_parser("archive", help="Archive or unarchive a task")
    p.add_argument("task")

    p = sub.add_parser("remove-task", help="Delete a task")
    p.add_argument("task")

    p = sub.add_parser("export", help="Write a JSON backup")
    p.add_argument("--dir")

    p = sub.add_parser("import", help="Replace the board with a JSON backup")
    p.add_argument("file")

    sub.add_parser("reset", help="Replace the board with the sample tasks")

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging()

    logging.info(f"Checktree command: {args.command}")

    try:
        with DatabaseManager(args.db or config.database_filename) as db:
            db.initialize_database()
            board = load_board(db)
            if run_command(args, board):
                save_board(db, board)

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        print("\nInterrupted.")

    except Exception as e:
        logging.error(f"Command {args.command} failed: {e}")
        print(f"\nCommand failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
