"""
File utilities for the OAS generator.

This module provides the file operations used by the CLI to place the
generated TypeScript client on disk.
"""

import shutil
from pathlib import Path


def write_files_to_disk(files: dict[Path, str]) -> None:
    """Write generated files to disk.

    Args:
        files: Dictionary mapping file paths to their content.
    """
    for path, content in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def backup_file(path: Path, backup_dir: Path) -> Path | None:
    """Copy an existing file into ``backup_dir``.

    Args:
        path: File to back up.
        backup_dir: Directory receiving the copy.

    Returns:
        The path of the backup copy, or None when ``path`` does not exist.
    """
    if not path.is_file():
        return None
    backup_dir.mkdir(parents=True, exist_ok=True)
    destination = backup_dir / path.name
    shutil.copy2(path, destination)
    return destination


def restore_file(backup: Path, destination: Path) -> None:
    """Put a backed up file back in place.

    Args:
        backup: Backup copy created by :func:`backup_file`.
        destination: Original location of the file.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(backup, destination)
