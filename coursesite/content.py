# coursesite
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

"""
content.py - Lesson content store

Each lesson's markdown lives at <content_dir>/<slug>.md. A missing file is a
"not found" condition; every other read failure (permissions, I/O faults)
is left to propagate as-is.
"""

import logging
from pathlib import Path
from typing import Iterator

from coursesite.errors import ContentNotFoundError


logger = logging.getLogger(__name__)

CONTENT_SUFFIX = ".md"


def is_safe_path(base_dir: Path, target_path: Path) -> bool:
    """
    Check if target_path is safely within base_dir (no symlink escape).

    Args:
        base_dir: The allowed base directory
        target_path: The path to validate

    Returns:
        True if target is within base (safe), False otherwise
    """
    try:
        target_path.resolve().relative_to(base_dir.resolve())
        return True
    except ValueError:
        return False


class ContentStore:
    """Reads raw lesson markdown from a content directory"""

    def __init__(self, content_dir: Path):
        self.content_dir = Path(content_dir)

    def path_for(self, slug: str) -> Path:
        """Map a lesson slug to its content file path."""
        return self.content_dir / f"{slug}{CONTENT_SUFFIX}"

    def read(self, slug: str) -> str:
        """
        Read the raw markdown for a lesson.

        Args:
            slug: Lesson slug

        Returns:
            File contents as text (UTF-8)

        Raises:
            ContentNotFoundError: If there is no content file for the slug
            OSError: Any other read failure, unchanged
        """
        path = self.path_for(slug)
        if not is_safe_path(self.content_dir, path):
            raise ContentNotFoundError(slug, path)

        try:
            return path.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError) as e:
            logger.info("No content file for lesson '%s' at %s", slug, path)
            raise ContentNotFoundError(slug, path, cause=e) from e

    def exists(self, slug: str) -> bool:
        path = self.path_for(slug)
        return is_safe_path(self.content_dir, path) and path.is_file()

    def iter_content_files(self) -> Iterator[Path]:
        """Yield markdown files directly inside the content directory, sorted by name."""
        if not self.content_dir.is_dir():
            return
        for path in sorted(self.content_dir.iterdir()):
            if path.is_file() and path.suffix == CONTENT_SUFFIX:
                yield path
