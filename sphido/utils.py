"""Utility functions for Sphido.

Key functions:
    slugify: Convert titles and filenames to URL slugs.
    is_markdown: Check if a path is a Markdown file.
    build_tags_index: Build index of pages by tags.
    ensure_clean_dir: Ensure a directory exists and is empty.
"""

from __future__ import annotations

import re
import shutil
from collections.abc import Iterable
from pathlib import Path


def slugify(name: str) -> str:
    """Convert a title or filename stem to a slug, dropping any date prefix.

    Args:
        name: Title or filename stem.

    Returns:
        URL-friendly slug.

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'

        >>> slugify("2024-01-15-first-post")
        'first-post'
    """
    cleaned = name
    if "-" in cleaned:
        parts = cleaned.split("-")
        if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
            cleaned = "-".join(parts[3:])
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def build_tags_index(pages: Iterable) -> dict[str, list]:
    """Build an index mapping tags to lists of pages containing that tag.

    Pages without tags are skipped.

    Args:
        pages: Iterable of pages, optionally carrying a ``tags`` collection.

    Returns:
        Dictionary mapping tag names to lists of pages.
    """
    tags: dict[str, list] = {}
    for page in pages:
        for tag in sorted(page.get("tags") or ()):
            tags.setdefault(tag, []).append(page)
    return tags


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)
