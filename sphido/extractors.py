"""Content loading extenders for Sphido.

Key functions:
- read_content: Load the source file text into ``page.content``.
- frontmatter: Merge a YAML front matter block onto the page.
"""

from __future__ import annotations

import asyncio
import os
import re
from pathlib import Path
from typing import Any

import yaml

from .extenders import merge_into
from .pages import Page

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        return {}, text
    if not isinstance(data, dict):
        return {}, text
    return data, text[match.end() :]


async def read_content(page: Page, path: Path, entry: os.DirEntry | None = None) -> None:
    """Read the source file into ``page.content`` unless it is already set."""
    if "content" not in page:
        page.content = await asyncio.to_thread(path.read_text, encoding="utf-8")


def frontmatter(page: Page, path: Path, entry: os.DirEntry | None = None) -> None:
    """Merge the page's YAML front matter onto it.

    The front matter block is removed from ``page.content``. Pages without
    content or without a valid block are left unchanged.
    """
    if not page.get("content"):
        return
    data, body = extract_frontmatter(page.content)
    merge_into(page, data)
    page.content = body
