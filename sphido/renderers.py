"""Markdown rendering extender for Sphido.

Key functions:
- render_markdown: Render Markdown text to HTML and collect its headings.
- markdown: Extender rendering ``page.content`` of Markdown files.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import mistune

from .pages import Heading, Page
from .utils import is_markdown

PLUGINS = ["strikethrough", "footnotes", "table", "url"]


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = text.lower().strip()
    slug = re.sub(r"<[^>]+>", "", slug)
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


class _TocRenderer(mistune.HTMLRenderer):
    """HTML renderer giving headings anchor IDs and recording them.

    Attributes:
        headings: List of Heading objects extracted during rendering.
    """

    def __init__(self):
        super().__init__(escape=False)
        self.headings: list[Heading] = []
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        base_id = _generate_heading_id(text)

        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        self.headings.append(Heading(id=heading_id, text=text, level=level))
        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'


def render_markdown(text: str) -> tuple[str, list[Heading]]:
    """Render Markdown content to HTML.

    Args:
        text: Markdown source.

    Returns:
        Tuple of (rendered HTML, list of Heading objects).
    """
    renderer = _TocRenderer()
    md = mistune.create_markdown(renderer=renderer, plugins=PLUGINS)
    return md(text), renderer.headings


def markdown(page: Page, path: Path, entry: os.DirEntry | None = None) -> None:
    """Render the content of Markdown pages in place and store their TOC."""
    if not is_markdown(path):
        return
    page.content, page.toc = render_markdown(page.get("content") or "")
