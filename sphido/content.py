"""Content pipeline for Sphido.

Key classes and functions:
- UrlDeriver: Extender deriving the URL of a page from its location.
- default_extenders: The standard extender chain for content files.
"""

from __future__ import annotations

import os
from pathlib import Path

from .extractors import frontmatter, read_content
from .meta import meta
from .pages import Page
from .protocols import Extender
from .renderers import markdown


class UrlDeriver:
    """Derives URLs for pages.

    The URL is the page's folder relative to the content root followed by
    its slug. ``index`` pages map to their folder. Pages that already have
    a ``url`` keep it.

    Attributes:
        content_dir: Root of the content tree.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = Path(content_dir)

    def derive(self, rel: Path, slug: str, name: str) -> str:
        """Derive the URL for a page.

        Args:
            rel: Path relative to the content directory.
            slug: URL-friendly slug.
            name: Page name (file name without extension).

        Returns:
            URL path for the page.
        """
        segments = [p for p in rel.parent.parts if p]
        url_parts = segments if name == "index" else segments + [slug]
        path = "/".join(url_parts)
        return f"/{path}/" if path else "/"

    def __call__(self, page: Page, path: Path, entry: os.DirEntry | None = None) -> None:
        if page.get("url"):
            return
        rel = path.relative_to(self.content_dir)
        slug = page.get("slug") or page.name
        page.url = self.derive(rel, slug, page.name)


def default_extenders(content_dir: Path) -> list[Extender]:
    """Return the standard extender chain for a content directory.

    Args:
        content_dir: Root of the content tree.

    Returns:
        Extenders reading, parsing, rendering and describing each page.
    """
    return [read_content, frontmatter, markdown, meta, UrlDeriver(content_dir)]
