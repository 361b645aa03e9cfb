"""Default page metadata for Sphido.

The ``meta`` extender fills in the well-known keys templates rely on,
keeping whatever earlier extenders (front matter, for instance) already
set.
"""

from __future__ import annotations

import os
import re
from datetime import datetime
from pathlib import Path

from .pages import Page
from .utils import slugify

HEADLINE_RE = re.compile(r"<h[12][^>]*>([^<>]+?)</h[12]>", re.IGNORECASE)


def _modified(path: Path | None, entry: os.DirEntry | None) -> datetime:
    if entry is not None:
        return datetime.fromtimestamp(entry.stat().st_mtime)
    if path is not None:
        return datetime.fromtimestamp(path.stat().st_mtime)
    return datetime.now()


def meta(page: Page, path: Path | None = None, entry: os.DirEntry | None = None) -> None:
    """Fill in ``content``, ``title``, ``slug``, ``date`` and ``tags``.

    - title: existing value, else the first ``<h1>``/``<h2>`` text of the
      content, else the page name;
    - slug: slugified title unless set;
    - date: file modification time unless set;
    - tags: de-duplicated into a set; a single string is one tag.
    """
    page.content = page.get("content") or ""
    title = page.get("title")
    if not title:
        match = HEADLINE_RE.search(page.content)
        title = match.group(1) if match else page.name
    page.title = str(title).strip()
    page.slug = page.get("slug") or slugify(page.title)
    if not page.get("date"):
        source = path or page.get("path")
        page.date = _modified(Path(source) if source else None, entry)
    tags = page.get("tags") or ()
    page.tags = {tags} if isinstance(tags, str) else set(tags)
