"""Page tree building and walking for Sphido.

This module scans a content directory into a tree of pages and
directories, applying extenders to every page as it is created, and
flattens such a tree back into a sequence of pages.

Key functions:
- build_tree: Recursively scan a directory into a list of nodes.
- walk: Lazily yield every page of a tree, depth first.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from .extenders import apply_extenders
from .pages import Directory, Node, Page
from .protocols import Extender

DEFAULT_EXTENSIONS = (".md", ".html")


class NotFoundError(FileNotFoundError):
    """Raised when the scanned path does not exist or is not a directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Expected a directory at {path}")


def _scan(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: entry.name)


async def build_tree(
    root: str | os.PathLike[str],
    extenders: Sequence[Extender] = (),
    *,
    extensions: Iterable[str] | str = DEFAULT_EXTENSIONS,
) -> list[Node]:
    """Build the page tree of a directory.

    Directories without any matching file below them are left out, and
    symlinks to an enclosing directory are not followed. Every
    page has had all extenders applied, in order, by the time this returns.

    Args:
        root: Directory to scan.
        extenders: Extenders applied to each page, in order.
        extensions: Accepted file suffixes (case-insensitive); a single
            suffix may be given as a string.

    Returns:
        Top-level pages and directories of ``root``.

    Raises:
        NotFoundError: If ``root`` (or a sub-directory during the scan)
            is missing or not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise NotFoundError(root)
    if isinstance(extensions, str):
        extensions = (extensions,)
    accepted = frozenset(ext.lower() for ext in extensions)
    ancestors = frozenset({os.path.realpath(root)})
    return await _build_dir(root, list(extenders), accepted, ancestors)


async def _build_dir(
    directory: Path,
    extenders: list[Extender],
    accepted: frozenset[str],
    ancestors: frozenset[str],
) -> list[Node]:
    try:
        entries = await asyncio.to_thread(_scan, directory)
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise NotFoundError(directory) from exc

    nodes: list[Node] = []
    for entry in entries:
        path = directory / entry.name
        if entry.is_dir():
            # symlinks back to an enclosing directory would recurse forever
            real = os.path.realpath(path)
            if real in ancestors:
                continue
            children = await _build_dir(path, extenders, accepted, ancestors | {real})
            if children:
                nodes.append(Directory(name=entry.name, path=path, children=children))
        elif path.suffix.lower() in accepted:
            page = Page(name=path.stem, path=path)
            await apply_extenders(page, path, entry, extenders)
            nodes.append(page)
    return nodes


def walk(tree: Iterable[Node]) -> Iterator[Page]:
    """Yield every page of a tree, depth first, skipping directories.

    Each call returns an independent generator.

    Args:
        tree: Nodes as returned by :func:`build_tree`.

    Yields:
        Pages in tree order.
    """
    for node in tree:
        if isinstance(node, Directory):
            yield from walk(node.children)
        else:
            yield node
