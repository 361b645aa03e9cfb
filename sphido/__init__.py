"""Sphido static site generator.

Sphido scans a content directory into a tree of pages, lets extenders
enrich every page while the tree is built, and renders the pages through
Jinja2 layouts.

    tree = await build_tree("content", [read_content, frontmatter, markdown, meta])
    for page in walk(tree):
        ...
"""

from .extenders import apply_extenders, merge_into
from .pages import Directory, Page, page_method
from .protocols import Saveable, is_saveable
from .tree import NotFoundError, build_tree, walk

__all__ = [
    "Directory",
    "NotFoundError",
    "Page",
    "Saveable",
    "__version__",
    "apply_extenders",
    "build_tree",
    "is_saveable",
    "merge_into",
    "page_method",
    "walk",
]
__version__ = "0.1.0"
