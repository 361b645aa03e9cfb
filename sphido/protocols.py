"""Protocol definitions for Sphido.

This module defines the interfaces extenders and pages are expected to
satisfy. Nothing here is enforced at build time; the tree builder only
distinguishes mappings from callables.
"""

from __future__ import annotations

import os
from abc import abstractmethod
from collections.abc import Awaitable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from .pages import Page


@runtime_checkable
class CallbackExtender(Protocol):
    """Protocol for extenders that mutate a page in place.

    Implementations may be plain functions, coroutine functions or objects
    with ``__call__``. A returned awaitable is awaited before the next
    extender runs.
    """

    @abstractmethod
    def __call__(
        self, page: Page, path: Path, entry: os.DirEntry | None
    ) -> Awaitable[None] | None:
        """Enrich a page.

        Args:
            page: Page being built.
            path: Path to the source file.
            entry: Directory entry of the source file.
        """
        ...


Extender = Union[CallbackExtender, Mapping[str, Any]]


class Saveable(Protocol):
    """Capability of a page that knows how to write itself out.

    Pages gain it through an extender that attaches a ``save`` page method.
    Use :func:`is_saveable` to test for it.
    """

    def save(self, output_dir: Path) -> Path:
        """Write the page below ``output_dir`` and return the written path."""
        ...


def is_saveable(page: Any) -> bool:
    """Check whether a page exposes a callable ``save``.

    Args:
        page: Page to check.

    Returns:
        True if ``page.save(output_dir)`` can be called.
    """
    return callable(getattr(page, "save", None))
