"""Extender application for Sphido.

Extenders enrich pages while the tree is built. A mapping is merged onto
the page; a callable is invoked with ``(page, path, entry)`` and awaited
if it returns an awaitable. Extenders run strictly in order and each one
sees what the previous ones did.
"""

from __future__ import annotations

import inspect
import os
from collections.abc import Iterable, Mapping, MutableMapping
from pathlib import Path
from typing import Any

from .pages import Page
from .protocols import Extender


def merge_into(target: MutableMapping[str, Any], source: Mapping[str, Any]) -> None:
    """Shallow-merge ``source`` onto ``target``; existing keys are overwritten."""
    for key, value in source.items():
        target[key] = value


async def apply_extenders(
    page: Page,
    path: Path,
    entry: os.DirEntry | None,
    extenders: Iterable[Extender],
) -> Page:
    """Apply extenders to a page in declaration order.

    Args:
        page: Page to enrich in place.
        path: Path to the source file.
        entry: Directory entry of the source file.
        extenders: Mappings and/or callables.

    Returns:
        The same page, for convenience.

    Raises:
        TypeError: If an extender is neither a mapping nor callable.
    """
    for extender in extenders:
        if isinstance(extender, Mapping):
            merge_into(page, extender)
        elif callable(extender):
            result = extender(page, path, entry)
            if inspect.isawaitable(result):
                await result
        else:
            raise TypeError(
                f"Extender must be a mapping or callable, got {type(extender).__name__}"
            )
    return page
