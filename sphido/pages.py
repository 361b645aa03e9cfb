"""Page tree nodes for Sphido.

This module defines the nodes produced by the tree builder.

Key classes:
- Page: Open attribute map representing one content file.
- Directory: Container grouping child nodes of one directory.
- Heading: Dataclass representing a heading for TOC generation.
- PageMethod: Callable stored on a page and bound to it on attribute access.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

REQUIRED_KEYS = ("name", "path")


@dataclass
class Heading:
    """Represents a heading extracted from rendered content for TOC generation.

    Attributes:
        id: Anchor ID for the heading (URL-friendly slug).
        text: The text content of the heading.
        level: Heading level (1-6).
    """

    id: str
    text: str
    level: int


class PageMethod:
    """Wraps a function so that it is bound to the page it is stored on.

    ``page["save"] = page_method(func)`` makes ``page.save(out)`` call
    ``func(page, out)``.
    """

    def __init__(self, func: Callable[..., Any]):
        self.func = func

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PageMethod({self.func!r})"


def page_method(func: Callable[..., Any]) -> PageMethod:
    """Mark ``func`` as a method of any page it gets merged onto."""
    return PageMethod(func)


class Page(MutableMapping[str, Any]):
    """One content file and its accumulated metadata.

    Values are reachable both as items and as attributes, so extenders and
    templates can write ``page.title`` or ``page["title"]`` interchangeably.
    Stored keys win over methods on attribute access: with an ``items`` key,
    ``page.items`` is that value and the mapping method stays reachable as
    ``Page.items(page)``. ``name`` and ``path`` can be overwritten but never
    removed.
    """

    def __init__(self, name: str, path: Path, **attrs: Any):
        object.__setattr__(self, "_attrs", {"name": name, "path": path})
        self._attrs.update(attrs)

    def __getitem__(self, key: str) -> Any:
        return self._attrs[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._attrs[key] = value

    def __delitem__(self, key: str) -> None:
        if key in REQUIRED_KEYS:
            raise TypeError(f"Cannot remove required page attribute {key!r}")
        del self._attrs[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attrs)

    def __len__(self) -> int:
        return len(self._attrs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Page):
            return self._attrs == other._attrs
        if isinstance(other, Mapping):
            return self._attrs == dict(Mapping.items(other))
        return NotImplemented

    def clear(self) -> None:
        """Remove every key except ``name`` and ``path``."""
        for key in [k for k in self._attrs if k not in REQUIRED_KEYS]:
            del self._attrs[key]

    def __getattribute__(self, name: str) -> Any:
        if not name.startswith("_"):
            attrs = object.__getattribute__(self, "_attrs")
            if name in attrs:
                value = attrs[name]
                if isinstance(value, PageMethod):
                    return functools.partial(value.func, self)
                return value
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        raise AttributeError(
            f"{type(self).__name__!r} object has no attribute {name!r}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"Page(name={self['name']!r}, path={str(self['path'])!r})"


@dataclass
class Directory:
    """A directory of the content tree.

    Attributes:
        name: Directory name.
        path: Path to the directory.
        children: Pages and sub-directories in enumeration order.
    """

    name: str
    path: Path
    children: list[Node] = field(default_factory=list)


Node = Union[Page, Directory]
