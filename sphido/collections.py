from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence

from .pages import Page


class PageCollection(Sequence[Page]):
    """Lightweight helper for working with lists of Pages in templates and code."""

    def __init__(self, pages: Iterable[Page]):
        self._pages = list(pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __getitem__(self, item):
        return self._pages[item]

    def with_tag(self, tag: str) -> PageCollection:
        return PageCollection(p for p in self._pages if tag in (p.get("tags") or ()))

    def sorted(self, reverse: bool = True) -> PageCollection:
        """Sort pages by date, then by name.

        Args:
            reverse: If True (default), newest first. If False, oldest first.

        Returns:
            A new PageCollection with sorted pages.
        """

        def sort_key(p: Page):
            # date and datetime values do not compare; their ISO strings do
            return (str(p.get("date", "")), p.name.lower())

        return PageCollection(sorted(self._pages, key=sort_key, reverse=reverse))

    def latest(self, count: int = 5) -> PageCollection:
        return PageCollection(self.sorted()[:count])

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PageCollection({len(self._pages)} pages)"


class TagCollection(Mapping[str, PageCollection]):
    """Mapping of tag name to PageCollection."""

    def __init__(self, mapping: dict[str, Iterable[Page]]):
        self._mapping = {k: PageCollection(v) for k, v in mapping.items()}

    def __getitem__(self, key: str) -> PageCollection:
        return self._mapping[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"TagCollection({len(self._mapping)} tags)"
