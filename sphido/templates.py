"""Template rendering engine for Sphido.

This module uses Jinja2 to render pages through their layouts and write
them to disk. The engine attaches itself to pages as an object extender,
giving every page a ``save(output_dir)`` method.

Key class:
- TemplateEngine: Handles template rendering and provides context to templates.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from markupsafe import Markup, escape

from .collections import PageCollection, TagCollection
from .pages import Heading, Page, page_method

__all__ = ["TemplateEngine", "render_toc"]

DEFAULT_LAYOUT = "default"


def render_toc(page: Page) -> Markup:
    """Render a table of contents as nested HTML from page headings.

    Args:
        page: Page carrying a ``toc`` list of Heading objects.

    Returns:
        Markup-safe HTML string of the nested TOC, or empty Markup if no headings.
    """
    headings: list[Heading] = page.get("toc") or []
    if not headings:
        return Markup("")

    html_parts: list[str] = []
    level_stack: list[int] = []

    for heading in headings:
        level = heading.level

        # Close nested lists if going to a shallower level
        while level_stack and level_stack[-1] > level:
            level_stack.pop()
            html_parts.append("</li></ul>")

        if level_stack and level_stack[-1] == level:
            html_parts.append("</li>")
        else:
            html_parts.append("<ul>")
            level_stack.append(level)

        html_parts.append(
            f'<li><a href="#{escape(heading.id)}">{escape(heading.text)}</a>'
        )

    while level_stack:
        level_stack.pop()
        html_parts.append("</li></ul>")

    return Markup("".join(html_parts))


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        templates_dir: Directory containing layouts and partials.
        data: Global site data, exposed to templates as ``site``.
        root_url: Optional base URL prepended by ``url_for``.
        env: Jinja2 environment.
        pages: Collection of all pages.
        tags: Mapping of tags to page collections.
    """

    def __init__(
        self,
        templates_dir: Path,
        data: dict[str, Any] | None = None,
        root_url: str = "",
    ):
        """Initialize the template engine.

        Args:
            templates_dir: Directory with templates.
            data: Global site data.
            root_url: Optional base URL for links.
        """
        self.templates_dir = templates_dir
        self.data = data or {}
        self.root_url = root_url.rstrip("/")
        self.env = Environment(
            loader=FileSystemLoader([templates_dir, templates_dir / "_partials"]),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.pages = PageCollection([])
        self.tags = TagCollection({})
        self._install_globals()

    def _install_globals(self) -> None:
        """Install global variables and functions in the Jinja environment."""
        self.env.globals["site"] = self.data
        self.env.globals["pages"] = self.pages
        self.env.globals["tags"] = self.tags
        self.env.globals["url_for"] = self.url_for
        self.env.globals["render_toc"] = render_toc

    def update_collections(
        self, pages: Iterable[Page], tags: dict[str, list[Page]]
    ) -> None:
        """Update the page and tag collections.

        Args:
            pages: Iterable of all pages.
            tags: Dictionary mapping tag names to page lists.
        """
        self.pages = PageCollection(pages)
        self.tags = TagCollection(tags)
        self.env.globals["pages"] = self.pages
        self.env.globals["tags"] = self.tags

    def url_for(self, path: str) -> str:
        """Generate a URL for a path, applying root_url if configured.

        Args:
            path: Path to generate URL for.

        Returns:
            Full URL with root_url prefix if configured.
        """
        if path.startswith(("http://", "https://", "//")):
            return path
        path = path if path.startswith("/") else f"/{path}"
        return f"{self.root_url}{path}"

    def extender(self) -> dict[str, Any]:
        """Return the object extender attaching ``save`` to pages."""
        return {"save": page_method(self.save)}

    def render_page(self, page: Page) -> str:
        """Render a page with its layout.

        Args:
            page: Page to render.

        Returns:
            Rendered HTML string.
        """
        layout = self._resolve_layout_template(page.get("layout") or DEFAULT_LAYOUT)
        return layout.render(
            page=page,
            page_content=Markup(page.get("content") or ""),
        )

    def save(self, page: Page, output_dir: Path) -> Path:
        """Render a page and write it below ``output_dir``.

        Args:
            page: Page to write.
            output_dir: Base output directory.

        Returns:
            Path of the written ``index.html``.
        """
        url_path = str(page.get("url") or f"/{page.get('slug') or page.name}/")
        target_dir = output_dir / url_path.strip("/")
        target_dir.mkdir(parents=True, exist_ok=True)
        html_path = target_dir / "index.html"
        html_path.write_text(self.render_page(page), encoding="utf-8")
        return html_path

    def _resolve_layout_template(self, layout: str):
        """Resolve and return the layout template.

        Args:
            layout: Layout name to resolve.

        Returns:
            Jinja2 Template object.
        """
        candidates = [f"{layout}.html.jinja", f"{layout}.jinja", f"{layout}.html"]
        if layout != DEFAULT_LAYOUT:
            candidates.extend(
                [
                    f"{DEFAULT_LAYOUT}.html.jinja",
                    f"{DEFAULT_LAYOUT}.jinja",
                    f"{DEFAULT_LAYOUT}.html",
                ]
            )
        for name in candidates:
            try:
                return self.env.get_template(name)
            except TemplateNotFound:
                continue
        return self.env.from_string("{{ page_content }}")
