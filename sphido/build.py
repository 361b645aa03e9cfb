"""Site building functionality for Sphido.

This module ties the pieces together: it loads configuration, builds the
page tree with the default extenders plus the template engine, and saves
every page.

Key functions:
- build_site: Main function to build the entire site.
- load_config: Loads site configuration from sphido.yaml.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jinja2 import TemplateSyntaxError

from .content import default_extenders
from .pages import Node, Page
from .protocols import Extender, is_saveable
from .templates import TemplateEngine
from .tree import build_tree, walk
from .utils import build_tags_index, ensure_clean_dir


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


DEFAULT_CONFIG = {
    "content_dir": "content",
    "templates_dir": "templates",
    "output_dir": "public",
    "extensions": [".md", ".html"],
    "root_url": "",
    "site": {},
}


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        tree: Page tree of the content directory.
        pages: All pages, in tree order.
        written: Files written, in page order.
        output_dir: Directory where the site was built.
        config: Effective configuration.
    """

    tree: list[Node]
    pages: list[Page]
    written: list[Path]
    output_dir: Path
    config: dict[str, Any]


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from sphido.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / "sphido.yaml"
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def load_tree(
    project_root: Path,
    config: dict[str, Any] | None = None,
    extra: Iterable[Extender] = (),
) -> list[Node]:
    """Build the page tree of a project with the default extenders.

    Args:
        project_root: Root directory of the project.
        config: Configuration; loaded from the project when omitted.
        extra: Extenders applied after the default chain.

    Returns:
        The page tree.
    """
    config = config or load_config(project_root)
    content_dir = project_root / config["content_dir"]
    extenders = [*default_extenders(content_dir), *extra]
    return asyncio.run(
        build_tree(content_dir, extenders, extensions=config["extensions"])
    )


def build_site(
    project_root: Path,
    output_dir_override: Path | None = None,
    clean_output: bool = True,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        output_dir_override: Optional path to write the build output instead of config output_dir.
        clean_output: Whether to wipe the output directory before building.

    Returns:
        BuildResult containing the tree, pages and written files.

    Raises:
        NotFoundError: If the content directory does not exist.
        BuildError: If a page fails to render.
    """
    config = load_config(project_root)
    output_dir = output_dir_override or (project_root / config["output_dir"])

    engine = TemplateEngine(
        project_root / config["templates_dir"],
        config.get("site") or {},
        root_url=str(config.get("root_url") or ""),
    )
    tree = load_tree(project_root, config, extra=[engine.extender()])
    pages = list(walk(tree))
    engine.update_collections(pages, build_tags_index(pages))

    if clean_output:
        ensure_clean_dir(output_dir)
    else:
        output_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for page in pages:
        if not is_saveable(page):
            continue
        try:
            written.append(page.save(output_dir))
        except TemplateSyntaxError as exc:
            raise BuildError(
                page.path,
                f"Template syntax error on line {exc.lineno}: {exc.message}",
                exc,
            ) from exc
        except Exception as exc:
            raise BuildError(page.path, _format_error_message(exc), exc) from exc
    return BuildResult(
        tree=tree, pages=pages, written=written, output_dir=output_dir, config=config
    )


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    if error_type == "UndefinedError":
        return f"Undefined variable: {exc}"
    return f"{error_type}: {exc}"
