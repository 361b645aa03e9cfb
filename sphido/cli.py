"""Command-line interface for Sphido.

Commands:
- build: Build the site into the output directory.
- tree: Print the page tree of the content directory.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .pages import Directory, Node
from .tree import NotFoundError


@click.group()
@click.version_option(version=__version__, prog_name="sphido")
def cli():
    """Sphido static site generator."""


@cli.command()
@click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    required=False,
    help="Directory to write the site to (overrides sphido.yaml output_dir)",
)
@click.option("--verbose", "-v", is_flag=True, help="List every written file")
def build(output: Path | None, verbose: bool):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(project_root, output_dir_override=output)
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from None
    except BuildError as exc:
        try:
            rel_path = exc.source_path.relative_to(project_root)
        except ValueError:
            rel_path = exc.source_path
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    if verbose:
        for path in result.written:
            click.echo(f"  {path.relative_to(result.output_dir).as_posix()}")
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


@cli.command()
def tree():
    """Print the page tree of the content directory."""
    from .build import load_tree

    try:
        nodes = load_tree(Path.cwd())
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from None
    for line in _format_tree(nodes):
        click.echo(line)


def _format_tree(nodes: list[Node], depth: int = 0) -> list[str]:
    """Render nodes as indented lines, directories with a trailing slash."""
    lines = []
    indent = "  " * depth
    for node in nodes:
        if isinstance(node, Directory):
            lines.append(f"{indent}{node.name}/")
            lines.extend(_format_tree(node.children, depth + 1))
        else:
            lines.append(f"{indent}{node.name}  {node.get('title', '')}".rstrip())
    return lines


def main():
    """Entry point for the CLI application."""
    cli()
