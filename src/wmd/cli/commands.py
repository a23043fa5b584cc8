"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from wmd.config import Settings, load_config
from wmd.core.parse import parse_file
from wmd.core.pipeline import run_render
from wmd.core.registry import Registry, load_registry
from wmd.core.render import render_parsed
from wmd.core.utils.logs import setup_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level)
    return settings


def _registry(settings: Settings) -> Optional[Registry]:
    if not settings.registry_path:
        return None
    try:
        return load_registry(Path(settings.registry_path))
    except ValueError as e:
        _fail("Registry could not be loaded", e)


def _source(path: str) -> Path:
    """Return path as a readable .wmd file, or exit with an error."""
    p = Path(path)
    if not p.is_file():
        _fail(f"Not a file: {path}")
    return p


def render_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to render")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    registry: Annotated[Optional[str], typer.Option("--registry", help="Article registry index JSON")] = None,
    force: Annotated[bool, typer.Option("--force", help="Re-render files whose source is unchanged")] = False,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ...")] = None,
    ):
    """Render .wmd files to HTML fragments with sidecar JSON."""
    settings = _settings(overrides={"output_dir": out, "registry_path": registry, "log_level": log_level})
    if not Path(path).exists():
        _fail(f"No such file or directory: {path}")
    output_dir = Path(settings.output_dir)
    articles = _registry(settings)

    try:
        counts, results = run_render(
            path, output_dir, articles, force=force, indent=settings.json_indent,
        )
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo("No .wmd files found.")
        raise typer.Exit(1)

    for status, slug, html_path in results:
        typer.echo(f"  {status}: {slug} -> {html_path}")
    typer.echo(
        f"Render complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged"
    )


def show_cmd(
    path: Annotated[str, typer.Argument(help=".wmd file to render")],
    ):
    """Print the rendered HTML fragment of one file."""
    _settings()
    parsed = parse_file(_source(path))
    rendered, _ = render_parsed(parsed)
    typer.echo(rendered.html)


def meta_cmd(
    path: Annotated[str, typer.Argument(help=".wmd file to inspect")],
    ):
    """Print the frontmatter of one file as JSON."""
    settings = _settings()
    parsed = parse_file(_source(path))
    typer.echo(json.dumps(parsed.metadata, indent=settings.json_indent or None, ensure_ascii=False))
