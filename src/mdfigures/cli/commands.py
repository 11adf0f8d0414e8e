"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml

from mdfigures.config import Settings, load_config
from mdfigures.core.pipeline import run_render, run_scan


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def render_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to render")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    preset: Annotated[Optional[str], typer.Option("--preset", help="MarkdownIt preset name")] = None,
    figcaption: Annotated[Optional[str], typer.Option("--figcaption", help='Caption source: "title", "alt", or "false"')] = None,
    data_type: Annotated[Optional[bool], typer.Option("--data-type/--no-data-type", help='Add data-type="image" to figures')] = None,
    link: Annotated[Optional[bool], typer.Option("--link/--no-link", help="Wrap bare images in a link to their src")] = None,
    lazy: Annotated[Optional[bool], typer.Option("--lazy-loading/--no-lazy-loading", help='Add loading="lazy" to images')] = None,
    tabindex: Annotated[Optional[bool], typer.Option("--tabindex/--no-tabindex", help="Add incrementing tabindex to figures")] = None,
    keep_alt: Annotated[Optional[bool], typer.Option("--keep-alt/--no-keep-alt", help="Keep alt text when used as caption")] = None,
    copy_attrs: Annotated[Optional[str], typer.Option("--copy-attrs", help="Regex of image attribute names to copy to figures")] = None,
    linkify: Annotated[Optional[bool], typer.Option("--linkify/--no-linkify", help="Autolink bare URLs")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Render markdown files to HTML, turning standalone images into figures."""
    _setup_logging(verbose)
    settings = _settings(overrides={
        "output_dir": out, "parser_preset": preset, "figcaption": figcaption,
        "data_type": data_type, "link": link, "lazy_loading": lazy, "tabindex": tabindex,
        "keep_alt": keep_alt, "copy_attrs": copy_attrs, "linkify": linkify,
    })
    output_dir = Path(settings.output_dir)
    try:
        results = run_render(path, settings, output_dir)
    except RuntimeError as e:
        _fail(str(e))
    for src, html_path in results:
        typer.echo(f"  {src} -> {html_path}")
    typer.echo(f"Rendered {len(results)} document(s) to {output_dir}/")


def scan_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to scan")],
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Report how many implicit figures each markdown file contains."""
    _setup_logging(verbose)
    settings = _settings()
    try:
        results = run_scan(path, settings)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo("No markdown files found.")
        raise typer.Exit(1)
    for src, count in results:
        typer.echo(f"  {src}: {count} figure(s)")
    typer.echo(f"Scanned {len(results)} document(s), {sum(c for _, c in results)} figure(s)")


def config_cmd():
    """Print the effective configuration as YAML."""
    settings = _settings()
    typer.echo(yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False).rstrip())
