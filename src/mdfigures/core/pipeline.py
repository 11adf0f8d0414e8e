"""Pipeline step functions: render and scan orchestration"""

import logging
from pathlib import Path

from markdown_it import MarkdownIt

from mdfigures.config import Settings
from mdfigures.core.export import build_html, collect_figures, write_doc
from mdfigures.core.parse import discover_files, make_parser, parse_file, parse_text


logger = logging.getLogger(__name__)


def _parser(settings: Settings) -> MarkdownIt:
    return make_parser(settings, settings.parser_preset, settings.linkify)


def render_text(text: str, settings: Settings) -> str:
    """Render a markdown string to HTML with implicit figures applied."""
    md = _parser(settings)
    return build_html(md, parse_text(text, md))


def run_render(path: str, settings: Settings, output_dir: Path) -> list[tuple[Path, Path]]:
    """Render every markdown file under path into output_dir. Returns (source_path, html_file) pairs."""
    source = Path(path)
    root = source if source.is_dir() else source.parent
    md = _parser(settings)
    results = []
    for p in discover_files(source):
        try:
            doc = parse_file(p, md)
            html_path, _ = write_doc(md, doc, output_dir, root, settings.sidecar)
        except Exception as e:
            raise RuntimeError(f"Failed to render {p}: {e}") from e
        logger.debug("Rendered %s -> %s", p, html_path)
        results.append((p, html_path))
    return results


def run_scan(path: str, settings: Settings) -> list[tuple[Path, int]]:
    """Count implicit figures per markdown file under path without writing output."""
    md = _parser(settings)
    results = []
    for p in discover_files(Path(path)):
        try:
            doc = parse_file(p, md)
        except Exception as e:
            raise RuntimeError(f"Failed to scan {p}: {e}") from e
        results.append((p, len(collect_figures(md, doc.tokens, doc.env))))
    return results
