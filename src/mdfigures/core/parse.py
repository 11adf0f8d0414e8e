"""File discovery, frontmatter extraction, and markdown-it tokenization"""

import re
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt

from mdfigures.core.figures.plugin import implicit_figures_plugin
from mdfigures.core.models import FigureOptions, ParsedDoc


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.markdown'}


def make_parser(options: FigureOptions, preset: str = 'js-default', linkify: bool = False) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset with implicit figures enabled."""
    return MarkdownIt(preset, options_update={"linkify": linkify}).use(implicit_figures_plugin, options)


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def parse_text(text: str, md: MarkdownIt, path: Path = Path('<string>')) -> ParsedDoc:
    """Parse markdown text into a ParsedDoc; figures are applied during parsing."""
    frontmatter, body = _strip_frontmatter(text)
    env: dict[str, Any] = {}
    tokens = md.parse(body, env)
    return ParsedDoc(
        path=path,
        raw_markdown=text,
        markdown=body,
        frontmatter=frontmatter,
        tokens=tokens,
        env=env,
    )


def parse_file(path: Path, md: MarkdownIt) -> ParsedDoc:
    """Parse a single markdown file into a ParsedDoc with token stream."""
    return parse_text(path.read_text(encoding='utf-8'), md, path)
