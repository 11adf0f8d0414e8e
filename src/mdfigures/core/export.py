"""Export pipeline: render HTML, build the figure manifest, and write output files"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdfigures.core.models import FigureInfo, ParsedDoc


def _caption_tokens(children: list[Token]) -> Optional[list[Token]]:
    """Return the tokens between figcaption_open and figcaption_close, or None."""
    types = [c.type for c in children]
    if 'figcaption_open' not in types:
        return None
    start = types.index('figcaption_open') + 1
    end = len(types) - 1 - types[::-1].index('figcaption_close')
    return children[start:end]


def collect_figures(md: MarkdownIt, tokens: list[Token], env: dict = None) -> list[FigureInfo]:
    """List the figures in an already processed token stream, in document order."""
    figures = []
    for i, tok in enumerate(tokens[:-1]):
        if tok.type != 'figure_open' or tokens[i + 1].type != 'inline':
            continue
        children = tokens[i + 1].children or []
        image = next((c for c in children if c.type == 'image'), None)
        if image is None:
            continue
        href = children[0].attrGet('href') if children[0].type == 'link_open' else None
        body = _caption_tokens(children)
        caption = md.renderer.renderInlineAsText(body, md.options, env or {}) if body is not None else None
        figures.append(FigureInfo(
            src=str(image.attrGet('src')),
            href=href,
            caption=caption,
            attrs=dict(tok.attrs),
        ))
    return figures


def build_html(md: MarkdownIt, doc: ParsedDoc) -> str:
    """Render a parsed document's token stream to HTML."""
    return md.renderer.render(doc.tokens, md.options, doc.env)


def build_sidecar(doc: ParsedDoc, figures: list[FigureInfo]) -> dict:
    """Build the sidecar JSON dict: source path, frontmatter, and figure list."""
    return {
        "path": str(doc.path),
        "frontmatter": doc.frontmatter,
        "figures": [asdict(f) for f in figures],
    }


def write_doc(
    md: MarkdownIt,
    doc: ParsedDoc,
    output_dir: Path,
    root: Optional[Path] = None,
    sidecar: bool = True,
    ) -> tuple[Path, Optional[Path]]:
    """Write HTML (+ optional sidecar JSON) for a single document.

    Output path mirrors the source directory structure relative to root:
      output_dir / doc.path.relative_to(root).parent / doc.path.stem.{html|json}

    Returns (html_path, json_path); json_path is None when sidecar is off.
    """
    rel = doc.path.relative_to(root) if root else Path(doc.path.name)
    dest_dir = output_dir / rel.parent
    dest_dir.mkdir(parents=True, exist_ok=True)

    html_path = dest_dir / f"{rel.stem}.html"
    html_path.write_text(build_html(md, doc), encoding='utf-8')
    if not sidecar:
        return html_path, None

    json_path = dest_dir / f"{rel.stem}.json"
    figures = collect_figures(md, doc.tokens, doc.env)
    json_path.write_text(
        json.dumps(build_sidecar(doc, figures), indent=2, default=str),
        encoding='utf-8',
    )
    return html_path, json_path
