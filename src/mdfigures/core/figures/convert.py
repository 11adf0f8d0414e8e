"""In-place rewrites applied to a single figure candidate"""

import logging
from typing import Optional, Pattern

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdfigures.core.models import CaptionMode
from mdfigures.core.utils.tokens import retag


logger = logging.getLogger(__name__)


def convert_paragraph(tokens: list[Token], i: int, data_type: bool = False) -> Token:
    """Retag the paragraph around tokens[i] as a figure and return the figure_open token."""
    figure = tokens[i - 1]
    retag(figure, 'figure_open', 'figure')
    retag(tokens[i + 1], 'figure_close', 'figure')
    if data_type:
        figure.attrPush(('data-type', 'image'))
    return figure


def wrap_in_link(inline: Token) -> None:
    """Wrap a bare image child in a link pointing at the image's own src."""
    if len(inline.children) != 1:
        return
    image = inline.children[0]
    link_open = Token('link_open', 'a', 1)
    link_open.attrPush(('href', image.attrGet('src')))
    inline.children.insert(0, link_open)
    inline.children.append(Token('link_close', 'a', -1))


def _title_caption(md: MarkdownIt, image: Token, env: dict) -> Optional[list[Token]]:
    """Parse the image title as inline markup and drop the title attribute."""
    title = image.attrGet('title')
    if not title:
        return None
    parsed = md.parseInline(str(title), env)
    body = list(parsed[0].children or []) if parsed else []
    image.attrs.pop('title', None)
    return body


def _alt_caption(image: Token, keep_alt: bool) -> Optional[list[Token]]:
    """Move (or copy, with keep_alt) the image's parsed alt children into a caption body."""
    if not image.children:
        return None
    body = list(image.children)
    if not keep_alt:
        image.children = []
    return body


def add_caption(
    md: MarkdownIt,
    inline: Token,
    image: Token,
    mode: Optional[CaptionMode],
    keep_alt: bool = False,
    env: Optional[dict] = None,
    ) -> bool:
    """Append figcaption tokens to the inline children. Returns True if a caption was added."""
    if mode == 'title':
        body = _title_caption(md, image, {} if env is None else env)
    elif mode == 'alt':
        body = _alt_caption(image, keep_alt)
    else:
        return False
    if body is None:
        return False

    inline.children.append(Token('figcaption_open', 'figcaption', 1))
    inline.children.extend(body)
    inline.children.append(Token('figcaption_close', 'figcaption', -1))
    logger.debug("Added %s caption with %d token(s)", mode, len(body))
    return True


def copy_attrs(figure: Token, image: Token, pattern: Pattern) -> None:
    """Replace the figure's copied attributes with image attributes whose name matches pattern.

    A data-type set by convert_paragraph stays first; every other figure attribute is replaced.
    """
    copied = {k: v for k, v in image.attrs.items() if pattern.search(k)}
    kept = {'data-type': figure.attrs['data-type']} if 'data-type' in figure.attrs else {}
    figure.attrs = {**kept, **copied}


def add_tabindex(figure: Token, index: int) -> None:
    figure.attrPush(('tabindex', str(index)))


def add_lazy_loading(image: Token) -> None:
    image.attrPush(('loading', 'lazy'))
