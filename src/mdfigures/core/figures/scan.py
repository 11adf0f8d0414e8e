"""Detection of paragraphs whose sole content is one image"""

from markdown_it.token import Token

from mdfigures.core.utils.tokens import LINKED_IMAGE, child_types


def is_figure_candidate(tokens: list[Token], i: int) -> bool:
    """Return True if tokens[i] is an inline token holding only an image inside a paragraph.

    The first and last stream positions are never candidates, so tokens[i - 1]
    and tokens[i + 1] always exist.
    """
    if i < 1 or i > len(tokens) - 2:
        return False
    token = tokens[i]
    if token.type != 'inline':
        return False
    # image alone, or link_open -> image -> link_close
    if child_types(token) not in (('image',), LINKED_IMAGE):
        return False
    return tokens[i - 1].type == 'paragraph_open' and tokens[i + 1].type == 'paragraph_close'


def find_figure_candidates(tokens: list[Token]) -> list[int]:
    """Return indices of figure-eligible inline tokens in stream order."""
    return [i for i in range(1, len(tokens) - 1) if is_figure_candidate(tokens, i)]
