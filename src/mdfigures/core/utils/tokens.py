"""Shared markdown-it token utilities"""

from markdown_it.token import Token


LINKED_IMAGE = ('link_open', 'image', 'link_close')


def retag(token: Token, type_: str, tag: str) -> None:
    """Change a token's type and tag together."""
    token.type = type_
    token.tag = tag


def child_types(token: Token) -> tuple[str, ...]:
    """Return the types of an inline token's children (empty when it has none)."""
    return tuple(c.type for c in token.children or [])


def figure_image(inline: Token) -> Token:
    """Return the image child of a figure's inline token, link-wrapped or bare."""
    return inline.children[1] if len(inline.children) == 3 else inline.children[0]
