"""Unit tests for core/figures/convert.py"""

import re

import pytest
from markdown_it.token import Token

from mdfigures.core.figures.convert import (
    add_caption,
    add_lazy_loading,
    add_tabindex,
    convert_paragraph,
    copy_attrs,
    wrap_in_link,
)
from mdfigures.core.utils.tokens import figure_image


def _figure_tokens(parser, md: str):
    tokens = parser.parse(md)
    return tokens, tokens[1]


def test_convert_paragraph_retags_open_and_close(parser):
    """paragraph_open/close become figure_open/close with tag 'figure'."""
    tokens, _ = _figure_tokens(parser, "![](fig.png)\n")
    figure = convert_paragraph(tokens, 1)
    assert figure is tokens[0]
    assert (tokens[0].type, tokens[0].tag) == ("figure_open", "figure")
    assert (tokens[2].type, tokens[2].tag) == ("figure_close", "figure")
    assert tokens[0].attrs == {}


def test_convert_paragraph_data_type(parser):
    """data_type adds data-type=image to the figure only."""
    tokens, inline = _figure_tokens(parser, "![](fig.png)\n")
    convert_paragraph(tokens, 1, data_type=True)
    assert tokens[0].attrs == {"data-type": "image"}
    assert tokens[2].attrs == {}
    assert inline.children[0].type == "image"


def test_wrap_in_link_bare_image(parser):
    """A bare image gets link_open/link_close around it with href = src."""
    _, inline = _figure_tokens(parser, "![](fig.png)\n")
    wrap_in_link(inline)
    assert [c.type for c in inline.children] == ["link_open", "image", "link_close"]
    assert inline.children[0].attrGet("href") == "fig.png"
    assert figure_image(inline).attrGet("src") == "fig.png"


def test_wrap_in_link_skips_linked_image(parser):
    """An image already inside a link is not wrapped a second time."""
    _, inline = _figure_tokens(parser, "[![](fig.png)](link.html)\n")
    wrap_in_link(inline)
    assert len(inline.children) == 3
    assert inline.children[0].attrGet("href") == "link.html"


def test_title_caption_moves_title(parser):
    """Title mode parses the title into caption tokens and removes the title attr."""
    _, inline = _figure_tokens(parser, '![alt](fig.png "A *bold* move")\n')
    image = figure_image(inline)
    assert add_caption(parser, inline, image, "title")
    types = [c.type for c in inline.children]
    assert types[0] == "image"
    assert types[1] == "figcaption_open" and types[-1] == "figcaption_close"
    assert "em_open" in types
    assert image.attrGet("title") is None


def test_title_caption_without_title_is_noop(parser):
    """No title means no figcaption tokens."""
    _, inline = _figure_tokens(parser, "![alt](fig.png)\n")
    assert not add_caption(parser, inline, figure_image(inline), "title")
    assert len(inline.children) == 1


@pytest.mark.parametrize("keep_alt,expected_children", [(False, 0), (True, 1)])
def test_alt_caption(parser, keep_alt, expected_children):
    """Alt mode moves the alt children into the caption, or copies them with keep_alt."""
    _, inline = _figure_tokens(parser, "![Some alt](fig.png)\n")
    image = figure_image(inline)
    assert add_caption(parser, inline, image, "alt", keep_alt=keep_alt)
    assert [c.type for c in inline.children] == ["image", "figcaption_open", "text", "figcaption_close"]
    assert inline.children[2].content == "Some alt"
    assert len(image.children or []) == expected_children


def test_alt_caption_empty_alt_is_noop(parser):
    """An image without alt content produces no caption."""
    _, inline = _figure_tokens(parser, "![](fig.png)\n")
    assert not add_caption(parser, inline, figure_image(inline), "alt")
    assert len(inline.children) == 1


def test_caption_disabled(parser):
    """A None mode never touches the children."""
    _, inline = _figure_tokens(parser, '![alt](fig.png "title")\n')
    image = figure_image(inline)
    assert not add_caption(parser, inline, image, None)
    assert image.attrGet("title") == "title"
    assert len(inline.children) == 1


def test_caption_appended_after_link(parser):
    """Captions go after link_close, on the inline container and not on the image."""
    _, inline = _figure_tokens(parser, "[![Alt](fig.png)](link.html)\n")
    image = figure_image(inline)
    add_caption(parser, inline, image, "alt")
    assert [c.type for c in inline.children][:4] == ["link_open", "image", "link_close", "figcaption_open"]


def test_copy_attrs_filters_by_pattern(parser):
    """Only image attributes matching the pattern end up on the figure."""
    tokens, inline = _figure_tokens(parser, '![](fig.png "t")\n')
    figure = convert_paragraph(tokens, 1, data_type=True)
    copy_attrs(figure, figure_image(inline), re.compile("^(src|title)$"))
    assert figure.attrs == {"data-type": "image", "src": "fig.png", "title": "t"}


def test_copy_attrs_replaces_previous_copy(parser):
    """Copying twice leaves the figure with the latest copy only."""
    tokens, inline = _figure_tokens(parser, '![](fig.png "t")\n')
    figure = convert_paragraph(tokens, 1)
    image = figure_image(inline)
    copy_attrs(figure, image, re.compile(""))
    copy_attrs(figure, image, re.compile("^src$"))
    assert figure.attrs == {"src": "fig.png"}


def test_tabindex_and_lazy_loading():
    """tabindex is pushed as a string; loading=lazy goes on the image."""
    figure = Token("figure_open", "figure", 1)
    image = Token("image", "img", 0, attrs={"src": "a.png", "alt": ""})
    add_tabindex(figure, 3)
    add_lazy_loading(image)
    assert figure.attrs == {"tabindex": "3"}
    assert list(image.attrs) == ["src", "alt", "loading"]
