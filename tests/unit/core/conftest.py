"""Shared fixtures for core unit tests"""

import pytest
from markdown_it import MarkdownIt

from mdfigures.core.figures.plugin import implicit_figures_plugin


SAMPLE_MD = """\
# Gallery

Intro with an inline ![icon](icon.png) image.

![A chart](chart.png "Quarterly results")

[![Logo](logo.png)](https://example.com)

Closing paragraph.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    """Plain parser without the figures rule, for token-level tests."""
    return MarkdownIt("js-default", options_update={"linkify": False})


@pytest.fixture(name="make_md")
def make_md_fixture():
    """Factory returning a parser with implicit figures configured by keyword options."""
    def _make(linkify: bool = False, **options):
        return MarkdownIt("js-default", options_update={"linkify": linkify}).use(implicit_figures_plugin, **options)
    return _make


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture(parser):
    return parser.parse(SAMPLE_MD)
