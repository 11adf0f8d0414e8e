"""markdown-it plugin turning image-only paragraphs into figures"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Union

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore

from mdfigures.core.figures.convert import (
    add_caption,
    add_lazy_loading,
    add_tabindex,
    convert_paragraph,
    copy_attrs,
    wrap_in_link,
)
from mdfigures.core.figures.scan import is_figure_candidate
from mdfigures.core.models import FigureOptions
from mdfigures.core.utils.tokens import figure_image


logger = logging.getLogger(__name__)

RULE_NAME = 'implicit_figures'


def _normalize(options: Union[FigureOptions, Mapping[str, Any], None], overrides: dict[str, Any]) -> FigureOptions:
    """Merge options and keyword overrides into a validated FigureOptions."""
    if options is None:
        data: dict[str, Any] = {}
    elif isinstance(options, FigureOptions):
        # Settings subclasses carry extra fields; keep only the figure options
        data = options.model_dump(include=set(FigureOptions.model_fields))
    else:
        data = dict(options)
    data.update(overrides)
    return FigureOptions.model_validate(data)


def make_figures_rule(md: MarkdownIt, opts: FigureOptions) -> Callable[[StateCore], None]:
    """Build the core rule closed over md and the normalized options."""
    caption_mode = opts.caption_mode
    pattern = opts.copy_pattern

    def implicit_figures(state: StateCore) -> None:
        tokens = state.tokens
        tab_index = 1  # reset on every parse/render

        for i in range(1, len(tokens) - 1):
            if not is_figure_candidate(tokens, i):
                continue

            inline = tokens[i]
            figure = convert_paragraph(tokens, i, data_type=opts.data_type)

            if opts.link:
                wrap_in_link(inline)
            image = figure_image(inline)

            add_caption(md, inline, image, caption_mode, keep_alt=opts.keep_alt, env=state.env)

            if pattern is not None:
                copy_attrs(figure, image, pattern)
            if opts.tabindex:
                add_tabindex(figure, tab_index)
                tab_index += 1
            if opts.lazy_loading:
                add_lazy_loading(image)

            logger.debug("Converted paragraph at token %d to figure (src=%s)", i - 1, image.attrGet('src'))

    return implicit_figures


def implicit_figures_plugin(
    md: MarkdownIt,
    options: Union[FigureOptions, Mapping[str, Any], None] = None,
    **kwargs: Any,
    ) -> None:
    """Register the implicit figures core rule just before linkify.

    Usage::

        md = MarkdownIt().use(implicit_figures_plugin, figcaption="title", tabindex=True)

    options may be a FigureOptions (or Settings), a mapping using either the
    camelCase or snake_case option names, or omitted; keyword arguments win.
    Captions are extracted before linkify runs so their text can still be linkified.
    """
    opts = _normalize(options, kwargs)
    logger.debug("Registering %s rule (caption=%s)", RULE_NAME, opts.caption_mode)
    md.core.ruler.before('linkify', RULE_NAME, make_figures_rule(md, opts))
