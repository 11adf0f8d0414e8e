"""Figure options and intermediate data models for the render pipeline"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, Pattern, Union

from pydantic import BaseModel, ConfigDict, Field


CaptionMode = Literal["title", "alt"]


class FigureOptions(BaseModel):
    """Flat option set of the implicit figures rule; every option defaults to off."""
    model_config = ConfigDict(populate_by_name=True)

    data_type:    bool = Field(default=False, alias="dataType", description='Add data-type="image" to the figure')
    figcaption:   Union[bool, str] = Field(default=False, description='"title", "alt"/True, or False')
    keep_alt:     bool = Field(default=False, alias="keepAlt", description="Keep alt text on the image after captioning")
    lazy_loading: bool = Field(default=False, alias="lazyLoading", description='Add loading="lazy" to the image')
    link:         bool = Field(default=False, description="Wrap a bare image in a link to its own src")
    tabindex:     bool = Field(default=False, description="Add an incrementing tabindex to each figure")
    copy_attrs:   Union[bool, str, Pattern] = Field(default=False, alias="copyAttrs",
                                                    description="Copy image attrs to the figure, optionally filtered")

    @property
    def caption_mode(self) -> Optional[CaptionMode]:
        """Resolve figcaption to "title", "alt", or None; unrecognized values disable captions."""
        if not self.figcaption:
            return None
        mode = str(self.figcaption).strip().lower()
        if mode == "title":
            return "title"
        if self.figcaption is True or mode == "alt":
            return "alt"
        return None

    @property
    def copy_pattern(self) -> Optional[Pattern]:
        """Compiled attribute-name filter for copy_attrs, or None when copying is off."""
        if not self.copy_attrs:
            return None
        if self.copy_attrs is True:
            return re.compile("")
        if isinstance(self.copy_attrs, str):
            return re.compile(self.copy_attrs)
        return self.copy_attrs


@dataclass
class ParsedDoc:
    """Internal parse result carrying markdown-it tokens; not persisted."""
    path:         Path
    raw_markdown: str          # full file content (includes frontmatter)
    markdown:     str          # body only (frontmatter stripped)
    frontmatter:  dict[str, Any]
    tokens:       list         # markdown-it Token objects, figures already applied
    env:          dict[str, Any]


@dataclass
class FigureInfo:
    """Summary of one converted figure, used for the JSON sidecar."""
    src:     str
    href:    Optional[str]
    caption: Optional[str]
    attrs:   dict[str, Any]
