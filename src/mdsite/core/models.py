"""Data models for parsed content documents and their metadata"""

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class PageMeta(BaseModel):
    """Validated view of the recognized front-matter keys; unknown keys are kept."""
    model_config = ConfigDict(extra='allow')

    title:       Optional[StrictStr] = None
    date:        Optional[dt.datetime | dt.date] = None
    draft:       StrictBool = False
    description: Optional[StrictStr] = None
    slug:        Optional[StrictStr] = None
    taxonomies:  dict[str, list[StrictStr]] = Field(default_factory=dict)
    extra:       dict[str, Any] = Field(default_factory=dict)   # nested display options (toc, comment, ...)

    @property
    def tags(self) -> list[str]:
        """Tags from taxonomies.tags, top-level tags, then extra.tags; deduplicated in order."""
        found: list = []
        for source in (self.taxonomies.get('tags'), (self.model_extra or {}).get('tags'), self.extra.get('tags')):
            if source:
                found.extend(source if isinstance(source, list) else [source])
        return list(dict.fromkeys(str(t) for t in found))

    @property
    def toc(self) -> bool:
        return bool(self.extra.get('toc', False))

    @property
    def comments_enabled(self) -> bool:
        """False when extra.comment (or extra.comments) is explicitly disabled."""
        for key in ('comment', 'comments'):
            if key in self.extra:
                return bool(self.extra[key])
        return True

    def sort_date(self) -> dt.datetime | None:
        """Date normalized to a naive datetime for ordering."""
        if self.date is None:
            return None
        if isinstance(self.date, dt.datetime):
            return self.date.replace(tzinfo=None)
        return dt.datetime(self.date.year, self.date.month, self.date.day)


@dataclass
class Heading:
    level:  int
    text:   str
    anchor: str


@dataclass
class CodeBlock:
    lang:    str          # fence info word; '' for indented or untagged blocks
    content: str          # verbatim, never interpreted


@dataclass
class ContentDoc:
    """A parsed document: metadata record plus body, with its markdown-it tokens."""
    path:         Path
    slug:         str
    raw_markdown: str                  # full file content (includes front matter)
    markdown:     str                  # body only
    frontmatter:  dict[str, Any]       # metadata record exactly as decoded
    format:       Optional[str]        # 'toml', 'yaml' or None when absent
    hash:         str
    meta:         PageMeta
    tokens:       list = field(default_factory=list, repr=False)

    @property
    def title(self) -> str:
        return self.meta.title or self.slug

    @property
    def draft(self) -> bool:
        return self.meta.draft
