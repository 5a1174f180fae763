"""Filtering and ordering of parsed documents for listing and export"""

import datetime as dt

from mdsite.core.models import ContentDoc


SORT_KEYS = ('path', 'date', 'title')


def select_docs(
    docs: list[ContentDoc],
    include_drafts: bool = False,
    tag: str | None = None,
    ) -> list[ContentDoc]:
    """Drop drafts unless include_drafts; keep only docs carrying tag when given."""
    return [
        d for d in docs
        if (include_drafts or not d.draft) and (tag is None or tag in d.meta.tags)
    ]


def sort_docs(docs: list[ContentDoc], by: str = 'path') -> list[ContentDoc]:
    """Order docs by path, title, or date (newest first, undated last); ties fall back to path."""
    if by == 'path':
        return sorted(docs, key=lambda d: str(d.path))
    if by == 'title':
        return sorted(docs, key=lambda d: (d.title.casefold(), str(d.path)))
    if by == 'date':
        dated = [d for d in docs if d.meta.sort_date() is not None]
        undated = [d for d in docs if d.meta.sort_date() is None]
        dated.sort(key=lambda d: str(d.path))
        dated.sort(key=lambda d: d.meta.sort_date() or dt.datetime.min, reverse=True)
        return dated + sorted(undated, key=lambda d: str(d.path))
    raise ValueError(f"Unknown sort key: {by!r} (expected one of {', '.join(SORT_KEYS)})")
