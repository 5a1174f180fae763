"""Exceptions raised while reading content documents"""

from pathlib import Path


class MalformedDocument(ValueError):
    """A document whose front-matter block cannot be split or decoded."""

    def __init__(self, path: Path | str | None, reason: str):
        self.path = path
        self.reason = reason
        where = str(path) if path is not None else "<string>"
        super().__init__(f"{where}: {reason}")
