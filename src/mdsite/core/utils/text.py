"""Text helpers: content hashes, URL slugs, and slugs derived from file paths"""

import hashlib
import re
from pathlib import Path


INDEX_STEMS = {'_index', 'index'}


def sha256(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated, URL-safe form of text; used for slugs and heading anchors."""
    text = re.sub(r'[^\w\s-]', '', text.lower())
    return re.sub(r'[\s_-]+', '-', text).strip('-')


def slug_for_path(path: Path) -> str:
    """Slug from a file name; section index files are named after their directory."""
    stem = path.stem
    if stem in INDEX_STEMS and path.parent.name:
        stem = path.parent.name
    return slugify(stem)
