"""File discovery, front-matter splitting, metadata validation, and tokenization"""

import logging
from pathlib import Path

from markdown_it import MarkdownIt
from pydantic import ValidationError

from mdsite.core.errors import MalformedDocument
from mdsite.core.frontmatter import split_frontmatter
from mdsite.core.models import ContentDoc, PageMeta
from mdsite.core.utils.text import sha256, slug_for_path, slugify


log = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md', '.mdx'}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _validate_meta(metadata: dict, path: Path) -> PageMeta:
    """Check recognized keys; report every offending key in one MalformedDocument."""
    try:
        return PageMeta.model_validate(metadata)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise MalformedDocument(path, f"invalid metadata ({problems})") from e


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def parse_text(text: str, path: Path, parser_config: str = 'gfm-like') -> ContentDoc:
    """Split and validate a document held in memory."""
    frontmatter, body, fmt = split_frontmatter(text, path)
    meta = _validate_meta(frontmatter, path)
    tokens = _make_parser(parser_config).parse(body)
    slug = slugify(meta.slug) if meta.slug else slug_for_path(path)
    return ContentDoc(
        path=path,
        slug=slug,
        raw_markdown=text,
        markdown=body,
        frontmatter=frontmatter,
        format=fmt,
        hash=sha256(text),
        meta=meta,
        tokens=tokens,
    )


def parse_file(path: Path, parser_config: str = 'gfm-like') -> ContentDoc:
    """Parse a single markdown file into a ContentDoc."""
    log.debug("parsing %s", path)
    try:
        raw = path.read_text(encoding='utf-8-sig')
    except UnicodeDecodeError as e:
        raise MalformedDocument(path, f"not valid UTF-8: {e}") from e
    return parse_text(raw, path, parser_config)


def parse_dir(path: Path, parser_config: str = 'gfm-like') -> list[ContentDoc]:
    """Parse all .md/.mdx files under path (file or directory); stops at the first failure."""
    return [parse_file(p, parser_config) for p in discover_files(path)]
