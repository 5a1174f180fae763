"""Front-matter splitting and joining for TOML (+++) and YAML (---) headers"""

import logging
import re
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
import yaml

from mdsite.core.errors import MalformedDocument


log = logging.getLogger(__name__)

FENCES: dict[str, str] = {'+++': 'toml', '---': 'yaml'}
FORMAT_FENCES: dict[str, str] = {fmt: fence for fence, fmt in FENCES.items()}


def _closing_fence(fence: str) -> re.Pattern:
    """Match a line holding only the delimiter (trailing blanks and CR allowed)."""
    return re.compile(rf'^{re.escape(fence)}[ \t]*\r?$', re.MULTILINE)


def _decode(block: str, fmt: str, path: Path | str | None) -> dict[str, Any]:
    """Decode a front-matter block into a mapping."""
    if fmt == 'toml':
        try:
            return tomllib.loads(block)
        except tomllib.TOMLDecodeError as e:
            raise MalformedDocument(path, f"invalid TOML front matter: {e}") from e
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise MalformedDocument(path, f"invalid YAML front matter: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedDocument(
            path, f"invalid YAML front matter: expected a mapping, got {type(data).__name__}"
        )
    return data


def split_frontmatter(
    text: str,
    path: Path | str | None = None,
    ) -> tuple[dict[str, Any], str, str | None]:
    """Return (metadata, body, fmt) for a document.

    fmt is 'toml' or 'yaml' depending on the opening delimiter, or None when the
    document has no front matter; in that case metadata is empty and body is
    the whole text. An opening delimiter without a matching closing line raises
    MalformedDocument, as does a block that fails to decode.
    """
    first, newline, rest = text.partition('\n')
    fence = first.rstrip()
    fmt = FENCES.get(fence)
    if fmt is None:
        return {}, text, None

    end = _closing_fence(fence).search(rest) if newline else None
    if end is None:
        raise MalformedDocument(path, f"unterminated {fmt.upper()} front matter")

    metadata = _decode(rest[:end.start()], fmt, path)
    body = rest[end.end():]
    if body.startswith('\n'):
        body = body[1:]
    log.debug("split %s front matter from %s (%d keys)", fmt, path or "<string>", len(metadata))
    return metadata, body, fmt


def _encode(metadata: dict[str, Any], fmt: str) -> str:
    """Serialize metadata to a front-matter block (without delimiters)."""
    if not metadata:
        return ''
    if fmt == 'toml':
        try:
            return tomli_w.dumps(metadata)
        except TypeError as e:
            raise ValueError(f"Metadata cannot be written as TOML: {e}") from e
    return yaml.safe_dump(metadata, default_flow_style=False, allow_unicode=True, sort_keys=False)


def join_frontmatter(metadata: dict[str, Any], body: str, fmt: str | None = 'toml') -> str:
    """Prepend a front-matter block in the given format to body.

    With fmt=None the metadata must be empty and the body is returned as-is.
    """
    if fmt is None:
        if metadata:
            raise ValueError("A front-matter format is required when metadata is not empty")
        return body
    if fmt not in FORMAT_FENCES:
        raise ValueError(f"Unknown front-matter format: {fmt!r}")
    fence = FORMAT_FENCES[fmt]
    return f"{fence}\n{_encode(metadata, fmt)}{fence}\n{body}"
