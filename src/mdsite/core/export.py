"""Export: normalized documents, sidecar JSON, and the content manifest"""

import base64
import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any

from mdsite.core.frontmatter import join_frontmatter
from mdsite.core.models import ContentDoc
from mdsite.core.outline import code_blocks, headings


log = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.json"


def _jsonable(value: Any) -> Any:
    """Convert TOML/YAML decoded values (dates, times, binary, nested tables) into JSON types."""
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    return value


def build_document(doc: ContentDoc) -> str:
    """Return the document with its front matter re-serialized in its own format."""
    return join_frontmatter(doc.frontmatter, doc.markdown, doc.format)


def build_sidecar(doc: ContentDoc) -> dict:
    """Build the JSON-ready description of a document handed to the renderer.

    Dates become ISO strings. headings is populated only when the document asks
    for a table of contents (extra.toc); code lists the fence languages used.
    """
    return {
        "slug": doc.slug,
        "path": doc.path.as_posix(),
        "format": doc.format,
        "hash": doc.hash,
        "title": doc.meta.title,
        "date": _jsonable(doc.meta.date),
        "draft": doc.draft,
        "tags": doc.meta.tags,
        "toc": doc.meta.toc,
        "comments": doc.meta.comments_enabled,
        "frontmatter": _jsonable(doc.frontmatter),
        "headings": [
            {"level": h.level, "text": h.text, "anchor": h.anchor}
            for h in headings(doc.tokens)
        ] if doc.meta.toc else [],
        "code": sorted({b.lang for b in code_blocks(doc.tokens) if b.lang}),
    }


def write_doc(doc: ContentDoc, content_root: Path, output_dir: Path) -> tuple[Path, Path]:
    """Write the normalized document and its sidecar JSON.

    Output mirrors the source tree relative to content_root:
      output_dir / <relative parent> / <file name>
      output_dir / <relative parent> / <stem>.json

    Returns (doc_path, json_path).
    """
    root = content_root if content_root.is_dir() else content_root.parent
    try:
        rel = doc.path.relative_to(root)
    except ValueError:
        rel = Path(doc.path.name)
    dest_dir = output_dir / rel.parent
    dest_dir.mkdir(parents=True, exist_ok=True)

    doc_path = dest_dir / doc.path.name
    json_path = dest_dir / f"{doc.path.stem}.json"
    doc_path.write_text(build_document(doc), encoding='utf-8')
    json_path.write_text(json.dumps(build_sidecar(doc), indent=2, ensure_ascii=False), encoding='utf-8')
    log.info("exported %s -> %s", doc.path, doc_path)
    return doc_path, json_path


def write_manifest(docs: list[ContentDoc], output_dir: Path) -> Path:
    """Write manifest.json listing every exported document's slug, path, title, date, and hash."""
    output_dir.mkdir(parents=True, exist_ok=True)
    entries = [
        {
            "slug": d.slug,
            "path": d.path.as_posix(),
            "title": d.meta.title,
            "date": _jsonable(d.meta.date),
            "draft": d.draft,
            "tags": d.meta.tags,
            "hash": d.hash,
        }
        for d in docs
    ]
    path = output_dir / MANIFEST_FILE
    path.write_text(json.dumps({"documents": entries}, indent=2, ensure_ascii=False), encoding='utf-8')
    return path
