"""Pipeline step functions: check and export orchestration"""

import logging
from pathlib import Path

from mdsite.core.collection import select_docs, sort_docs
from mdsite.core.errors import MalformedDocument
from mdsite.core.export import write_doc, write_manifest
from mdsite.core.models import ContentDoc
from mdsite.core.parse import discover_files, parse_file


log = logging.getLogger(__name__)


def run_check(
    path: Path,
    parser_config: str = 'gfm-like',
    ) -> tuple[list[ContentDoc], list[MalformedDocument]]:
    """Parse every document under path. Returns (parsed docs, failures); unreadable files count as failures."""
    docs, failures = [], []
    for p in discover_files(path):
        try:
            docs.append(parse_file(p, parser_config))
        except MalformedDocument as e:
            log.warning("%s", e)
            failures.append(e)
        except OSError as e:
            log.warning("%s: unreadable: %s", p, e)
            failures.append(MalformedDocument(p, f"unreadable: {e}"))
    return docs, failures


def load_docs(path: Path, parser_config: str = 'gfm-like') -> list[ContentDoc]:
    """Parse every document under path, wrapping the first failure with its file path."""
    docs = []
    for p in discover_files(path):
        try:
            docs.append(parse_file(p, parser_config))
        except (MalformedDocument, OSError) as e:
            raise RuntimeError(f"Failed to load {p}: {e}") from e
    return docs


def run_export(
    path: Path,
    output_dir: Path,
    parser_config: str = 'gfm-like',
    include_drafts: bool = False,
    ) -> list[tuple[str, Path]]:
    """Export docs under path to output_dir plus a manifest. Returns (slug, doc_path) pairs."""
    docs = load_docs(path, parser_config)
    selected = sort_docs(select_docs(docs, include_drafts=include_drafts), 'path')
    kept = {id(d) for d in selected}
    for d in docs:
        if id(d) not in kept:
            log.info("skipping draft %s", d.path)

    results = []
    for doc in selected:
        try:
            doc_path, _ = write_doc(doc, path, output_dir)
        except (OSError, TypeError, ValueError) as e:
            raise RuntimeError(f"Failed to export {doc.path}: {e}") from e
        results.append((doc.slug, doc_path))
    write_manifest(selected, output_dir)
    return results
