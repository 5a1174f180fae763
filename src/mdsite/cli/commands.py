"""CLI command implementations"""

import datetime as dt
import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from mdsite.config import Settings, load_config
from mdsite.core.collection import select_docs, sort_docs
from mdsite.core.errors import MalformedDocument
from mdsite.core.export import build_sidecar
from mdsite.core.frontmatter import join_frontmatter
from mdsite.core.parse import parse_file
from mdsite.core.pipeline import load_docs, run_check, run_export
from mdsite.logs import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except (ValueError, ValidationError) as e:
        _fail("Invalid configuration", e)
    configure_logging(settings.log_level)
    return settings


def _content_path(path: Optional[str], settings: Settings) -> Path:
    """Resolve the PATH argument, defaulting to the configured content directory."""
    target = Path(path or settings.content_dir)
    if not target.exists():
        _fail(f"No such file or directory: {target}")
    return target


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to check")] = None,
    ):
    """Parse every document and report malformed front matter."""
    settings = _settings()
    target = _content_path(path, settings)
    docs, failures = run_check(target, settings.parser_config)
    for err in failures:
        typer.echo(f"  malformed: {err}", err=True)
    typer.echo(f"Checked {len(docs) + len(failures)} document(s): {len(failures)} malformed")
    if failures:
        raise typer.Exit(1)


def list_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to list")] = None,
    drafts: Annotated[bool, typer.Option("--drafts", help="Include drafts")] = False,
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only documents carrying this tag")] = None,
    sort: Annotated[Optional[str], typer.Option("--sort", help="path, date, or title")] = None,
    ):
    """List documents with their date, slug, and title."""
    settings = _settings(overrides={"include_drafts": drafts or None, "sort_by": sort})
    target = _content_path(path, settings)
    try:
        docs = load_docs(target, settings.parser_config)
    except RuntimeError as e:
        _fail(str(e))
    docs = sort_docs(select_docs(docs, settings.include_drafts, tag), settings.sort_by)
    if not docs:
        typer.echo("No documents found.")
        raise typer.Exit(1)
    for d in docs:
        date = d.meta.date.isoformat()[:10] if d.meta.date else "----------"
        marker = " [draft]" if d.draft else ""
        typer.echo(f"{date}  {d.slug}  {d.title}{marker}")


def show_cmd(
    file: Annotated[Path, typer.Argument(help="Document to show")],
    body: Annotated[bool, typer.Option("--body", help="Also print the body")] = False,
    ):
    """Print a document's metadata as JSON."""
    settings = _settings()
    if not file.is_file():
        _fail(f"No such file: {file}")
    try:
        doc = parse_file(file, settings.parser_config)
    except MalformedDocument as e:
        _fail("Malformed document", e)
    typer.echo(json.dumps(build_sidecar(doc), indent=2, ensure_ascii=False))
    if body:
        typer.echo("")
        typer.echo(doc.markdown, nl=False)


def export_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to export")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    drafts: Annotated[bool, typer.Option("--drafts", help="Include drafts")] = False,
    ):
    """Write normalized documents, sidecar JSON, and manifest.json for the site generator."""
    settings = _settings(overrides={"output_dir": out, "include_drafts": drafts or None})
    target = _content_path(path, settings)
    output_dir = Path(settings.output_dir)
    try:
        results = run_export(target, output_dir, settings.parser_config, settings.include_drafts)
    except RuntimeError as e:
        _fail(str(e))
    for slug, doc_path in results:
        typer.echo(f"  {slug} -> {doc_path}")
    typer.echo(f"Exported {len(results)} document(s) to {output_dir}/")


def new_cmd(
    file: Annotated[Path, typer.Argument(help="Path of the document to create")],
    title: Annotated[str, typer.Option("--title", help="Document title")],
    fmt: Annotated[Optional[str], typer.Option("--format", help="toml or yaml")] = None,
    ):
    """Create a draft document with title, today's date, and draft = true."""
    settings = _settings(overrides={"front_matter_format": fmt})
    if file.exists():
        _fail(f"Refusing to overwrite existing file: {file}")
    metadata = {"title": title, "date": dt.date.today(), "draft": True}
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(
        join_frontmatter(metadata, "\n", settings.front_matter_format), encoding='utf-8'
    )
    typer.echo(f"Created {file}")
