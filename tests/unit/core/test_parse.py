"""Unit tests for core/parse.py"""

import datetime as dt
from pathlib import Path

import pytest

from mdsite.core.errors import MalformedDocument
from mdsite.core.models import ContentDoc
from mdsite.core.parse import discover_files, parse_dir, parse_file, parse_text
from mdsite.core.utils.text import sha256


def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a file path."""
    f = tmp_path / "doc.md"
    f.write_text("# Hello")
    assert discover_files(f) == [f]


def test_discover_files_non_md_skipped(tmp_path):
    """discover_files ignores non-.md/.mdx files."""
    (tmp_path / "notes.txt").write_text("text")
    assert discover_files(tmp_path) == []


def test_discover_files_sorted_recursive(content_dir):
    files = discover_files(content_dir)
    assert [f.relative_to(content_dir).as_posix() for f in files] == [
        "about.md", "blog/firmware-tips.md", "blog/linker-scripts.md",
    ]


def test_parse_file_post(content_dir):
    """The blog post yields its metadata record and an untouched body."""
    doc = parse_file(content_dir / "blog" / "firmware-tips.md")
    assert isinstance(doc, ContentDoc)
    assert doc.format == "toml"
    assert doc.slug == "firmware-tips"
    assert doc.frontmatter["title"] == "Embedded firmware optimization tips"
    assert doc.meta.date == dt.date(2024, 3, 2)
    assert doc.meta.tags == ["embedded", "c", "performance"]
    assert doc.meta.toc is True
    assert doc.meta.comments_enabled is False
    assert doc.markdown.startswith("\n## Use fixed-point math")
    assert "+++" not in doc.markdown
    assert doc.tokens


def test_parse_file_yaml_draft(content_dir):
    doc = parse_file(content_dir / "blog" / "linker-scripts.md")
    assert doc.format == "yaml"
    assert doc.draft is True
    assert doc.meta.tags == ["embedded"]


def test_parse_file_no_frontmatter(tmp_path):
    """parse_file keeps the whole text as body when there is no front matter."""
    f = tmp_path / "plain.md"
    f.write_text("Just a body.")
    doc = parse_file(f)
    assert doc.frontmatter == {}
    assert doc.markdown == "Just a body."
    assert doc.format is None
    assert doc.title == "plain"
    assert doc.draft is False


def test_parse_file_strips_bom(tmp_path):
    f = tmp_path / "bom.md"
    f.write_bytes("\ufeff+++\ntitle = \"B\"\n+++\nBody".encode("utf-8"))
    doc = parse_file(f)
    assert doc.frontmatter == {"title": "B"}


def test_parse_file_not_utf8(tmp_path):
    f = tmp_path / "latin.md"
    f.write_bytes(b"caf\xe9")
    with pytest.raises(MalformedDocument, match="UTF-8"):
        parse_file(f)


def test_slug_from_frontmatter(tmp_path):
    """parse_text uses the metadata slug when present."""
    doc = parse_text('+++\nslug = "Custom Slug"\n+++\nBody', Path("anything.md"))
    assert doc.slug == "custom-slug"


def test_slug_from_filename():
    doc = parse_text("Body", Path("My Document.md"))
    assert doc.slug == "my-document"


def test_slug_for_section_index():
    """_index.md is named after its directory."""
    doc = parse_text("Body", Path("content/blog/_index.md"))
    assert doc.slug == "blog"


def test_hash_matches_raw():
    raw = '+++\ntitle = "T"\n+++\n# Body\n'
    doc = parse_text(raw, Path("doc.md"))
    assert doc.hash == sha256(raw)
    assert doc.raw_markdown == raw


@pytest.mark.parametrize("block,key", [
    ('draft = "yes"', "draft"),
    ("title = 3", "title"),
    ('[taxonomies]\ntags = "embedded"', "taxonomies"),
])
def test_invalid_metadata_types(block, key):
    """Recognized keys with the wrong type are reported as malformed."""
    with pytest.raises(MalformedDocument, match=key):
        parse_text(f"+++\n{block}\n+++\nBody", Path("bad.md"))


def test_unknown_keys_are_kept():
    doc = parse_text('+++\nweight = 10\n+++\nBody', Path("doc.md"))
    assert doc.frontmatter == {"weight": 10}
    assert doc.meta.model_extra == {"weight": 10}


def test_parse_dir_stops_on_malformed(content_dir):
    (content_dir / "broken.md").write_text("+++\ntitle = \"x\"\n")
    with pytest.raises(MalformedDocument, match="broken.md"):
        parse_dir(content_dir)


def test_parse_dir(content_dir):
    docs = parse_dir(content_dir)
    assert [d.slug for d in docs] == ["about", "firmware-tips", "linker-scripts"]
