"""Heading outline and code-block listing from markdown-it tokens"""

from mdsite.core.models import CodeBlock, Heading
from mdsite.core.utils.text import slugify


def heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag[:1] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def _plain_text(inline) -> str:
    """Heading text without inline markup: text and code spans only."""
    parts = [c.content for c in (inline.children or []) if c.type in ('text', 'code_inline')]
    return ''.join(parts).strip()


def headings(tokens: list, max_level: int = 6) -> list[Heading]:
    """Collect headings in document order with unique anchors for a table of contents."""
    found: list[Heading] = []
    seen: dict[str, int] = {}
    for i, tok in enumerate(tokens):
        level = heading_level(tok)
        if level is None or level > max_level:
            continue
        inline = tokens[i + 1] if i + 1 < len(tokens) else None
        text = _plain_text(inline) if inline is not None and inline.type == 'inline' else ''
        base = slugify(text) or 'section'
        anchor, count = base, seen.get(base, 0)
        while anchor in seen:
            count += 1
            anchor = f"{base}-{count}"
        seen[base] = count
        seen.setdefault(anchor, 0)
        found.append(Heading(level=level, text=text, anchor=anchor))
    return found


def code_blocks(tokens: list) -> list[CodeBlock]:
    """Return fenced and indented code blocks verbatim; their content is never interpreted."""
    blocks = []
    for tok in tokens:
        if tok.type == 'fence':
            lang = tok.info.strip().split(maxsplit=1)[0] if tok.info.strip() else ''
            blocks.append(CodeBlock(lang=lang, content=tok.content))
        elif tok.type == 'code_block':
            blocks.append(CodeBlock(lang='', content=tok.content))
    return blocks
