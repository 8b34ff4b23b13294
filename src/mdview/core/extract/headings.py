"""Heading records, document title, and word count from a markdown-it token stream"""

import logging
import re

from mdview.core.models import HeadingRecord
from mdview.core.utils.slug import DEFAULT_FALLBACK, IdRegistry, heading_id
from mdview.core.utils.tokens import heading_level, inline_text


logger = logging.getLogger(__name__)

WORD_RE = re.compile(r'\b\w+\b')


def _iter_headings(tokens: list):
    """Yield (heading_open token, level, plain text) in document order."""
    for i, tok in enumerate(tokens):
        level = heading_level(tok)
        if level is None:
            continue
        inline = tokens[i + 1] if i + 1 < len(tokens) and tokens[i + 1].type == 'inline' else None
        yield tok, level, inline_text(inline) if inline is not None else ''


def extract_headings(
    tokens: list,
    fallback: str = DEFAULT_FALLBACK,
    unique_ids: bool = True,
    ) -> list[HeadingRecord]:
    """Return one HeadingRecord per non-blank heading, assigning ids.

    An id already on the heading_open token ({#id} attribute syntax) is kept
    verbatim. Every other heading gets heading_id(text). The final id is
    written back to the token so the rendered HTML carries the same value.
    """
    registry = IdRegistry(unique=unique_ids)
    found = [(tok, level, text) for tok, level, text in _iter_headings(tokens) if text.strip()]

    # Explicit ids go first so generated ids never take one of them.
    for tok, _, _ in found:
        if tok.attrGet('id'):
            registry.reserve(str(tok.attrGet('id')))

    records: list[HeadingRecord] = []
    for tok, level, text in found:
        explicit = tok.attrGet('id')
        id_ = str(explicit) if explicit else registry.issue(heading_id(text, fallback))
        tok.attrSet('id', id_)
        records.append(HeadingRecord(level=level, text=text, id=id_))

    logger.debug("Extracted %d headings", len(records))
    return records


def extract_title(tokens: list) -> str | None:
    """Text of the first heading, or None when the document has none."""
    for _, _, text in _iter_headings(tokens):
        return text or None
    return None


def plain_text(tokens: list) -> str:
    """Concatenated inline text and code block content."""
    parts = []
    for tok in tokens:
        if tok.type == 'inline':
            parts.append(inline_text(tok))
        elif tok.type in ('fence', 'code_block'):
            parts.append(tok.content)
    return '\n'.join(parts)


def word_count(tokens: list) -> int:
    return len(WORD_RE.findall(plain_text(tokens)))
