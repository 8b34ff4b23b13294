"""File discovery, frontmatter extraction, and markdown-it tokenization"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt
from mdit_py_plugins.attrs import attrs_block_plugin

from mdview.core.models import ParsedDoc


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.markdown', '.mkd', '.mdwn', '.mdown', '.mdtxt', '.mdtext'}

HEADING_ATTRS_RE = re.compile(r'\s*\{(?P<attrs>[^{}]*)\}\s*$')
ATTR_RE = re.compile(r'^(?:#(?P<id>[\w:-]+)|\.(?P<cls>[\w-]+)|(?P<key>[\w-]+)=(?P<val>\S+))$')


def _parse_attrs(text: str) -> list[tuple[str, str]] | None:
    """Parse '#id .cls key=val' into (name, value) pairs; None if any part is not an attribute."""
    parts = text.split()
    if not parts:
        return None
    pairs = []
    for part in parts:
        m = ATTR_RE.match(part)
        if not m:
            return None
        if m.group('id'):
            pairs.append(('id', m.group('id')))
        elif m.group('cls'):
            pairs.append(('class', m.group('cls')))
        else:
            pairs.append((m.group('key'), m.group('val').strip('"\'')))
    return pairs


def heading_attrs_rule(state) -> None:
    """Move a trailing '{#id .cls}' on a heading line onto its heading_open token."""
    tokens = state.tokens
    for i, tok in enumerate(tokens[:-1]):
        inline = tokens[i + 1]
        if tok.type != 'heading_open' or inline.type != 'inline' or not inline.children:
            continue
        last = inline.children[-1]
        if last.type != 'text':
            continue
        m = HEADING_ATTRS_RE.search(last.content)
        attrs = _parse_attrs(m.group('attrs')) if m else None
        if attrs is None:
            continue
        last.content = last.content[:m.start()]
        inline.content = HEADING_ATTRS_RE.sub('', inline.content, count=1)
        for name, value in attrs:
            if name == 'class':
                tok.attrJoin('class', value)
            else:
                tok.attrSet(name, value)


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset, with {#id} heading attributes.

    Both forms are accepted: a '{#id}' line directly above the heading and
    a trailing '{#id}' on the heading line itself.
    """
    md = MarkdownIt(preset, options_update={"linkify": False}).use(attrs_block_plugin)
    md.core.ruler.push('heading_attrs', heading_attrs_rule)
    return md


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def is_markdown_file(path: Path) -> bool:
    return path.suffix.lower() in MD_EXTENSIONS


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if is_markdown_file(path) else []
    return sorted(p for p in path.rglob('*') if p.is_file() and is_markdown_file(p))


def parse_text(raw: str, path: Path = None, parser_config: str = 'gfm-like') -> ParsedDoc:
    """Tokenize markdown text into a ParsedDoc."""
    frontmatter, body = _strip_frontmatter(raw)
    md = make_parser(parser_config)
    tokens = md.parse(body)
    logger.debug("Parsed %s into %d tokens", path or "<text>", len(tokens))
    return ParsedDoc(
        path=path,
        raw_markdown=raw,
        markdown=body,
        frontmatter=frontmatter,
        tokens=tokens,
        md=md,
    )


def parse_file(path: Path, parser_config: str = 'gfm-like') -> ParsedDoc:
    """Parse a single markdown file into a ParsedDoc with token stream."""
    raw = path.read_text(encoding='utf-8')
    return parse_text(raw, path, parser_config)
