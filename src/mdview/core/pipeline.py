"""Document load pipeline: parse, ids, TOC, render, and image rewriting"""

import logging
from pathlib import Path

from mdview.config import Settings
from mdview.core.extract.headings import extract_headings, extract_title, word_count
from mdview.core.extract.toc import build_toc
from mdview.core.images import rewrite_images
from mdview.core.models import LoadedDoc, ParsedDoc, TocNode
from mdview.core.parse import discover_files, parse_file, parse_text
from mdview.core.render import render_html


logger = logging.getLogger(__name__)


def _build(parsed: ParsedDoc, settings: Settings, base_dir: str | None) -> LoadedDoc:
    """Run the heading, TOC, render and image steps over one parsed document."""
    headings = extract_headings(parsed.tokens, settings.fallback_id, settings.unique_ids)
    toc = build_toc(headings)
    html, refs = rewrite_images(
        render_html(parsed, settings.parser_config, settings.app_name),
        base_dir,
        settings.virtual_host,
        settings.image_escape_policy,
    )
    return LoadedDoc(
        path=parsed.path,
        title=extract_title(parsed.tokens),
        word_count=word_count(parsed.tokens),
        headings=headings,
        toc=toc,
        html=html,
        image_refs=refs,
    )


def load_text(text: str, settings: Settings = None, base_dir: str | None = None) -> LoadedDoc:
    """Build a LoadedDoc from markdown text; images resolve against base_dir when given."""
    settings = settings or Settings()
    return _build(parse_text(text, parser_config=settings.parser_config), settings, base_dir)


def load_document(path: Path, settings: Settings = None) -> LoadedDoc:
    """Load one markdown file. Each call rebuilds everything from disk."""
    settings = settings or Settings()
    path = Path(path)
    try:
        parsed = parse_file(path, settings.parser_config)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Failed to load {path}: {e}") from e
    doc = _build(parsed, settings, str(path.resolve().parent))
    logger.info("Loaded %s: %d headings, %d image(s) rewritten", path, len(doc.headings), len(doc.image_refs))
    return doc


def run_toc(path: str, settings: Settings = None) -> list[tuple[Path, list[TocNode]]]:
    """Return (file, toc) pairs for every markdown file under path."""
    return [(p, load_document(p, settings).toc) for p in discover_files(Path(path))]
