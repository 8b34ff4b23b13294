"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import typer

from mdview.config import Settings, load_config
from mdview.core.extract.toc import iter_toc
from mdview.core.models import LoadedDoc
from mdview.core.parse import discover_files
from mdview.core.pipeline import load_document
from mdview.core.utils.slug import heading_id


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(ctx: typer.Context, overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and set up logging."""
    overrides = dict(overrides or {})
    if ctx.obj and ctx.obj.get("verbose"):
        overrides["log_level"] = "DEBUG"
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
    return settings


def _files(path: str) -> list[Path]:
    files = discover_files(Path(path))
    if not files:
        typer.echo(f"No markdown files found at {path}.")
        raise typer.Exit(1)
    return files


def _load(path: Path, settings: Settings) -> LoadedDoc:
    try:
        return load_document(path, settings)
    except RuntimeError as e:
        _fail(str(e))


def toc_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory to read")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the tree as JSON")] = False,
    unique: Annotated[Optional[bool], typer.Option("--unique-ids/--allow-duplicate-ids",
                                                   help="Suffix repeated heading ids")] = None,
    ):
    """Print the table of contents for each markdown file."""
    settings = _settings(ctx, overrides={"unique_ids": unique})
    docs = [(p, _load(p, settings)) for p in _files(path)]

    if as_json:
        payload = [{"path": str(p), "toc": [n.model_dump() for n in doc.toc]} for p, doc in docs]
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    for p, doc in docs:
        typer.echo(str(p))
        if not doc.toc:
            typer.echo("  (no headings)")
        for depth, node in iter_toc(doc.toc):
            typer.echo(f"{'  ' * (depth + 1)}- {node.title} (#{node.id})")


def headings_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Markdown file to read")],
    ):
    """List heading level, id and text in document order."""
    settings = _settings(ctx)
    for p in _files(path):
        for rec in _load(p, settings).headings:
            typer.echo(f"{rec.level}\t{rec.id}\t{rec.text}")


def render_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Markdown file to render")],
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write HTML here instead of stdout")] = None,
    host: Annotated[Optional[str], typer.Option("--virtual-host", help="Host that serves local images")] = None,
    policy: Annotated[Optional[str], typer.Option("--escape-policy", help="reject, clamp or allow")] = None,
    ):
    """Render body HTML with heading ids and virtual-host image paths."""
    settings = _settings(ctx, overrides={"virtual_host": host, "image_escape_policy": policy})
    src = Path(path)
    if not src.is_file():
        _fail(f"Not a file: {path}")
    doc = _load(src, settings)

    if out is None:
        typer.echo(doc.html, nl=False)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(doc.html, encoding="utf-8")
    typer.echo(f"  {src} -> {out}")


def slug_cmd(
    ctx: typer.Context,
    texts: Annotated[List[str], typer.Argument(help="Heading text to convert")],
    ):
    """Print the element id generated for each heading text."""
    settings = _settings(ctx)
    for text in texts:
        typer.echo(heading_id(text, settings.fallback_id))


def info_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory to read")],
    ):
    """Show title, word count, heading count and rewritten images per file."""
    settings = _settings(ctx)
    for p in _files(path):
        doc = _load(p, settings)
        typer.echo(
            f"{p}: title={doc.title or p.stem!r} words={doc.word_count} "
            f"headings={len(doc.headings)} images={len(doc.image_refs)}"
        )
