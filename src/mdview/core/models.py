"""Data models for headings, the table of contents, and loaded documents"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class HeadingRecord(BaseModel):
    """One heading occurrence in document order."""
    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1, le=6)
    text: str                       # plain text, entities decoded
    id: Optional[str] = None        # explicit or generated element id


class TocNode(BaseModel):
    """A heading plus every deeper heading nested beneath it."""
    title: str
    level: int = Field(..., ge=1, le=6)
    id: str
    children: list["TocNode"] = Field(default_factory=list)


@dataclass(frozen=True)
class ResolvedImageRef:
    """An image src before and after virtual-host rewriting; not persisted."""
    original_src: str
    resolved_src: str


@dataclass
class ParsedDoc:
    """Internal parse result carrying markdown-it tokens; not persisted."""
    path:         Optional[Path]
    raw_markdown: str          # full file content (includes frontmatter)
    markdown:     str          # body only (frontmatter stripped)
    frontmatter:  dict[str, Any]
    tokens:       list         # markdown-it Token objects
    md:           Any = None   # MarkdownIt instance that produced the tokens


@dataclass
class LoadedDoc:
    """Everything the viewer needs after (re)loading one document."""
    path:        Optional[Path]
    title:       Optional[str]
    word_count:  int
    headings:    list[HeadingRecord]
    toc:         list[TocNode]
    html:        str
    image_refs:  list[ResolvedImageRef] = field(default_factory=list)
