"""Table of contents tree construction from heading records"""

from typing import Iterable, Iterator

from mdview.core.models import HeadingRecord, TocNode
from mdview.core.utils.slug import heading_id


def build_toc(records: Iterable[HeadingRecord]) -> list[TocNode]:
    """Nest headings into a forest by level using a stack of open nodes.

    A heading closes every open node at the same or a deeper level, then
    attaches to the nearest remaining ancestor, or becomes a root when none
    is left. Out-of-order levels (an h3 before any h1) never raise; they
    just produce extra roots.
    """
    roots: list[TocNode] = []
    stack: list[TocNode] = []

    for rec in records:
        node = TocNode(title=rec.text, level=rec.level, id=rec.id or heading_id(rec.text))

        while stack and stack[-1].level >= node.level:
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return roots


def iter_toc(nodes: list[TocNode], depth: int = 0) -> Iterator[tuple[int, TocNode]]:
    """Yield (depth, node) pairs in pre-order."""
    for node in nodes:
        yield depth, node
        yield from iter_toc(node.children, depth + 1)


def find_node(nodes: list[TocNode], id_: str) -> TocNode | None:
    """First node with the given id, for scroll-to-heading lookups."""
    for _, node in iter_toc(nodes):
        if node.id == id_:
            return node
    return None
