"""Shared markdown-it token utilities"""


_BREAKS = {'softbreak', 'hardbreak'}


def heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def inline_text(token) -> str:
    """Plain text of an inline token: literals, code spans and image alt text.

    Raw inline HTML is dropped and line breaks collapse to a single space.
    Link targets are not included, only the link's visible text.
    """
    parts: list[str] = []
    for child in token.children or []:
        if child.type in ('text', 'text_special', 'code_inline'):
            parts.append(child.content)
        elif child.type == 'image':
            parts.append(child.content)
        elif child.type in _BREAKS:
            parts.append(' ')
    return ''.join(parts).strip()
