"""GitHub-style heading identifiers"""

import re


DEFAULT_FALLBACK = "section"


def heading_id(text: str, fallback: str = DEFAULT_FALLBACK) -> str:
    """Convert heading text to a lowercase, hyphen-separated element id.

    Whitespace becomes hyphens before anything else is stripped, so
    "Setup & Run" yields "setup-run" rather than "setup--run".
    """
    text = text.lower()
    text = re.sub(r'\s+', '-', text)
    text = re.sub(r'[^a-z0-9_-]', '', text)
    text = re.sub(r'-+', '-', text).strip('-')
    return text or fallback


class IdRegistry:
    """Per-document record of issued ids.

    With unique=True a repeated id gets a numeric suffix (intro, intro-1,
    intro-2); otherwise ids are passed through and may collide.
    """

    def __init__(self, unique: bool = True):
        self.unique = unique
        self._seen: dict[str, int] = {}

    def reserve(self, id_: str) -> str:
        """Record an explicit id verbatim so generated ids steer around it."""
        self._seen.setdefault(id_, 0)
        return id_

    def issue(self, base: str) -> str:
        """Return base, or the first free base-N when base is taken."""
        if not self.unique:
            return self.reserve(base)
        if base not in self._seen:
            self._seen[base] = 0
            return base
        count = self._seen[base]
        while True:
            count += 1
            candidate = f"{base}-{count}"
            if candidate not in self._seen:
                break
        self._seen[base] = count
        self._seen[candidate] = 0
        return candidate
