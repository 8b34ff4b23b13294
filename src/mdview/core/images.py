"""Rewrite relative <img src> values onto a virtual host for sandboxed rendering

A rendering surface without filesystem access maps https://<virtual_host>/
onto the directory of the open document. Relative image sources are
resolved against that directory and re-expressed under the virtual host.
Remote URLs, data URIs and absolute paths are left as they are.
"""

import logging
import os
import re
from pathlib import PureWindowsPath

from mdview.core.models import ResolvedImageRef


logger = logging.getLogger(__name__)

DEFAULT_VIRTUAL_HOST = "appassets.example"
ESCAPE_POLICIES = ("reject", "clamp", "allow")

IMG_SRC_RE = re.compile(
    r'(?P<head><img\b[^>]*?\s)(?P<attr>src\s*=\s*)(?P<quote>["\'])(?P<src>(?:(?!(?P=quote)).)*)(?P=quote)',
    re.IGNORECASE,
)
# Two or more characters so that a Windows drive letter ("C:") is not a scheme.
SCHEME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.-]+:')
SUFFIX_RE = re.compile(r'^(?P<path>[^?#]*)(?P<suffix>.*)$', re.DOTALL)


def is_absolute_src(src: str) -> bool:
    """True for absolute URIs and rooted filesystem paths (POSIX, drive, UNC)."""
    if SCHEME_RE.match(src):
        return True
    if src.startswith(('/', '\\')):
        return True
    return bool(PureWindowsPath(src).drive)


def _escapes(rel: str) -> bool:
    return rel == '..' or rel.startswith('../')


def resolve_src(
    src: str,
    base_dir: str,
    virtual_host: str = DEFAULT_VIRTUAL_HOST,
    escape_policy: str = "reject",
    ) -> str | None:
    """Return the virtual-host URL for a relative src, or None to leave it unchanged.

    Query strings and fragments are carried over untouched. Targets that
    climb above base_dir are handled per escape_policy: "reject" leaves
    them alone, "clamp" drops the leading ".." segments, "allow" keeps them.
    """
    if not src or is_absolute_src(src):
        return None

    m = SUFFIX_RE.match(src)
    path, suffix = m.group('path'), m.group('suffix')
    if not path:
        return None

    base = os.path.abspath(base_dir)
    full = os.path.normpath(os.path.join(base, path.replace('\\', '/')))
    rel = os.path.relpath(full, base).replace('\\', '/')
    if rel == '.':
        return None

    if _escapes(rel):
        if escape_policy == "reject":
            logger.warning("Image %r resolves outside %s; left unchanged", src, base_dir)
            return None
        if escape_policy == "clamp":
            parts = rel.split('/')
            while parts and parts[0] == '..':
                parts.pop(0)
            if not parts:
                return None
            rel = '/'.join(parts)

    return f"https://{virtual_host}/{rel}{suffix}"


def rewrite_images(
    html: str,
    base_dir: str | None,
    virtual_host: str = DEFAULT_VIRTUAL_HOST,
    escape_policy: str = "reject",
    ) -> tuple[str, list[ResolvedImageRef]]:
    """Rewrite eligible img src values; return (html, refs that were rewritten)."""
    if escape_policy not in ESCAPE_POLICIES:
        logger.warning("Unknown escape policy %r; using 'reject'", escape_policy)
        escape_policy = "reject"
    if not base_dir:
        return html, []

    refs: list[ResolvedImageRef] = []

    def _replace(m: re.Match) -> str:
        src = m.group('src')
        try:
            resolved = resolve_src(src, base_dir, virtual_host, escape_policy)
        except (ValueError, OSError) as e:
            logger.debug("Could not resolve image %r against %s: %s", src, base_dir, e)
            resolved = None
        if resolved is None:
            return m.group(0)
        refs.append(ResolvedImageRef(original_src=src, resolved_src=resolved))
        q = m.group('quote')
        return f"{m.group('head')}{m.group('attr')}{q}{resolved}{q}"

    out = IMG_SRC_RE.sub(_replace, html)
    logger.debug("Rewrote %d image reference(s) under %s", len(refs), base_dir)
    return out, refs


def resolve_image_paths(
    html: str,
    base_dir: str | None,
    virtual_host: str = DEFAULT_VIRTUAL_HOST,
    escape_policy: str = "reject",
    ) -> str:
    """Return html with relative image sources moved onto the virtual host."""
    return rewrite_images(html, base_dir, virtual_host, escape_policy)[0]


def collect_image_refs(
    html: str,
    base_dir: str | None,
    virtual_host: str = DEFAULT_VIRTUAL_HOST,
    escape_policy: str = "reject",
    ) -> list[ResolvedImageRef]:
    """Return the image references resolve_image_paths would rewrite."""
    return rewrite_images(html, base_dir, virtual_host, escape_policy)[1]
