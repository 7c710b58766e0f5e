"""Source links: package import paths to browsable URLs, positions to fragments."""

from __future__ import annotations

import html
import logging
import posixpath
import re
from dataclasses import dataclass

from godoc_md.config import CustomLinkFormat, LinkFormat
from godoc_md.constants import FALLBACK_SOURCE_URL, NAMESPACE_ALIASES, SOURCE_MOUNT_PREFIX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformRule:
    """Hosting platform recognizer.

    ``pattern`` captures host, owner, repo and an optional subpath, in that
    order. ``suffix`` is placed between the repository root and the subpath.
    """

    pattern: re.Pattern
    suffix: str

    def rewrite(self, import_path: str) -> str | None:
        """Return the browse URL for import_path, or None if it doesn't match."""
        m = self.pattern.fullmatch(import_path)
        if m is None:
            return None
        host, owner, repo, subpath = m.groups()
        url = f"https://{host}/{owner}/{repo}/{self.suffix}"
        if subpath:
            url += subpath
        return url


# Order matters: the generic domain rule must stay last.
PLATFORM_RULES: tuple[PlatformRule, ...] = (
    PlatformRule(
        re.compile(
            r"^(github\.com)/(?P<owner>[a-z0-9A-Z_.\-]+)/(?P<repo>[a-z0-9A-Z_.\-]+)"
            r"(?P<dir>/.*)?$"
        ),
        "tree/master",
    ),
    PlatformRule(
        re.compile(
            r"^(bitbucket\.org)/(?P<owner>[a-z0-9A-Z_.\-]+)/(?P<repo>[a-z0-9A-Z_.\-]+)"
            r"(?P<dir>/[a-z0-9A-Z_.\-/]*)?$"
        ),
        "src/master",
    ),
    PlatformRule(
        re.compile(
            r"^(?P<domain>[a-z0-9A-Z_.\-]+\.[a-z]+)/(?P<owner>[a-z0-9A-Z_.\-]+)"
            r"/(?P<repo>[a-z0-9A-Z_.\-]+)(?P<dir>/[a-z0-9A-Z_.\-/]*)?$"
        ),
        "src",
    ),
)


def normalize_import_path(import_path: str) -> str:
    """Rewrite umbrella namespaces to the organization that hosts them."""
    for alias, target in NAMESPACE_ALIASES:
        if import_path == alias or import_path.startswith(alias + "/"):
            return target + import_path[len(alias):]
    return import_path


def resolve_source_url(
    import_path: str, rules: tuple[PlatformRule, ...] = PLATFORM_RULES,
) -> str:
    """Rewrite a package import path to its browsable source URL.

    The result can be extended with a file path without caring what sits
    between the repository root and the package directory.
    """
    src = normalize_import_path(import_path)
    for rule in rules:
        url = rule.rewrite(src)
        if url is not None:
            return url
    logger.debug("resolve_source_url: no platform rule for %s, using fallback", src)
    return FALLBACK_SOURCE_URL.format(path=src)


def clean_source_path(path: str) -> str:
    """Make path absolute and clean, without the internal mount prefix."""
    cleaned = posixpath.normpath("/" + path)
    # normpath keeps a leading "//" as-is
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    if cleaned == SOURCE_MOUNT_PREFIX:
        return ""
    if cleaned.startswith(SOURCE_MOUNT_PREFIX + "/"):
        return cleaned[len(SOURCE_MOUNT_PREFIX):]
    return cleaned


def html_escape(text: str) -> str:
    """Escape text the way Go's template.HTMLEscape does, byte for byte."""
    escaped = html.escape(text, quote=False)
    return escaped.replace('"', "&#34;").replace("'", "&#39;").replace("\0", "\ufffd")


def build_position_link(
    file_path: str, line: int, low: int, high: int, link_format: LinkFormat,
) -> str:
    """Return the path, selection query and line hash for a source position.

    The scheme and host are left to the caller, which joins this onto the
    package URL from resolve_source_url.
    """
    if isinstance(link_format, CustomLinkFormat):
        return link_format.format(file_path, line, low, high)

    parts = [html_escape(clean_source_path(file_path))]
    # selection ranges are of form "s=low:high"
    if low < high:
        parts.append(f"?s={low}:{high}")
        if line < 1:
            line = 1
    if line > 0:
        parts.append(link_format.hash_format % line)
    return "".join(parts)
