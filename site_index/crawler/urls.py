# File: site_index/crawler/urls.py
"""URL helpers used by the link filter: normalisation and pathological-URL checks.

All functions are pure and operate on plain strings, without parsing the URL
through :mod:`urllib.parse`, so that the results are stable for malformed input
as well.
"""

from __future__ import annotations

import re
from typing import List, Sequence

__all__: Sequence[str] = (
    "DOCUMENT_EXTENSIONS",
    "normalize",
    "is_recursive",
    "is_document_extension",
    "host_of",
    "path_of",
    "root_url",
)

#: Suffixes of documents that are never queued. Matched case-sensitively.
DOCUMENT_EXTENSIONS: tuple[str, ...] = (".pdf", ".jpg", ".png", ".gif", ".doc")

_SCHEME_RE = re.compile(r"(https|http):", re.IGNORECASE)


def normalize(url: str) -> str:
    """Strip the query string and fragment (everything from the first ``?`` or ``#``)."""
    return url.split("?", 1)[0].split("#", 1)[0]


def _strip_scheme(url: str) -> str:
    return _SCHEME_RE.sub("", url, count=1)


def _path_segments(url: str) -> List[str]:
    # "//host/a/b" -> ["", "", "host", "a", "b"]
    return _strip_scheme(url).split("/")[3:]


def is_recursive(url: str) -> bool:
    """True if any path segment occurs more than once, e.g. ``/a/b/a``.

    Some sites generate endlessly deep paths without ever answering 404. A
    repeated segment is treated as that pattern, which also rejects a few
    legitimate URLs such as ``/docs/v1/docs``.
    """
    segments = _path_segments(url)
    return len(set(segments)) != len(segments)


def is_document_extension(url: str) -> bool:
    """True if the URL ends with one of :data:`DOCUMENT_EXTENSIONS`."""
    return url.endswith(DOCUMENT_EXTENSIONS)


def host_of(url: str) -> str:
    """Host part of the URL, scheme ignored. Empty string if there is none."""
    rest = _strip_scheme(url)
    if not rest.startswith("//"):
        return ""
    return rest[2:].split("/", 1)[0]


def path_of(url: str) -> str:
    """Path part of the URL including the leading slash (``/`` for a bare host)."""
    rest = _strip_scheme(normalize(url))
    if rest.startswith("//"):
        rest = rest[2:]
        slash = rest.find("/")
        return "/" if slash < 0 else rest[slash:]
    return rest or "/"


def root_url(domain: str) -> str:
    """Seed URL of a crawl."""
    return f"http://{domain}/"
