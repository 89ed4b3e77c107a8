from __future__ import annotations

from typing import Mapping
from urllib.parse import quote

QueryValue = str | int | float
Query = Mapping[str, QueryValue]

# Same unreserved set as JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "!~*'()"


def normalize_url_path(raw: str) -> str:
    """Collapse separators and dot segments of a URL path.

    Backslashes are treated as separators. ``..`` never climbs above the
    root, and a trailing slash in the input is kept.
    """
    value = raw.replace("\\", "/")
    trailing = value.endswith("/")
    segments: list[str] = []
    for segment in value.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)

    path = "/" + "/".join(segments)
    if trailing and segments:
        path += "/"
    return path


def render_value(value: QueryValue | bool) -> str:
    """Booleans render lower-case and integral floats drop ``.0``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_query(query: Query | None) -> str:
    if not query:
        return ""
    return "&".join(f"{key}={quote(render_value(value), safe=_URI_COMPONENT_SAFE)}" for key, value in query.items())


def build_request_path(prefix: str | None, path: str | None, query: Query | None = None) -> str:
    request_path = normalize_url_path(f"/{prefix or ''}/{path or ''}")
    query_string = encode_query(query)
    if query_string:
        return f"{request_path}?{query_string}"
    return request_path


def render_query_for_log(path: str, query: Query | None = None) -> str:
    if not query:
        return path
    rendered = "&".join(f"{key}={render_value(value)}" for key, value in query.items())
    return f"{path}?{rendered}"
