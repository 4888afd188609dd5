"""Helpers for cleaning, comparing and joining slash-separated paths."""

from __future__ import annotations

from urllib.parse import quote

# Characters a path segment keeps unescaped when every segment is encoded.
_SEGMENT_SAFE = "$&+:=@"

_PARTIAL_REPLACEMENTS = (
    ("%", "%25"),
    ("%", "%25"),
    ("?", "%3F"),
    ("#", "%23"),
)


def _clean(path: str) -> str:
    """Return the shortest equivalent of a slash-separated path."""
    if not path:
        return "."
    rooted = path.startswith("/")
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(segment)
    joined = "/".join(parts)
    if rooted:
        return "/" + joined
    return joined or "."


def fix_and_clean_path(path: str) -> str:
    """Normalise a path so it is absolute and free of '.' and '..' parts.

    Going above the root stays at the root, so ".." becomes "/".
    Backslashes are treated as separators.
    """
    path = path.replace("\\", "/")
    if not path.startswith("/"):
        path = "/" + path
    return _clean(path)


def path_add_separator_suffix(path: str) -> str:
    """Append a trailing '/' unless the path already has one."""
    return path if path.endswith("/") else path + "/"


def path_equal(path1: str, path2: str) -> bool:
    """Tell whether two paths are equal once cleaned."""
    return fix_and_clean_path(path1) == fix_and_clean_path(path2)


def is_sub_path(path: str, sub_path: str) -> bool:
    """Tell whether ``sub_path`` is ``path`` itself or lies beneath it."""
    path, sub_path = fix_and_clean_path(path), fix_and_clean_path(sub_path)
    return path == sub_path or sub_path.startswith(path_add_separator_suffix(path))


def ext(path: str) -> str:
    """Return the extension of the last path element, without the dot."""
    base = path.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot + 1 :] if dot >= 0 else ""


def encode_path(path: str, all: bool = False) -> str:  # noqa: A002
    """Escape each segment of a path.

    With ``all`` every segment is fully percent-encoded; otherwise only
    '%', '?' and '#' are replaced.
    """
    segments = path.split("/")
    if all:
        encoded = [quote(segment, safe=_SEGMENT_SAFE) for segment in segments]
    else:
        encoded = []
        for segment in segments:
            for src, dst in _PARTIAL_REPLACEMENTS:
                segment = segment.replace(src, dst)
            encoded.append(segment)
    return "/".join(encoded)


def join_base_path(base_path: str, req_path: str) -> str:
    """Join a request path onto a base path, refusing relative escapes."""
    if req_path.endswith("..") or "../" in req_path:
        raise ValueError("access using relative path is not allowed")
    return _clean(fix_and_clean_path(base_path) + "/" + fix_and_clean_path(req_path))