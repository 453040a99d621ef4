"""Helpers for the ``/``-separated, project-relative paths used as cache keys."""

from __future__ import annotations

from typing import List

SEPARATOR = "/"


def normalize_path(path: str) -> str:
    """Return ``path`` with forward slashes and no trailing separator."""
    normalized = path.replace("\\", SEPARATOR).strip()
    while normalized.endswith(SEPARATOR):
        normalized = normalized[:-1]
    return normalized


def looks_like_file(path: str) -> bool:
    """Guess whether ``path`` names a file.

    VCS status output does not say whether an entry is a file or a directory,
    so anything whose last segment has an extension counts as a file.
    """
    name = path.rsplit(SEPARATOR, 1)[-1]
    return "." in name


def parent_directory(path: str) -> str:
    """Strip the last segment; a single-segment path is returned unchanged."""
    index = path.rfind(SEPARATOR)
    if index == -1:
        return path
    return path[:index]


def containing_directory(path: str) -> str:
    """Return the directory a refresh for ``path`` should cover."""
    normalized = normalize_path(path)
    if looks_like_file(normalized):
        return parent_directory(normalized)
    return normalized


def is_within(path: str, scope: str) -> bool:
    """True when ``path`` equals ``scope`` or lies below it."""
    return path == scope or path.startswith(scope + SEPARATOR)


def directory_prefixes(directory: str) -> List[str]:
    """List ``A``, ``A/B``, ``A/B/C`` for ``A/B/C``, root first."""
    prefixes: List[str] = []
    current = ""
    for segment in directory.split(SEPARATOR):
        if not segment:
            continue
        current = f"{current}{SEPARATOR}{segment}" if current else segment
        prefixes.append(current)
    return prefixes


__all__ = [
    "SEPARATOR",
    "normalize_path",
    "looks_like_file",
    "parent_directory",
    "containing_directory",
    "is_within",
    "directory_prefixes",
]
