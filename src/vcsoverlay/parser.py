"""Parse the free-form text printed by ``svn/git/hg status``.

Status clients mix path lines with headers, summaries and warnings. Parsing is
best effort: a line is only used when it mentions the project root marker
(``Assets`` for a Unity project), everything else is skipped silently.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from vcsoverlay.classifier import classify
from vcsoverlay.kinds import StatusCode
from vcsoverlay.paths import SEPARATOR, looks_like_file, normalize_path
from vcsoverlay.profiles import VCSProfile

RENAME_ARROW = "-> "
COMPANION_SUFFIX = ".meta"


@dataclass(frozen=True)
class PathEntry:
    path: str
    status: StatusCode
    is_dir: bool = False


def _iter_lines(raw_output: str) -> Iterator[str]:
    """Yield non-empty lines with ``/`` separators and no carriage returns."""
    text = raw_output.replace("\r\n", "\n").replace("\r", "\n").replace("\\", SEPARATOR)
    for line in text.split("\n"):
        if line:
            yield line


def _find_marker(line: str, token: str) -> int:
    """Index of ``token`` where it starts a path segment, or ``-1``."""
    start = line.find(token)
    while start != -1:
        if start == 0:
            return start
        previous = line[start - 1]
        if not (previous.isalnum() or previous in "_-"):
            return start
        start = line.find(token, start + 1)
    return -1


def extract_path(line: str, root_marker: str) -> Optional[str]:
    """Return the project-relative path mentioned in ``line``.

    The line is cut at the root marker; for ``old -> new`` rename lines only
    the destination is kept. ``None`` means the line names nothing under the
    project root.
    """
    index = _find_marker(line, root_marker + SEPARATOR)
    if index == -1:
        index = _find_marker(line, root_marker)
    if index == -1:
        return None

    candidate = line[index:]
    arrow = candidate.find(RENAME_ARROW)
    if arrow != -1:
        candidate = candidate[arrow + len(RENAME_ARROW):]

    # Git quotes paths containing spaces or non-ASCII characters.
    candidate = normalize_path(candidate.strip().strip('"'))
    if not candidate.startswith(root_marker):
        return None
    rest = candidate[len(root_marker):]
    if rest and rest[0] not in (SEPARATOR, "."):
        return None
    return candidate


def _promote_companions(statuses: Dict[str, StatusCode]) -> None:
    """Let a changed ``X.meta`` mark an otherwise unchanged asset ``X``."""
    for path, status in list(statuses.items()):
        if not path.endswith(COMPANION_SUFFIX) or status is StatusCode.NORMAL:
            continue
        primary = path[: -len(COMPANION_SUFFIX)]
        # A folder's sidecar; folders are handled by propagation.
        if not looks_like_file(primary):
            continue
        if statuses.get(primary, StatusCode.NORMAL) is StatusCode.NORMAL:
            statuses[primary] = status


def parse_file_report(raw_output: str, root_marker: str, profile: VCSProfile) -> List[PathEntry]:
    """Parse the "all tracked files" status report.

    Later lines for the same path win. Companion metadata promotion happens
    once the whole report is read, so it does not depend on whether the asset
    is listed before or after its ``.meta`` file.
    """
    statuses: Dict[str, StatusCode] = {}
    for line in _iter_lines(raw_output):
        path = extract_path(line, root_marker)
        if path is None:
            continue
        statuses[path] = classify(line, profile)

    _promote_companions(statuses)
    return [
        PathEntry(path=path, status=status, is_dir=not looks_like_file(path))
        for path, status in statuses.items()
    ]


def parse_change_report(raw_output: str, root_marker: str, profile: VCSProfile) -> List[PathEntry]:
    """Parse the "changed files only" report used for folder propagation."""
    entries: List[PathEntry] = []
    for line in _iter_lines(raw_output):
        path = extract_path(line, root_marker)
        if path is None:
            continue
        entries.append(
            PathEntry(path=path, status=classify(line, profile), is_dir=not looks_like_file(path))
        )
    return entries


__all__ = [
    "PathEntry",
    "RENAME_ARROW",
    "COMPANION_SUFFIX",
    "extract_path",
    "parse_file_report",
    "parse_change_report",
]
