"""Cached per-path status for files and directories."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from vcsoverlay.kinds import StatusCode
from vcsoverlay.parser import PathEntry
from vcsoverlay.paths import directory_prefixes, is_within, normalize_path, parent_directory

MAX_FILE_ENTRIES = 1024


class PathStatusStore:
    """Two path -> status caches plus the folder propagation rules.

    ``files`` holds leaf paths, ``folders`` holds the propagated status of
    directories. Both maps are rebuilt as new dictionaries and then assigned,
    so a reader never observes a half-built map.
    """

    def __init__(self, root_marker: str) -> None:
        self.root_marker = normalize_path(root_marker)
        self.files: Dict[str, StatusCode] = {}
        self.folders: Dict[str, StatusCode] = {}

    @property
    def is_empty(self) -> bool:
        return not self.files and not self.folders

    def guard_capacity(self) -> bool:
        """Drop the file cache once it has grown past :data:`MAX_FILE_ENTRIES`."""
        if len(self.files) > MAX_FILE_ENTRIES:
            self.files = {}
            return True
        return False

    def replace_files(self, scope: str, entries: Iterable[PathEntry]) -> None:
        """Replace every cached file under ``scope`` with the file ``entries``."""
        scope = normalize_path(scope)
        rebuilt = {
            path: status
            for path, status in self.files.items()
            if not is_within(path, scope)
        }
        for entry in entries:
            if not entry.is_dir:
                rebuilt[entry.path] = entry.status
        self.files = rebuilt

    def rebuild_folders(
        self,
        directory_entries: Iterable[PathEntry],
        change_entries: Iterable[PathEntry],
        coerce: Callable[[StatusCode], StatusCode],
    ) -> None:
        """Rebuild ``folders`` and push changed-file status up to the root.

        Directories listed by the file pass are seeded with their coerced
        status. Every ancestor directory of a changed path takes the (coerced)
        status of that path unless an earlier entry already gave it a
        non-NORMAL status. The root marker itself never carries a badge.
        """
        rebuilt: Dict[str, StatusCode] = {}
        for entry in directory_entries:
            if entry.is_dir:
                rebuilt[entry.path] = coerce(entry.status)

        for entry in change_entries:
            status = coerce(entry.status)
            directory = entry.path if entry.is_dir else parent_directory(entry.path)
            for prefix in directory_prefixes(directory):
                current = rebuilt.get(prefix)
                if current is None or current is StatusCode.NORMAL:
                    rebuilt[prefix] = status

        rebuilt.pop(self.root_marker, None)
        self.folders = rebuilt

        # A name like "Plugins.x86" is guessed to be a file until something is
        # found beneath it.
        if any(path in rebuilt for path in self.files):
            self.files = {path: status for path, status in self.files.items() if path not in rebuilt}

    def clear_files(self) -> None:
        self.files = {}

    def clear_folders(self) -> None:
        self.folders = {}

    def clear(self) -> None:
        self.clear_files()
        self.clear_folders()

    def lookup(self, path: str) -> Optional[StatusCode]:
        """Return the cached status for ``path``, files first, or ``None``."""
        key = normalize_path(path)
        status = self.files.get(key)
        if status is None:
            status = self.folders.get(key)
        return status


__all__ = ["PathStatusStore", "MAX_FILE_ENTRIES"]
