"""Status synchronisation engine.

:class:`StatusEngine` owns the path caches and decides when they are stale.
A refresh runs two ``status`` queries one after another: an "all files" query
scoped to the directory being browsed and a "changed files only" query over
the whole project root that feeds folder propagation. Refreshes are
synchronous; the caller (normally a redraw callback) blocks until both client
processes have exited or timed out.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set

from vcsoverlay.kinds import StatusCode
from vcsoverlay.parser import PathEntry, parse_change_report, parse_file_report
from vcsoverlay.paths import containing_directory, is_within, normalize_path
from vcsoverlay.process import DEFAULT_TIMEOUT, ProcessInvoker
from vcsoverlay.profiles import VCSProfile
from vcsoverlay.store import PathStatusStore

logger = logging.getLogger(__name__)

DEFAULT_ROOT_MARKER = "Assets"

FILE_PASS = "file status"
CHANGE_PASS = "change status"


class StatusEngineError(Exception):
    """Raised when the status engine cannot be set up."""


class RefreshState(Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class StatusEngine:
    """Keep VCS status for one project and answer badge queries."""

    def __init__(
        self,
        project_dir: Path,
        profile: VCSProfile,
        root_marker: str = DEFAULT_ROOT_MARKER,
        invoker: Optional[ProcessInvoker] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        on_refreshed: Optional[Callable[[], None]] = None,
    ) -> None:
        project_dir = Path(project_dir).expanduser()
        if not project_dir.is_dir():
            raise StatusEngineError(f"Project directory not found: {project_dir}")
        marker = normalize_path(root_marker)
        if not marker:
            raise StatusEngineError("Root marker must not be empty.")

        self.project_dir = project_dir
        self.profile = profile
        self.root_marker = marker
        self.invoker = invoker if invoker is not None else ProcessInvoker()
        self.timeout = timeout
        self.on_refreshed = on_refreshed

        self.store = PathStatusStore(marker)
        self.state = RefreshState.IDLE
        self.update_succeeded = False
        self.last_refreshed_scope: Optional[str] = None
        self._last_outcome: Optional[bool] = None
        self._failing_passes: Set[str] = set()

    # ------------------------------------------------------------------
    # Refreshing
    # ------------------------------------------------------------------

    def update_status(self, path: str, force: bool = False) -> bool:
        """Refresh when ``path`` lies in a different directory than last time.

        Returns ``True`` when a refresh actually ran. Sibling files share a
        containing directory, so querying several of them in one redraw costs
        a single pair of client invocations.
        """
        if self.state is RefreshState.REFRESHING:
            return False
        scope = containing_directory(path) or self.root_marker
        if not force and scope == self.last_refreshed_scope:
            return False
        self.refresh(scope)
        return True

    def refresh_root(self) -> bool:
        """Refresh the whole project, as done on startup."""
        return self.refresh(self.root_marker)

    def refresh(self, scope: str) -> bool:
        """Query the VCS client for ``scope`` and rebuild the caches.

        Returns :attr:`update_succeeded`. A failing query clears only the map
        it feeds; whatever the other query produced is kept.
        """
        scope = normalize_path(scope) or self.root_marker
        self.state = RefreshState.REFRESHING
        try:
            self.store.guard_capacity()

            file_entries: List[PathEntry] = []
            output = self._query(FILE_PASS, self.profile.file_query_flags, scope)
            if output is None:
                self.store.clear_files()
            else:
                file_entries = parse_file_report(output, self.root_marker, self.profile)
                self.store.replace_files(scope, file_entries)

            output = self._query(CHANGE_PASS, self.profile.change_query_flags, self.root_marker)
            if output is None:
                self.store.clear_folders()
            else:
                change_entries = parse_change_report(output, self.root_marker, self.profile)
                self.store.rebuild_folders(file_entries, change_entries, self.profile.folder_status)

            self.last_refreshed_scope = scope
            self._record_outcome(not self.store.is_empty)
        finally:
            self.state = RefreshState.IDLE

        if self.on_refreshed is not None:
            self.on_refreshed()
        return self.update_succeeded

    def reset(self) -> None:
        """Forget all cached status, e.g. after the settings changed."""
        self.store.clear()
        self.last_refreshed_scope = None

    def set_profile(self, profile: VCSProfile) -> None:
        self.profile = profile
        self._failing_passes.clear()
        self.reset()

    def _query(self, name: str, flags: Iterable[str], target: str) -> Optional[str]:
        """Run one status query; ``None`` means no usable output."""
        arguments = self.profile.status_arguments(tuple(flags), f"./{target}")
        result = self.invoker.run(self.profile.executable, arguments, self.project_dir, self.timeout)
        if result.ok:
            if name in self._failing_passes:
                self._failing_passes.discard(name)
                logger.info("%s query for %s works again.", name, self.profile.kind.label)
            return result.stdout

        if name not in self._failing_passes:
            self._failing_passes.add(name)
            logger.warning("%s query failed: %s", name, result.error or result.outcome.value)
        return None

    def _record_outcome(self, succeeded: bool) -> None:
        self.update_succeeded = succeeded
        if succeeded == self._last_outcome:
            return
        self._last_outcome = succeeded
        if succeeded:
            logger.info("VCS status update succeeded.")
        else:
            logger.warning("VCS status update failed; no status is available.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def status_of(self, path: str) -> Optional[StatusCode]:
        """Return the badge status for ``path``.

        ``None`` means "show nothing": the last refresh failed, or the path is
        outside the project root. Paths the client did not mention are
        ``NORMAL``.
        """
        key = normalize_path(path)
        if not key or not self.update_succeeded:
            return None
        if not is_within(key, self.root_marker):
            return None
        status = self.store.lookup(key)
        return StatusCode.NORMAL if status is None else status

    def is_managed(self, paths: Iterable[str]) -> bool:
        """False when any of ``paths`` is not under version control."""
        return not any(self.status_of(path) is StatusCode.UNMANAGED for path in paths)

    def snapshot(self) -> Dict[str, StatusCode]:
        """All cached entries, folders and files together, sorted by path."""
        merged = {**self.store.folders, **self.store.files}
        return dict(sorted(merged.items()))


__all__ = [
    "StatusEngine",
    "StatusEngineError",
    "RefreshState",
    "DEFAULT_ROOT_MARKER",
    "FILE_PASS",
    "CHANGE_PASS",
]
