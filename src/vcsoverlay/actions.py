"""Actions that hand a path to the VCS GUI tool when the user asks for them.

Every tracked asset ``X`` may have a ``X.meta`` sidecar, and the sidecar has
to follow the asset through adds, commits, reverts and so on. Tortoise tools
accept both in one ``/path:`` argument joined with ``*``; the Mercurial tool
gets a separate invocation for the sidecar. After the tool exits the engine
re-reads status for the affected directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from vcsoverlay.engine import StatusEngine
from vcsoverlay.parser import COMPANION_SUFFIX
from vcsoverlay.paths import normalize_path
from vcsoverlay.process import ProcessInvoker, ProcessResult
from vcsoverlay.profiles import VCSProfile

logger = logging.getLogger(__name__)


class VCSActions:
    """Update, commit, push, log, cleanup, add, revert, rename and delete."""

    def __init__(self, engine: StatusEngine, invoker: Optional[ProcessInvoker] = None) -> None:
        self.engine = engine
        self.invoker = invoker if invoker is not None else engine.invoker
        self.status_message: Optional[str] = None

    @property
    def profile(self) -> VCSProfile:
        return self.engine.profile

    # ------------------------------------------------------------------
    # Enable predicates
    # ------------------------------------------------------------------

    def can_add(self, paths: Iterable[str]) -> bool:
        paths = list(paths)
        return bool(paths) and not self.engine.is_managed(paths)

    def _managed(self, paths: Iterable[str]) -> bool:
        paths = list(paths)
        return bool(paths) and self.engine.is_managed(paths)

    def can_commit(self, paths: Iterable[str]) -> bool:
        return self._managed(paths)

    def can_revert(self, paths: Iterable[str]) -> bool:
        return self._managed(paths)

    def can_log(self, paths: Iterable[str]) -> bool:
        return self._managed(paths)

    def can_rename(self, paths: Iterable[str]) -> bool:
        return self._managed(paths)

    def can_delete(self, paths: Iterable[str]) -> bool:
        return self._managed(paths)

    def can_push(self) -> bool:
        return self.profile.supports_push

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def update(self, path: str = "") -> bool:
        """Bring the working copy up to date (``pull`` for Git)."""
        return self._execute(self.profile.update_command, path)

    def commit(self, path: str = "") -> bool:
        return self._execute("commit", path)

    def push(self, path: str = "") -> bool:
        if not self.can_push():
            self.status_message = f"Push is not available for {self.profile.kind.label}."
            return False
        return self._execute("push", path)

    def log(self, path: str) -> bool:
        return self._execute("log", path)

    def cleanup(self, path: str = "") -> bool:
        return self._execute("cleanup", path)

    def add(self, path: str) -> bool:
        return self._execute("add", path)

    def revert(self, path: str) -> bool:
        return self._execute("revert", path)

    def rename(self, path: str) -> bool:
        return self._execute("rename", path)

    def delete(self, path: str) -> bool:
        return self._execute("remove", path)

    # ------------------------------------------------------------------
    # Command assembly
    # ------------------------------------------------------------------

    def gui_command(self, command: str, path_argument: str) -> List[str]:
        """Build the GUI tool command line for ``command`` on ``path_argument``."""
        tool = self.profile.gui_tool
        if self.profile.tortoise_style:
            return [tool, f"/command:{command}", f"/path:{path_argument}", "/closeonend:0"]
        return [tool, command, path_argument]

    def _execute(self, command: str, path: str) -> bool:
        relative = normalize_path(path) or self.engine.root_marker
        target = self.engine.project_dir / relative
        full_path = str(target)
        sidecar = full_path + COMPANION_SUFFIX
        cwd = self.engine.project_dir
        logger.info("%s: %s", command, full_path)

        if command == "rename":
            # The sidecar must be renamed (and finished) before its asset.
            if Path(sidecar).exists():
                result = self.invoker.launch(self.gui_command(command, sidecar), cwd, wait=True)
                if not result.ok:
                    return self._finish(command, relative, result)
            path_argument = full_path
        elif self.profile.tortoise_style:
            path_argument = f"{full_path}*{sidecar}"
        else:
            sidecar_result = self.invoker.launch(self.gui_command(command, sidecar), cwd, wait=False)
            if not sidecar_result.ok:
                logger.warning("%s for %s failed: %s", command, sidecar, sidecar_result.error)
            path_argument = full_path

        result = self.invoker.launch(self.gui_command(command, path_argument), cwd, wait=True)
        return self._finish(command, relative, result)

    def _finish(self, command: str, relative: str, result: ProcessResult) -> bool:
        if result.ok:
            self.status_message = f"{command.capitalize()} finished for {relative}."
        else:
            self.status_message = f"{command.capitalize()} failed: {result.error or result.outcome.value}"
            logger.warning("%s", self.status_message)
        self.engine.update_status(relative, force=True)
        return result.ok


__all__ = ["VCSActions"]
