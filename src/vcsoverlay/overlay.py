"""Glue between a host file browser and the status engine."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from vcsoverlay.badges import Badge, badge_for
from vcsoverlay.config import OverlaySettings
from vcsoverlay.engine import StatusEngine
from vcsoverlay.paths import normalize_path
from vcsoverlay.process import ProcessInvoker
from vcsoverlay.profiles import VCSProfile, get_profile


def _profile_for(settings: OverlaySettings) -> VCSProfile:
    return get_profile(settings.vcs_kind, settings.executables, settings.gui_tools)


class StatusOverlay:
    """Answer "which badge goes on this item?" for each drawn browser row.

    The host calls :meth:`badge_for_item` from its item-drawing callback and
    passes the current selection; the selection drives refreshes, the item
    only reads the cache. ``redraw`` is called after every refresh so the host
    can repaint with fresh badges.
    """

    def __init__(
        self,
        settings: OverlaySettings,
        project_dir: Path,
        invoker: Optional[ProcessInvoker] = None,
        redraw: Optional[Callable[[], None]] = None,
    ) -> None:
        self.settings = settings
        self.engine = self._build_engine(Path(project_dir), invoker, redraw)

    def _build_engine(
        self,
        project_dir: Path,
        invoker: Optional[ProcessInvoker],
        redraw: Optional[Callable[[], None]],
    ) -> StatusEngine:
        return StatusEngine(
            project_dir,
            _profile_for(self.settings),
            root_marker=self.settings.root_marker,
            invoker=invoker,
            timeout=self.settings.timeout,
            on_refreshed=redraw,
        )

    def start(self) -> bool:
        """Initial whole-project refresh."""
        if not self.settings.overlay_enabled:
            return False
        return self.engine.refresh_root()

    def badge_for_item(self, item_path: str, selected_path: Optional[str] = None) -> Optional[Badge]:
        if not self.settings.overlay_enabled:
            return None
        if selected_path:
            self.engine.update_status(selected_path)
        return badge_for(self.engine.status_of(item_path), self.settings.only_modified)

    def apply_settings(self, settings: OverlaySettings) -> None:
        """Switch to new settings, dropping all cached status."""
        self.settings = settings
        old = self.engine
        if normalize_path(settings.root_marker) != old.root_marker:
            self.engine = self._build_engine(old.project_dir, old.invoker, old.on_refreshed)
        else:
            old.timeout = settings.timeout
            old.set_profile(_profile_for(settings))
        if settings.overlay_enabled:
            self.engine.refresh_root()


__all__ = ["StatusOverlay"]
