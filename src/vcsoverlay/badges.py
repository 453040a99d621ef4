"""Overlay badges drawn next to browser items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from vcsoverlay.kinds import StatusCode

# RGBA, 0.0 - 1.0
Color = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Badge:
    text: str
    color: Color


BADGES: Dict[StatusCode, Badge] = {
    StatusCode.NORMAL: Badge("o", (0.0, 1.0, 0.0, 0.5)),
    StatusCode.UNMANAGED: Badge("?", (1.0, 1.0, 1.0, 0.5)),
    StatusCode.MODIFIED: Badge("!", (1.0, 0.0, 0.0, 0.5)),
    StatusCode.ADDED: Badge("+", (0.0, 0.0, 1.0, 0.5)),
    StatusCode.CONFLICTED: Badge("!?", (1.0, 1.0, 0.0, 0.5)),
    StatusCode.DELETED: Badge("x", (1.0, 0.0, 0.0, 0.5)),
}


def badge_for(status: Optional[StatusCode], only_modified: bool = False) -> Optional[Badge]:
    """Return the badge for ``status``, or ``None`` when nothing is drawn.

    With ``only_modified`` set, unchanged items stay undecorated.
    """
    if status is None:
        return None
    if only_modified and status is StatusCode.NORMAL:
        return None
    return BADGES[status]


def format_badge(status: Optional[StatusCode], only_modified: bool = False) -> str:
    """Plain-text rendering used by the command line, e.g. ``"[!]"``."""
    badge = badge_for(status, only_modified)
    if badge is None:
        return ""
    return f"[{badge.text}]"


__all__ = ["Badge", "BADGES", "Color", "badge_for", "format_badge"]
