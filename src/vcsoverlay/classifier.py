"""Turn one line of VCS status output into a :class:`StatusCode`."""

from __future__ import annotations

from typing import Union

from vcsoverlay.kinds import StatusCode, VCSKind
from vcsoverlay.profiles import PROFILES, VCSProfile

# Status clients print a one- or two-letter column before the path.
STATUS_COLUMN_WIDTH = 2


def classify(raw_line: str, kind: Union[VCSKind, VCSProfile]) -> StatusCode:
    """Return the status encoded in the leading column of ``raw_line``.

    Only the first two characters after leading whitespace are inspected. The
    profile's token table is walked in order and the first status owning a
    character of that column wins; anything unrecognised is ``NORMAL``.
    """
    profile = kind if isinstance(kind, VCSProfile) else PROFILES[kind]
    column = raw_line.lstrip()[:STATUS_COLUMN_WIDTH]
    if not column:
        return StatusCode.NORMAL
    for status, tokens in profile.status_tokens:
        if any(token in column for token in tokens):
            return status
    return StatusCode.NORMAL


__all__ = ["classify", "STATUS_COLUMN_WIDTH"]
