"""Per-VCS configuration records.

Everything that differs between Subversion, Git and Mercurial lives here: the
status column alphabet, the command-line client and its flags, the GUI tool
used for interactive actions and how folder badges are coarsened. The engine
itself never branches on :class:`VCSKind`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from vcsoverlay.kinds import StatusCode, VCSKind

# (status, token characters) pairs, checked in order; the first hit wins.
StatusTokens = Tuple[Tuple[StatusCode, str], ...]


@dataclass(frozen=True)
class VCSProfile:
    kind: VCSKind
    executable: str
    gui_tool: str
    status_tokens: StatusTokens
    file_query_flags: Tuple[str, ...]
    change_query_flags: Tuple[str, ...]
    coarse_folder_status: bool = False
    supports_push: bool = True
    update_command: str = "update"
    tortoise_style: bool = True

    def status_arguments(self, flags: Tuple[str, ...], target: str) -> List[str]:
        """Build the argument list for a ``status`` query on ``target``."""
        return ["status", *flags, target]

    def folder_status(self, status: StatusCode) -> StatusCode:
        """Map a file status to the badge its ancestor directories receive."""
        if status is StatusCode.DELETED:
            return StatusCode.MODIFIED
        if self.coarse_folder_status and status not in (StatusCode.NORMAL, StatusCode.CONFLICTED):
            return StatusCode.MODIFIED
        return status


SVN_PROFILE = VCSProfile(
    kind=VCSKind.SVN,
    executable="svn",
    gui_tool="TortoiseProc.exe",
    status_tokens=(
        (StatusCode.NORMAL, ""),
        (StatusCode.UNMANAGED, "?"),
        (StatusCode.MODIFIED, "MR~"),
        (StatusCode.ADDED, "A"),
        (StatusCode.CONFLICTED, "C"),
        (StatusCode.DELETED, "D!"),
    ),
    file_query_flags=("-v",),
    change_query_flags=(),
    supports_push=False,
)

GIT_PROFILE = VCSProfile(
    kind=VCSKind.GIT,
    executable="git",
    gui_tool="TortoiseGitProc.exe",
    # Unmerged entries carry a "U" next to other letters ("UA", "AU"), so
    # conflicts are checked before anything else.
    status_tokens=(
        (StatusCode.CONFLICTED, "U"),
        (StatusCode.NORMAL, ""),
        (StatusCode.UNMANAGED, "?"),
        (StatusCode.MODIFIED, "MRT"),
        (StatusCode.ADDED, "A"),
        (StatusCode.DELETED, "D"),
    ),
    file_query_flags=("--short", "--untracked-files=all"),
    change_query_flags=("--short", "--untracked-files=all"),
    coarse_folder_status=True,
    update_command="pull",
)

HG_PROFILE = VCSProfile(
    kind=VCSKind.HG,
    executable="hg",
    gui_tool="thg",
    # Mercurial reports clean files with "C", so that letter means NORMAL here.
    status_tokens=(
        (StatusCode.NORMAL, "C"),
        (StatusCode.UNMANAGED, "?"),
        (StatusCode.MODIFIED, "M"),
        (StatusCode.ADDED, "A"),
        (StatusCode.CONFLICTED, ""),
        (StatusCode.DELETED, "R!"),
    ),
    file_query_flags=("-A",),
    change_query_flags=(),
    tortoise_style=False,
)

PROFILES: Dict[VCSKind, VCSProfile] = {
    VCSKind.SVN: SVN_PROFILE,
    VCSKind.GIT: GIT_PROFILE,
    VCSKind.HG: HG_PROFILE,
}


def get_profile(
    kind: VCSKind,
    executables: Optional[Mapping[str, str]] = None,
    gui_tools: Optional[Mapping[str, str]] = None,
) -> VCSProfile:
    """Return the profile for ``kind`` with user executable overrides applied.

    ``executables`` and ``gui_tools`` are keyed by :attr:`VCSKind.value`, which
    is how they are stored in the configuration file.
    """
    profile = PROFILES[kind]
    overrides: Dict[str, str] = {}
    if executables and executables.get(kind.value):
        overrides["executable"] = executables[kind.value]
    if gui_tools and gui_tools.get(kind.value):
        overrides["gui_tool"] = gui_tools[kind.value]
    if overrides:
        profile = dataclasses.replace(profile, **overrides)
    return profile


__all__ = [
    "VCSProfile",
    "StatusTokens",
    "SVN_PROFILE",
    "GIT_PROFILE",
    "HG_PROFILE",
    "PROFILES",
    "get_profile",
]
