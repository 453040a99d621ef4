"""Enumerations for the supported version-control back ends and path states."""

from __future__ import annotations

from enum import Enum


class VCSKind(Enum):
    SVN = "svn"
    GIT = "git"
    HG = "hg"

    @property
    def label(self) -> str:
        if self is VCSKind.SVN:
            return "Subversion"
        elif self is VCSKind.GIT:
            return "Git"
        else:
            return "Mercurial"

    @classmethod
    def from_name(cls, name: str) -> "VCSKind":
        """Look up a kind by its value, ignoring case (``"Git"`` -> ``GIT``)."""
        normalized = name.strip().lower()
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise ValueError(f"Unknown VCS kind: {name!r}")


class StatusCode(Enum):
    """State of a single path as reported by the VCS client."""

    NORMAL = "normal"
    UNMANAGED = "unmanaged"
    MODIFIED = "modified"
    ADDED = "added"
    CONFLICTED = "conflicted"
    DELETED = "deleted"

    @property
    def label(self) -> str:
        return self.value.capitalize()


ALL_KINDS = [VCSKind.SVN, VCSKind.GIT, VCSKind.HG]


__all__ = ["VCSKind", "StatusCode", "ALL_KINDS"]
