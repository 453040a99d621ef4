"""Public interface for the VCS status overlay."""

__version__ = "0.1.0"

from .engine import StatusEngine, StatusEngineError
from .kinds import StatusCode, VCSKind
from .overlay import StatusOverlay

__all__ = [
    "StatusEngine",
    "StatusEngineError",
    "StatusCode",
    "StatusOverlay",
    "VCSKind",
    "__version__",
]
