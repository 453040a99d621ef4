"""Run external VCS clients without letting failures escape."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ProcessOutcome(Enum):
    OK = "ok"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    LAUNCH_FAILED = "launch_failed"


@dataclass(frozen=True)
class ProcessResult:
    outcome: ProcessOutcome
    stdout: str = ""
    returncode: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is ProcessOutcome.OK


class ProcessInvoker:
    """Spawn command-line tools and report how they ended.

    Every call returns a :class:`ProcessResult`; missing executables, timeouts
    and OS errors are reported through :attr:`ProcessResult.outcome` rather
    than raised. Tests replace this class with a fake exposing the same two
    methods.
    """

    def __init__(self) -> None:
        # Tools started with ``wait=False``, reaped by :meth:`reap_detached`.
        self._detached: List[subprocess.Popen] = []

    def run(
        self,
        executable: str,
        arguments: Sequence[str],
        cwd: Path,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> ProcessResult:
        """Run ``executable`` to completion and capture all of its stdout.

        stderr goes to ``DEVNULL``: a full, undrained stderr pipe blocks some
        clients forever.
        """
        command = [executable, *arguments]
        logger.debug("Running %s in %s", command, cwd)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return ProcessResult(ProcessOutcome.TIMED_OUT, error=f"{executable} timed out after {timeout}s")
        except (OSError, ValueError, subprocess.SubprocessError) as err:
            return ProcessResult(ProcessOutcome.LAUNCH_FAILED, error=f"{executable}: {err}")

        if completed.returncode != 0:
            return ProcessResult(
                ProcessOutcome.FAILED,
                stdout=completed.stdout or "",
                returncode=completed.returncode,
                error=f"{executable} exited with status {completed.returncode}",
            )
        return ProcessResult(ProcessOutcome.OK, stdout=completed.stdout or "", returncode=0)

    def launch(self, argv: Sequence[str], cwd: Path, wait: bool = True) -> ProcessResult:
        """Start an interactive tool, optionally waiting for it to close."""
        logger.debug("Launching %s in %s (wait=%s)", list(argv), cwd, wait)
        self.reap_detached()
        try:
            process = subprocess.Popen(list(argv), cwd=str(cwd))
        except (OSError, ValueError, subprocess.SubprocessError) as err:
            return ProcessResult(ProcessOutcome.LAUNCH_FAILED, error=f"{argv[0] if argv else '?'}: {err}")
        if not wait:
            self._detached.append(process)
            return ProcessResult(ProcessOutcome.OK)
        returncode = process.wait()
        if returncode != 0:
            return ProcessResult(
                ProcessOutcome.FAILED,
                returncode=returncode,
                error=f"{argv[0]} exited with status {returncode}",
            )
        return ProcessResult(ProcessOutcome.OK, returncode=0)

    def reap_detached(self) -> int:
        """Collect background tools that have exited; return how many still run."""
        self._detached = [process for process in self._detached if process.poll() is None]
        return len(self._detached)


__all__ = ["ProcessInvoker", "ProcessResult", "ProcessOutcome", "DEFAULT_TIMEOUT"]
