"""Shared fixtures for the vcs-overlay tests."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Deque, List, Optional, Sequence, Tuple, Union

import pytest

from vcsoverlay.process import ProcessOutcome, ProcessResult


class FakeInvoker:
    """Stand-in for :class:`vcsoverlay.process.ProcessInvoker`.

    ``run`` answers from a queue of canned results (plain strings are treated
    as successful output); an empty queue yields empty successful output.
    """

    def __init__(self) -> None:
        self.results: Deque[Union[str, ProcessResult]] = deque()
        self.calls: List[Tuple[str, List[str], Path]] = []
        self.launches: List[Tuple[List[str], bool]] = []
        self.launch_result = ProcessResult(ProcessOutcome.OK, returncode=0)

    def queue(self, *results: Union[str, ProcessResult]) -> None:
        self.results.extend(results)

    def run(
        self,
        executable: str,
        arguments: Sequence[str],
        cwd: Path,
        timeout: Optional[float] = None,
    ) -> ProcessResult:
        self.calls.append((executable, list(arguments), cwd))
        result = self.results.popleft() if self.results else ""
        if isinstance(result, str):
            return ProcessResult(ProcessOutcome.OK, stdout=result, returncode=0)
        return result

    def launch(self, argv: Sequence[str], cwd: Path, wait: bool = True) -> ProcessResult:
        self.launches.append((list(argv), wait))
        return self.launch_result


@pytest.fixture
def invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project directory with an empty ``Assets`` root."""
    (tmp_path / "Assets").mkdir()
    return tmp_path


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the configuration module at a throwaway file."""
    from vcsoverlay import config

    path = tmp_path / "vcsoverlay.toml"
    monkeypatch.setattr(config, "CONFIG_FILE", path)
    return path
