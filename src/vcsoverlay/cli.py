"""Command-line entry point for vcs-overlay.

The command runs one refresh against a project and prints the badge each
path would get in the browser overlay. It is handy for checking a VCS
configuration without starting the host application:

1. Read the saved settings (writing defaults on first run) and apply any
   command-line overrides.
2. Check that the project directory exists.
3. Refresh the whole project once.
4. Print ``badge  status  path`` lines, or log crash information.
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from vcsoverlay import __version__
from vcsoverlay.badges import format_badge
from vcsoverlay.config import ConfigError, create_default_config, get_overlay_settings
from vcsoverlay.engine import StatusEngine, StatusEngineError
from vcsoverlay.kinds import ALL_KINDS, StatusCode, VCSKind
from vcsoverlay.process import ProcessInvoker
from vcsoverlay.profiles import get_profile

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Crash dump file location
CRASH_LOG_FILE = Path.home() / "vcsoverlay.crash.txt"

logger = logging.getLogger(__name__)


def validate_directory(path: Path) -> Path:
    """Return ``path`` resolved, or the current directory when it is unusable.

    A typo in ``--project`` should not abort the listing; we warn and fall
    back to ``Path.cwd()`` instead.
    """
    try:
        resolved = path.resolve()
        if not resolved.exists():
            print(f"Warning: project directory does not exist: {path}", file=sys.stderr)
            print("   Using current directory instead", file=sys.stderr)
            return Path.cwd()
        if not resolved.is_dir():
            print(f"Warning: project path is not a directory: {path}", file=sys.stderr)
            print("   Using current directory instead", file=sys.stderr)
            return Path.cwd()
        return resolved
    except (OSError, RuntimeError) as e:
        print(f"Warning: cannot access project directory: {path}", file=sys.stderr)
        print(f"   Error: {e}", file=sys.stderr)
        print("   Using current directory instead", file=sys.stderr)
        return Path.cwd()


def write_crash_log(exception: BaseException) -> None:
    """Append a detailed crash report to :data:`CRASH_LOG_FILE`."""
    try:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        crash_info = f"""
================================================================================
vcs-overlay Crash Report
================================================================================
Timestamp: {timestamp}
Version: {__version__}
Python: {sys.version}
Platform: {sys.platform}

Exception Type: {type(exception).__name__}
Exception Message: {str(exception)}

Traceback:
{traceback.format_exc()}
================================================================================
"""
        with open(CRASH_LOG_FILE, "a") as f:
            f.write(crash_info)

        print("\n❌ vcs-overlay crashed unexpectedly!", file=sys.stderr)
        print(f"   Crash details saved to: {CRASH_LOG_FILE}", file=sys.stderr)
    except OSError:
        # If we can't even write the crash log, just print to stderr
        print("\n❌ vcs-overlay crashed and could not write crash log!", file=sys.stderr)
        traceback.print_exc()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Turn the command line into structured options.

    Options left unset fall back to the saved configuration.
    """
    parser = argparse.ArgumentParser(
        description="Show version-control status badges for project paths."
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version number and exit.",
    )
    parser.add_argument(
        "--project",
        default=".",
        help="Project directory that contains the root marker (default: current directory).",
    )
    parser.add_argument(
        "--kind",
        choices=[kind.value for kind in ALL_KINDS],
        default=None,
        help="VCS kind (default: from configuration).",
    )
    parser.add_argument(
        "--root-marker",
        default=None,
        help="Name of the tracked root directory (default: from configuration).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the VCS client (default: from configuration).",
    )
    parser.add_argument(
        "--only-modified",
        action="store_true",
        help="Hide paths without changes.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log client invocations.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Project-relative paths to report (default: every path the client listed).",
    )
    return parser.parse_args(argv)


def _format_line(path: str, status: Optional[StatusCode], only_modified: bool) -> Optional[str]:
    badge = format_badge(status, only_modified)
    if not badge:
        return None
    label = status.label if status is not None else "-"
    return f"{badge:<5} {label:<11} {path}"


def main(argv: Optional[Sequence[str]] = None, invoker: Optional[ProcessInvoker] = None) -> int:
    """Refresh once and print the badge for each requested path."""
    try:
        args = parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format=LOG_FORMAT,
        )

        create_default_config()
        settings = get_overlay_settings()
        kind = VCSKind.from_name(args.kind) if args.kind else settings.vcs_kind
        root_marker = args.root_marker or settings.root_marker
        timeout = args.timeout if args.timeout is not None else settings.timeout
        only_modified = args.only_modified or settings.only_modified

        project = validate_directory(Path(args.project).expanduser())
        engine = StatusEngine(
            project,
            get_profile(kind, settings.executables, settings.gui_tools),
            root_marker=root_marker,
            invoker=invoker,
            timeout=timeout,
        )

        if not engine.refresh_root():
            print(
                f"No {kind.label} status available for {project / root_marker}.",
                file=sys.stderr,
            )
            return 1

        lines: List[str] = []
        if args.paths:
            for path in args.paths:
                line = _format_line(path, engine.status_of(path), only_modified)
                if line is not None:
                    lines.append(line)
        else:
            for path, status in engine.snapshot().items():
                line = _format_line(path, status, only_modified)
                if line is not None:
                    lines.append(line)

        for line in lines:
            print(line)
        return 0

    except (ConfigError, StatusEngineError) as err:
        print(f"Could not read status: {err}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        # Unexpected exception - log it and exit
        write_crash_log(e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
