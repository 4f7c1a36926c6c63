from __future__ import annotations

import datetime as dt
import subprocess
from pathlib import Path
from typing import Callable

from .utils import timestamp_date, utc_today


class CommitDateError(Exception):
    pass


class GitUnavailable(CommitDateError):
    """git could not answer: not installed, not a repository, or it failed."""


class CommitDateNotFound(CommitDateError):
    """git ran but reported no commit touching the path."""


CommitDateLookup = Callable[[Path, str], str]


def git_last_commit_date(repo_dir: Path, name: str) -> str:
    """Committer date (YYYY-MM-DD) of the latest commit touching ``name``."""
    try:
        proc = subprocess.run(
            ["git", "log", "-1", "--format=%cs", "--", name],
            cwd=repo_dir,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise GitUnavailable(str(exc)) from exc
    if proc.returncode != 0:
        raise GitUnavailable(proc.stderr.strip() or f"git exited with {proc.returncode}")
    lines = proc.stdout.strip().splitlines()
    if not lines:
        raise CommitDateNotFound(name)
    value = lines[0].strip()
    try:
        dt.date.fromisoformat(value)
    except ValueError as exc:
        raise CommitDateNotFound(f"{name}: unexpected git date {value!r}") from exc
    return value


def file_mtime_date(path: Path) -> str:
    return timestamp_date(path.stat().st_mtime)


def resolve_date(
    repo_dir: Path,
    name: str,
    commit_date: CommitDateLookup = git_last_commit_date,
) -> str:
    """Best-effort last-modified date for ``name`` inside ``repo_dir``.

    Prefers the last commit date, then the file's modification time, and
    finally today's date when the file does not exist. Never raises.
    """
    try:
        return commit_date(repo_dir, name)
    except CommitDateError:
        pass
    try:
        return file_mtime_date(repo_dir / name)
    except OSError:
        return utc_today()
