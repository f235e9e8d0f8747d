"""Hook discovery: expand a glob pattern under the project home.

Rules
-----
* Only regular files are yielded; directories (and symlinks to
  directories) are skipped.
* Results follow filesystem traversal order; callers must not assume
  lexical order.
* A root that is not a directory raises
  :class:`~pubctl.exceptions.ContextError`; the error reaches the
  dispatcher boundary.  Unreadable subdirectories are skipped.
"""

from __future__ import annotations

import glob
import os
from collections.abc import Iterator
from pathlib import Path

from pubctl.exceptions import ContextError

DEFAULT_HOOK_GLOB: str = "**/*/pubctl_hook_build.py"


def locate_hook_modules(pattern: str, root: Path) -> Iterator[Path]:
    """Lazily yield absolute paths of files under *root* matching *pattern*.

    ``**`` matches any number of directories.  An absolute *pattern* is
    expanded as-is.  Each call re-scans the filesystem; no match simply
    yields nothing.

    Raises
    ------
    ContextError
        When *root* does not exist or is not a directory.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise ContextError(
            f"Project home {root} is not a directory",
            hint="Check --project or the controller's project_home.",
        )
    for match in glob.iglob(pattern, root_dir=root, recursive=True):
        candidate = root / match
        if candidate.is_file():
            yield candidate


def relative_hook_name(path: Path, root: Path) -> str:
    """Return *path* relative to *root* with POSIX separators."""
    return Path(os.path.relpath(path, Path(root).resolve())).as_posix()
