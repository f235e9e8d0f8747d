"""Infrastructure: version resolution from repository tags.

The version of a module is the most recent tag of the git checkout it
lives in, provided that checkout is the module's own project: its
top-level ``pyproject.toml`` must declare the expected distribution
name.  A module installed into some other checkout (a site's
``.venv``, for example) therefore never reports that checkout's tag.
Otherwise the installed distribution's metadata is used, and finally
the version bundled with pubctl.

Rules
-----
* Never raises; version output must always print something.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import re
import subprocess
import tomllib
from importlib import metadata
from pathlib import Path

from pubctl.version import __version__

_GIT_TIMEOUT_SECONDS = 10
_NAME_SEPARATORS = re.compile(r"[-_.]+")


def _git(directory: Path, *args: str) -> str | None:
    """Run ``git`` in *directory*; return stripped stdout or ``None``."""
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=directory,
            capture_output=True,
            text=True,
            check=False,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.strip() or None


def _normalize(name: str) -> str:
    return _NAME_SEPARATORS.sub("-", name).lower()


def declares_distribution(root: Path, distribution: str) -> bool:
    """Return ``True`` when *root*'s ``pyproject.toml`` names *distribution*."""
    try:
        with (root / "pyproject.toml").open("rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError):
        return False
    name = data.get("project", {}).get("name")
    return isinstance(name, str) and _normalize(name) == _normalize(distribution)


def version_from_repo_tag(
    module_file: str | Path, distribution: str = "pubctl",
) -> str | None:
    """Return the latest tag of the checkout owning *module_file*.

    ``None`` when the module is outside a checkout, the checkout belongs
    to another project, or it has no tags.
    """
    directory = Path(str(module_file).removeprefix("file://")).resolve().parent
    if not directory.is_dir():
        return None
    toplevel = _git(directory, "rev-parse", "--show-toplevel")
    if toplevel is None or not declares_distribution(Path(toplevel), distribution):
        return None
    return _git(directory, "describe", "--tags", "--abbrev=0")


def version_from_distribution(distribution: str) -> str | None:
    """Return the installed version of *distribution*, if installed."""
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return None


def determine_version(module_file: str | Path, distribution: str = "pubctl") -> str:
    """Resolve the version of the code in *module_file*.

    Parameters
    ----------
    module_file:
        Path of a module belonging to the project, normally ``__file__``.
    distribution:
        Declared distribution name of that project.
    """
    return (
        version_from_repo_tag(module_file, distribution)
        or version_from_distribution(distribution)
        or __version__
    )
