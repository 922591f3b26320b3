"""Text file enumeration for property checks."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Collection, Iterator, List, Set

TEXT_EXTENSIONS: tuple[str, ...] = (
    "java",
    "txt",
    "xsl",
    "xml",
    "html",
    "php",
    "py",
    "groovy",
    "ini",
    "properties",
)


def _iter_files(root: Path) -> Iterator[Path]:
    # Symlinked directories are followed; each real directory is walked once.
    visited: Set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in visited:
            dirnames[:] = []
            continue
        visited.add(real)
        current_dir = Path(dirpath)
        for filename in filenames:
            yield current_dir / filename


def _has_extension(path: Path, extensions: Collection[str]) -> bool:
    # Case-sensitive name suffix, so ".properties" matches and "README.TXT" does not.
    name = path.name
    return any(name.endswith(f".{extension}") for extension in extensions)


def list_text_files(
    basedir: Path, extensions: Collection[str] = TEXT_EXTENSIONS
) -> List[Path]:
    """Return every file under ``basedir`` with an allowed extension.

    The result is sorted by POSIX path so the first reported failure is stable
    from run to run.
    """
    root = Path(basedir)
    if not root.exists():
        raise FileNotFoundError(f"Project path not found: {basedir}")
    if not root.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {basedir}")

    allowed = tuple(extensions)
    files = [
        path
        for path in _iter_files(root)
        if path.is_file() and _has_extension(path, allowed)
    ]
    return sorted(files, key=lambda path: path.as_posix())


__all__ = ["TEXT_EXTENSIONS", "list_text_files"]
