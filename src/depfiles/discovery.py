"""Locate supported dependency files on disk."""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from typing import Iterable, List, Optional

from constants import Constants
from depfiles.models import DependencyFile
from errors import FileLoadError

logger = logging.getLogger(__name__)

_SUPPORTED = re.compile(Constants.SUPPORTED_DEPENDENCY_FILES)


def is_supported(name: str) -> bool:
    """Return True if a file base name is a known manifest or lockfile."""
    return _SUPPORTED.match(os.path.basename(name)) is not None


def _is_ignored(name: str, ignored_paths: Iterable[str]) -> bool:
    for pattern in ignored_paths:
        if fnmatch.fnmatch(name, os.path.normpath(pattern)):
            return True
    return False


def scan_dependency_files(
    root: str = ".",
    ignored_paths: Optional[Iterable[str]] = None,
) -> List[DependencyFile]:
    """Walk ``root`` and snapshot every supported dependency file.

    ``.git`` is never entered. Any directory or file whose name matches one of
    ``ignored_paths`` (glob patterns) is skipped.

    Returns:
        Files in walk order, sorted by name within each directory, with
        paths relative to ``root``.
    """
    ignored = list(ignored_paths or [])
    found: List[DependencyFile] = []

    for dirpath, dirnames, filenames in os.walk(root):
        kept = []
        for d in sorted(dirnames):
            if d == ".git":
                continue
            if _is_ignored(d, ignored):
                logger.info("Skipping %s", d)
                continue
            kept.append(d)
        dirnames[:] = kept

        for name in sorted(filenames):
            if _is_ignored(name, ignored):
                logger.info("Skipping %s", name)
                continue
            if not is_supported(name):
                continue
            path = os.path.relpath(os.path.join(dirpath, name), root)
            logger.info("Found: %s", path)
            found.append(DependencyFile.from_path(path, root=root))

    return found


def lookup_dependency_files(
    paths: Optional[List[str]] = None,
    root: str = ".",
    ignored_paths: Optional[Iterable[str]] = None,
) -> List[DependencyFile]:
    """Load the given files, or scan ``root`` when none are given.

    Raises:
        FileLoadError: If an explicitly named file cannot be read.
    """
    if paths:
        files = []
        for path in paths:
            try:
                files.append(DependencyFile.from_path(path))
            except OSError as exc:
                raise FileLoadError(path) from exc
        return files

    logger.warning("No files given, scanning %s instead.", os.path.abspath(root))
    return scan_dependency_files(root, ignored_paths)
