"""Base class for per-ecosystem update strategies.

A strategy applies an update set by running the ecosystem's package manager
inside the project directory. Every file the command may rewrite is
snapshotted into ``UpdateResult.original`` before the command starts, so a
caller can always restore the working tree from it.
"""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from common.logging_utils import extra_context, is_debug_enabled, Timer
from depfiles.models import DependencyFile, UpdateSet
from errors import ExecutionError, RestoreError, UnsatisfiableUpdateError, UpdateError

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    """Snapshots taken around one strategy run.

    ``original`` holds pre-update content for restoration, ``updated`` the
    files as rewritten by the package manager.
    """

    original: List[DependencyFile] = field(default_factory=list)
    updated: List[DependencyFile] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": [f.to_dict() for f in self.original],
            "updated": [f.to_dict() for f in self.updated],
        }


def restore_files(files: List[DependencyFile]) -> None:
    """Write each snapshot back to disk, in order.

    Raises:
        RestoreError: On the first snapshot that cannot be written; it lists
            which files were already restored and which were not.
    """
    for i, dep_file in enumerate(files):
        logger.info("Restoring %s", dep_file.path)
        try:
            dep_file.restore()
        except OSError as exc:
            raise RestoreError(
                dep_file.path,
                restored=[f.path for f in files[:i]],
                pending=[f.path for f in files[i:]],
                reason=str(exc),
            ) from exc


class UpdateStrategy(ABC):
    """Applies an update set through an external package manager."""

    def __init__(self, update_command: Optional[str] = None, project_dir: str = "."):
        self.update_command = update_command or self.default_command
        self.project_dir = project_dir

    @property
    @abstractmethod
    def ecosystem(self) -> str:
        """Ecosystem identifier this strategy is registered under."""

    @property
    @abstractmethod
    def default_command(self) -> str:
        """Base update command used when none is configured."""

    @property
    @abstractmethod
    def mutated_files(self) -> List[str]:
        """Files, relative to the project directory, rewritten by the command."""

    @property
    @abstractmethod
    def unsatisfiable_pattern(self) -> re.Pattern[str]:
        """Matches output reporting that no compatible version set exists."""

    def build_command(self, update_set: UpdateSet) -> List[str]:
        """Base command followed by one argument per package, in order."""
        parts = shlex.split(self.update_command)
        for vu in update_set:
            parts.append(vu.package)
        return parts

    def is_unsatisfiable(self, output: str) -> bool:
        return self.unsatisfiable_pattern.search(output) is not None

    def apply(self, update_set: UpdateSet) -> UpdateResult:
        """Run the update command for ``update_set``.

        Returns:
            UpdateResult with one original and one updated entry per file the
            command actually changed.

        Raises:
            OSError: If a file cannot be snapshotted (nothing has run yet).
            UnsatisfiableUpdateError: If the package manager reports conflicting
                version constraints.
            ExecutionError: If the command is missing or fails otherwise.
            UpdateError: If a rewritten file cannot be read back.
        """
        result = UpdateResult()
        tracked: List[DependencyFile] = []
        for name in self.mutated_files:
            snapshot = DependencyFile.from_path(name, root=self.project_dir)
            result.original.append(snapshot)
            tracked.append(replace(snapshot))

        for vu in update_set:
            logger.info(
                "Updating dependency %s (%s => %s)",
                vu.package,
                vu.old_version,
                vu.target_version,
            )
        parts = self.build_command(update_set)
        command = " ".join(shlex.quote(p) for p in parts)
        logger.info("Executing update command: %s", command)

        output = self._execute(parts, command, result)

        updated: List[DependencyFile] = []
        for before, dep_file in zip(result.original, tracked):
            try:
                dep_file.resync()
            except OSError as exc:
                raise UpdateError(
                    f"Unable to read {dep_file.path} after update: {exc}", result=result
                ) from exc
            if dep_file.sha == before.sha:
                logger.info("%s unchanged by update", dep_file.path)
                continue
            updated.append(dep_file)

        result.updated.extend(updated)
        if is_debug_enabled(logger):
            logger.debug(
                "Update finished",
                extra=extra_context(
                    event="update",
                    component="autoupdate",
                    action=self.ecosystem,
                    outcome="success",
                    updated_count=len(result.updated),
                    output_bytes=len(output),
                ),
            )
        return result

    def _execute(self, parts: List[str], command: str, result: UpdateResult) -> str:
        with Timer() as t:
            try:
                proc = subprocess.run(  # noqa: S603
                    parts,
                    cwd=self.project_dir,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    check=False,
                )
            except OSError as exc:
                raise ExecutionError(command, output=str(exc), result=result) from exc

        output = proc.stdout.decode("utf-8", errors="replace")
        if is_debug_enabled(logger):
            logger.debug(
                "Update command exited",
                extra=extra_context(
                    event="subprocess",
                    component="autoupdate",
                    action=self.ecosystem,
                    returncode=proc.returncode,
                    duration_ms=t.duration_ms(),
                ),
            )

        if proc.returncode != 0:
            if self.is_unsatisfiable(output):
                logger.warning("%s: no compatible version set for this update", self.ecosystem)
                raise UnsatisfiableUpdateError(self.ecosystem, output, result=result)
            logger.error("%s", output.rstrip())
            raise ExecutionError(command, output=output, returncode=proc.returncode, result=result)
        return output


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile an output classifier; ``^`` anchors at every line."""
    return re.compile(pattern, re.MULTILINE)
