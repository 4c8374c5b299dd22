"""Apply unified diffs to dependency files with an external patch tool."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Optional, Union

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer
from depfiles.models import DependencyFile
from errors import ExecutionError, PatchError

logger = logging.getLogger(__name__)


def apply_patch(
    dep_file: DependencyFile,
    patch: Union[str, bytes],
    patch_command: Optional[str] = None,
) -> None:
    """Apply ``patch`` to ``dep_file.path`` and resync the file.

    The patch text is fed on stdin while stdout is drained by
    ``communicate()``, so a large patch cannot block on a full output pipe.
    With the default ``--forward`` flag an already applied patch is skipped
    by the tool, which exits non-zero and leaves the file untouched.

    Args:
        dep_file: File to patch; its ``content`` and ``sha`` are refreshed on success.
        patch: Unified diff; ``str`` is encoded as UTF-8, ``bytes`` are passed
            through unchanged so diffs of non-UTF-8 files apply as written.
        patch_command: Base command, the file path is appended to it.

    Raises:
        PatchError: If the patch tool exits with a non-zero status.
        ExecutionError: If the patch tool cannot be started.
        OSError: If the patched file cannot be read back.
    """
    parts = shlex.split(patch_command or Constants.PATCH_CMD)
    parts.append(dep_file.disk_path)
    command = " ".join(shlex.quote(p) for p in parts)

    with Timer() as t:
        try:
            proc = subprocess.Popen(  # noqa: S603
                parts,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            )
        except OSError as exc:
            raise ExecutionError(command, output=str(exc)) from exc
        data = patch.encode("utf-8") if isinstance(patch, str) else patch
        out, _ = proc.communicate(input=data)

    output = out.decode("utf-8", errors="replace")
    if is_debug_enabled(logger):
        logger.debug(
            "Patch tool finished",
            extra=extra_context(
                event="subprocess",
                component="patch",
                action="apply",
                outcome="success" if proc.returncode == 0 else "failure",
                returncode=proc.returncode,
                duration_ms=t.duration_ms(),
                target=dep_file.path,
            ),
        )

    if proc.returncode != 0:
        logger.error("%s", output.rstrip())
        raise PatchError(dep_file.path, output, proc.returncode)

    dep_file.resync()
    logger.info("Patched %s (sha %s)", dep_file.path, dep_file.sha)
