"""Exception types raised by lockstep.

File I/O failures are not wrapped: they surface as the built-in ``OSError``.
The CLI maps each type below to an exit code.
"""

from __future__ import annotations

from typing import Any, List, Optional


class LockstepError(Exception):
    """Base class for all lockstep errors."""


class IntegrityError(LockstepError):
    """A file's recomputed fingerprint differs from the stored one."""

    def __init__(self, path: str, expected: str, actual: str):
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{path}: File signature doesn't match (expected: {expected}, got: {actual})"
        )


class UpdateError(LockstepError):
    """An update strategy failed.

    ``result`` holds the snapshots taken before the failure; its ``updated``
    list is always empty, so ``result.original`` can be restored safely.
    """

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result


class UnsatisfiableUpdateError(UpdateError):
    """The package manager reported that no compatible version set exists."""

    def __init__(self, ecosystem: str, output: str, result: Any = None):
        self.ecosystem = ecosystem
        self.output = output
        super().__init__(f"Can't update versions ({ecosystem})", result)


class ExecutionError(UpdateError):
    """An external command could not be run or failed for another reason."""

    def __init__(
        self,
        command: str,
        output: str = "",
        returncode: Optional[int] = None,
        result: Any = None,
    ):
        self.command = command
        self.output = output
        self.returncode = returncode
        if returncode is None:
            message = f"Unable to execute command: {command}"
        else:
            message = f"Command failed with exit status {returncode}: {command}"
        super().__init__(message, result)


class StrategyNotFoundError(LockstepError):
    """No update strategy is registered for the requested ecosystem."""

    def __init__(self, ecosystem: str):
        self.ecosystem = ecosystem
        super().__init__(f"Can't find updater for package type: {ecosystem}")


class PatchError(LockstepError):
    """The patch tool exited with a non-zero status."""

    def __init__(self, path: str, output: str, returncode: int):
        self.path = path
        self.output = output
        self.returncode = returncode
        super().__init__(f"Unable to patch {path} (exit status {returncode})")


class FileLoadError(LockstepError):
    """An explicitly requested dependency file could not be read."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Unable to read file: {path}")


class ConfigError(LockstepError):
    """Configuration is missing or malformed."""


class ApiError(LockstepError):
    """The remote API answered with an unexpected status."""

    def __init__(self, status_code: Optional[int], body: str):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(f"Unexpected API response: {body}")
        else:
            super().__init__(f"API request failed with status {status_code}: {body}")


class RestoreError(LockstepError):
    """A snapshot could not be written back; the tree is partially restored."""

    def __init__(self, path: str, restored: List[str], pending: List[str], reason: str):
        self.path = path
        self.restored = restored
        self.pending = pending
        super().__init__(
            f"Unable to restore {path}: {reason}; working tree may be partially restored "
            f"(restored: {', '.join(restored) or 'none'}; not restored: {', '.join(pending)})"
        )
