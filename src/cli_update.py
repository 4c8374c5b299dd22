"""CLI entry point for the update command.

Looks up the strategy for the requested ecosystem, applies the update set and,
when the package manager fails, restores the snapshotted files unless asked
not to.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, List

from autoupdate.base import UpdateResult, restore_files
from autoupdate.registry import build_registry
from cli_config import Settings
from constants import ExitCodes
from depfiles.models import UpdateSet, VersionUpdate
from errors import (
    ExecutionError,
    RestoreError,
    StrategyNotFoundError,
    UnsatisfiableUpdateError,
    UpdateError,
)

logger = logging.getLogger(__name__)


def load_update_set(args: Any) -> UpdateSet:
    """Build the update set from ``-u`` tokens or a JSON list file.

    Raises:
        SystemExit: If the input cannot be read or parsed.
    """
    try:
        if getattr(args, "UPDATES", None):
            return [VersionUpdate.parse(token) for token in args.UPDATES]
        with open(args.UPDATES_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError("update list must be a JSON array")
        return [VersionUpdate.from_dict(item) for item in data]
    except OSError as e:
        logger.error("IO error: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except ValueError as e:
        logger.error("Invalid update set: %s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)


def export_result(result: UpdateResult, path: str) -> None:
    """Write the original and updated files to ``path`` as JSON."""
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(result.to_dict(), file, ensure_ascii=False, indent=4)
        logger.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logger.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _rollback(original: List, args: Any, code: ExitCodes) -> int:
    """Restore the snapshots and return the exit code for the failed update.

    A restore failure overrides ``code`` with ``RESTORE_ERROR`` since the
    working tree no longer matches either the old or the new versions.
    """
    if getattr(args, "NO_RESTORE", False):
        logger.warning("Leaving files as they are (--no-restore)")
        return code.value
    try:
        restore_files(original)
    except RestoreError as e:
        logger.error("%s", e)
        return ExitCodes.RESTORE_ERROR.value
    return code.value


def run_update(args: Any, settings: Settings) -> int:
    """Run the update command and return the exit code."""
    update_set = load_update_set(args)
    if not update_set:
        logger.warning("No version updates given.")
        return ExitCodes.SUCCESS.value

    registry = build_registry(settings)
    try:
        strategy = registry.get(args.ECOSYSTEM)
    except StrategyNotFoundError as e:
        logger.error("%s (known: %s)", e, ", ".join(registry.ecosystems()))
        return ExitCodes.CONFIG_ERROR.value

    try:
        result = strategy.apply(update_set)
    except UnsatisfiableUpdateError as e:
        logger.error("%s: the requested versions can't be installed together", e)
        return _rollback(e.result.original, args, ExitCodes.UNSATISFIABLE)
    except ExecutionError as e:
        logger.error("%s", e)
        return _rollback(e.result.original, args, ExitCodes.EXECUTION_ERROR)
    except UpdateError as e:
        logger.error("%s", e)
        return _rollback(e.result.original, args, ExitCodes.FILE_ERROR)
    except OSError as e:
        logger.error("Unable to read dependency file: %s", e)
        return ExitCodes.FILE_ERROR.value

    for dep_file in result.updated:
        logger.info("Updated %s (sha %s)", dep_file.path, dep_file.sha)
    if getattr(args, "OUTPUT", None):
        export_result(result, args.OUTPUT)
    return ExitCodes.SUCCESS.value
