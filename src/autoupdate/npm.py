"""npm update strategy for JavaScript projects."""

from __future__ import annotations

from typing import List

from autoupdate.base import UpdateStrategy, compile_pattern
from constants import Constants, Ecosystems

# npm 6 prints "npm ERR! code ERESOLVE", npm 10 "npm error code ERESOLVE"
_UNSATISFIABLE = compile_pattern(r"^npm (ERR!|error) code ERESOLVE")


class NpmStrategy(UpdateStrategy):
    """Runs ``npm update <packages...>``, which rewrites package-lock.json."""

    @property
    def ecosystem(self) -> str:
        return Ecosystems.NPM.value

    @property
    def default_command(self) -> str:
        return Constants.NPM_UPDATE_CMD

    @property
    def mutated_files(self) -> List[str]:
        return [Constants.PACKAGE_LOCK_FILE]

    @property
    def unsatisfiable_pattern(self):
        return _UNSATISFIABLE
