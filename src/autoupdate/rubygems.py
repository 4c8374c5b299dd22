"""Bundler update strategy for Ruby projects."""

from __future__ import annotations

from typing import List

from autoupdate.base import UpdateStrategy, compile_pattern
from constants import Constants, Ecosystems

_UNSATISFIABLE = compile_pattern(r"^Bundler could not find compatible versions for gem")


class RubygemsStrategy(UpdateStrategy):
    """Runs ``bundle update <gems...>``, which rewrites Gemfile.lock."""

    @property
    def ecosystem(self) -> str:
        return Ecosystems.RUBYGEM.value

    @property
    def default_command(self) -> str:
        return Constants.BUNDLE_UPDATE_CMD

    @property
    def mutated_files(self) -> List[str]:
        return [Constants.GEMFILE_LOCK_FILE]

    @property
    def unsatisfiable_pattern(self):
        return _UNSATISFIABLE
