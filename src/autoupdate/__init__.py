"""Update strategies for dependency files."""

from .base import UpdateResult, UpdateStrategy, restore_files
from .npm import NpmStrategy
from .rubygems import RubygemsStrategy
from .registry import StrategyRegistry, build_registry

__all__ = [
    "UpdateResult",
    "UpdateStrategy",
    "restore_files",
    "NpmStrategy",
    "RubygemsStrategy",
    "StrategyRegistry",
    "build_registry",
]
