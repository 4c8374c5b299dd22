"""Lookup of update strategies by ecosystem identifier."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type

from autoupdate.base import UpdateStrategy
from autoupdate.npm import NpmStrategy
from autoupdate.rubygems import RubygemsStrategy
from constants import Ecosystems
from errors import StrategyNotFoundError

logger = logging.getLogger(__name__)

STRATEGY_CLASSES: Dict[str, Type[UpdateStrategy]] = {
    Ecosystems.RUBYGEM.value: RubygemsStrategy,
    Ecosystems.NPM.value: NpmStrategy,
}


class StrategyRegistry:
    """Mapping of ecosystem identifier to a configured strategy instance."""

    def __init__(self, strategies: Optional[List[UpdateStrategy]] = None):
        self._strategies: Dict[str, UpdateStrategy] = {}
        for strategy in strategies or []:
            self.register(strategy)

    def register(self, strategy: UpdateStrategy) -> None:
        self._strategies[strategy.ecosystem] = strategy

    def get(self, ecosystem: str) -> UpdateStrategy:
        """Return the strategy for ``ecosystem``.

        Raises:
            StrategyNotFoundError: If nothing is registered under that name.
        """
        try:
            return self._strategies[ecosystem]
        except KeyError:
            raise StrategyNotFoundError(ecosystem) from None

    def ecosystems(self) -> List[str]:
        return sorted(self._strategies)


def build_registry(settings, project_dir: Optional[str] = None) -> StrategyRegistry:
    """Instantiate every known strategy with its configured update command.

    Args:
        settings: Loaded ``cli_config.Settings``.
        project_dir: Working directory for the commands; defaults to
            ``settings.project_dir``.
    """
    workdir = project_dir or settings.project_dir
    registry = StrategyRegistry()
    for ecosystem, cls in STRATEGY_CLASSES.items():
        command = settings.update_commands.get(ecosystem)
        registry.register(cls(update_command=command, project_dir=workdir))
    logger.debug("Registered update strategies: %s", ", ".join(registry.ecosystems()))
    return registry
