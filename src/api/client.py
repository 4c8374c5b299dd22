"""Client for the dependency-file endpoints of the remote API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from common.http_client import post_json
from constants import Constants
from depfiles.models import DependencyFile
from errors import ApiError, ConfigError

logger = logging.getLogger(__name__)


@dataclass
class PushReport:
    """How the API classified each uploaded file."""

    added: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    unsupported: List[str] = field(default_factory=list)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "PushReport":
        def paths(key: str) -> List[str]:
            return [entry.get("path", "") for entry in data.get(key) or [] if isinstance(entry, dict)]

        return cls(
            added=paths("added"),
            updated=paths("updated"),
            unchanged=paths("unchanged"),
            unsupported=paths("unsupported"),
        )


def push_dependency_files(project_slug: str, files: List[DependencyFile], settings) -> PushReport:
    """Upload ``files`` to the project's dependency files.

    Raises:
        ConfigError: If the project slug or API token is missing.
        ApiError: If the API answers with a non-2xx status or invalid JSON.
    """
    if not project_slug:
        raise ConfigError("A project slug is required to push dependency files")
    if not settings.api_token:
        raise ConfigError(
            f"An API token is required; set {Constants.ENV_API_TOKEN} or api_token in the config file"
        )

    url = f"{settings.api_url.rstrip('/')}/projects/{project_slug}/dependency_files"
    logger.info("Sending %d file(s) to %s", len(files), url)
    data = post_json(
        url,
        [f.to_dict() for f in files],
        context="push",
        auth=(Constants.API_USER, settings.api_token),
    )
    if not isinstance(data, dict):
        raise ApiError(None, f"expected a JSON object, got {type(data).__name__}")
    return PushReport.from_response(data)
