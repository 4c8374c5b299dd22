"""Data models for dependency files and version updates."""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

from depfiles.fingerprint import fingerprint, fingerprint_bytes
from errors import IntegrityError


@dataclass
class DependencyFile:
    """A manifest or lockfile identified by its path.

    ``path`` is relative to ``root`` (the project directory), which is the
    form reported to the API. ``sha`` and ``content`` describe the bytes as
    last read from disk.
    """

    path: str
    sha: str
    content: bytes
    root: str = field(default=".", compare=False, repr=False)

    @property
    def disk_path(self) -> str:
        """Location of the file for reads and writes."""
        return os.path.join(self.root, self.path)

    @classmethod
    def from_path(cls, path: str, root: str = ".") -> "DependencyFile":
        """Read ``path`` (relative to ``root``) and build a snapshot of it.

        Raises:
            OSError: If the file cannot be read.
        """
        with open(os.path.join(root, path), "rb") as f:
            content = f.read()
        return cls(path=path, sha=fingerprint_bytes(content), content=content, root=root)

    def verify_integrity(self) -> None:
        """Recompute the on-disk fingerprint and compare it to ``sha``.

        Raises:
            IntegrityError: If the file changed since it was last read.
            OSError: If the file cannot be read.
        """
        actual = fingerprint(self.disk_path)
        if actual != self.sha:
            raise IntegrityError(self.path, self.sha, actual)

    def resync(self) -> None:
        """Reload content and fingerprint after an external mutation.

        Both fields are derived from a single read and assigned together; on
        a read error neither is touched.
        """
        with open(self.disk_path, "rb") as f:
            content = f.read()
        sha = fingerprint_bytes(content)
        self.content, self.sha = content, sha

    def restore(self) -> None:
        """Write the snapshot content back to disk."""
        with open(self.disk_path, "wb") as f:
            f.write(self.content)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form; content is base64 encoded."""
        return {
            "path": self.path,
            "sha": self.sha,
            "content": base64.b64encode(self.content).decode("ascii"),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DependencyFile":
        content = data.get("content") or ""
        return cls(
            path=data.get("path", ""),
            sha=data.get("sha", ""),
            content=base64.b64decode(content) if content else b"",
        )


@dataclass(frozen=True)
class VersionUpdate:
    """A requested version change for one package."""

    package: str
    old_version: str
    target_version: str

    @classmethod
    def parse(cls, token: str) -> "VersionUpdate":
        """Parse ``name:old:target``.

        Raises:
            ValueError: If the token does not have three non-empty parts.
        """
        parts = token.split(":")
        if len(parts) != 3 or not all(p.strip() for p in parts):
            raise ValueError(f"Invalid version update '{token}', expected name:old:target")
        name, old, target = (p.strip() for p in parts)
        return cls(package=name, old_version=old, target_version=target)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VersionUpdate":
        # Accept both the flat form and the API's nested package object
        package = data.get("package")
        if isinstance(package, dict):
            package = package.get("name")
        if not package:
            raise ValueError(f"Version update without a package name: {data!r}")
        return cls(
            package=str(package),
            old_version=str(data.get("old_version", "")),
            target_version=str(data.get("target_version", "")),
        )


UpdateSet = List[VersionUpdate]
