"""Dependency file snapshots, fingerprints, discovery and patching."""

from .fingerprint import fingerprint, fingerprint_bytes
from .models import DependencyFile, VersionUpdate, UpdateSet
from .patch import apply_patch
from .discovery import lookup_dependency_files, scan_dependency_files

__all__ = [
    "fingerprint",
    "fingerprint_bytes",
    "DependencyFile",
    "VersionUpdate",
    "UpdateSet",
    "apply_patch",
    "lookup_dependency_files",
    "scan_dependency_files",
]
