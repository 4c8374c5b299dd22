"""Remote API client."""

from .client import PushReport, push_dependency_files

__all__ = ["PushReport", "push_dependency_files"]
