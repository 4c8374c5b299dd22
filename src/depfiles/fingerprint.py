"""Content fingerprints compatible with git blob object ids."""

from __future__ import annotations

import hashlib


def fingerprint_bytes(data: bytes) -> str:
    """Return the git blob SHA-1 of ``data``.

    The digest covers ``b"blob <len>\\0"`` followed by the content, so it
    equals ``git hash-object`` for the same bytes.
    """
    h = hashlib.sha1()
    h.update(b"blob %d\x00" % len(data))
    h.update(data)
    return h.hexdigest()


def fingerprint(path: str) -> str:
    """Read ``path`` and return its blob fingerprint.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, "rb") as f:
        return fingerprint_bytes(f.read())
