# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Content digests used to derive a lookup resource from file bytes."""

from __future__ import annotations

import hashlib
import os

SUPPORTED_ALGORITHMS = ("sha256", "sha1", "md5")
DEFAULT_ALGORITHM = "sha256"
DEFAULT_BLOCK_SIZE = 64 * 1024


def _new_hash(algorithm: str):
    name = str(algorithm or "").strip().lower()
    if name not in SUPPORTED_ALGORITHMS:
        raise ValueError(f"Unsupported digest algorithm: {algorithm!r}")
    return hashlib.new(name)


def hexdigest(data: bytes | bytearray | memoryview, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Return the lowercase hex digest of ``data`` (SHA-256 unless told otherwise)."""
    hasher = _new_hash(algorithm)
    hasher.update(bytes(data))
    return hasher.hexdigest()


def sha256_hexdigest(data: bytes | bytearray | memoryview) -> str:
    return hexdigest(data, "sha256")


def file_hexdigest(
    path: str | os.PathLike[str],
    algorithm: str = DEFAULT_ALGORITHM,
    *,
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> str:
    """Hash a file incrementally; I/O errors propagate to the caller."""
    hasher = _new_hash(algorithm)
    if block_size <= 0:
        block_size = DEFAULT_BLOCK_SIZE
    with open(path, "rb") as handle:
        for block in iter(lambda: handle.read(block_size), b""):
            hasher.update(block)
    return hasher.hexdigest()


__all__ = [
    "DEFAULT_ALGORITHM",
    "SUPPORTED_ALGORITHMS",
    "file_hexdigest",
    "hexdigest",
    "sha256_hexdigest",
]
