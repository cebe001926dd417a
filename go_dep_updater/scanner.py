"""Find manifest files anywhere under a root."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from go_dep_updater.exceptions import ScanError


def _raise_scan_error(err: OSError) -> None:
    raise ScanError(f"cannot walk {err.filename}: {err.strerror or err}") from err


def find_manifests(root: Path, manifest_name: str = "go.mod") -> Iterator[Path]:
    """Yield every file named *manifest_name* under *root*, lazily.

    Directories are visited top-down in sorted order. Any traversal error
    (missing root, unreadable directory) raises :class:`ScanError` and ends
    the scan.
    """
    root = Path(root)
    if not root.is_dir():
        raise ScanError(f"root path {root} is not a directory")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_scan_error):
        dirnames.sort()
        if manifest_name in filenames:
            candidate = Path(dirpath) / manifest_name
            if candidate.is_file():
                yield candidate
