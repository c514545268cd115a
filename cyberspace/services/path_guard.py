from __future__ import annotations

import os
from pathlib import Path

from ..errors import AccessDenied

ROOT_SENTINEL = '.'


def is_within(root: Path, candidate: Path) -> bool:
    # Symlinks are not resolved: a link under root pointing elsewhere passes.
    base = str(root)
    target = str(candidate)
    if target == base:
        return True
    return target.startswith(base.rstrip(os.sep) + os.sep)


def resolve(root: Path, requested_path: str) -> Path:
    if '\x00' in requested_path:
        raise AccessDenied('Access denied: invalid path')

    separators = os.sep + (os.altsep or '')
    joined = os.path.join(root, requested_path.lstrip(separators))
    candidate = Path(os.path.normpath(joined))
    if not is_within(root, candidate):
        raise AccessDenied('Access denied: path outside of root directory')
    return candidate


def relative_to_root(root: Path, path: str | os.PathLike) -> str:
    """Return ``path`` relative to ``root``, or its base name if that is not possible."""
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        return os.path.basename(path)

    if rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return os.path.basename(path)
    return rel or ROOT_SENTINEL
