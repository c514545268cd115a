from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path

from ..errors import AlreadyExists, NotAllowed, NotFound
from .path_guard import relative_to_root


def _validate_new_name(new_name: str) -> None:
    if not new_name or new_name in {os.curdir, os.pardir}:
        raise NotAllowed('newName must be a file or directory name')
    if os.sep in new_name or (os.altsep and os.altsep in new_name) or '\x00' in new_name:
        raise NotAllowed('newName must not contain path separators')


def rename_entry(root: Path, source: Path, new_name: str) -> str:
    """Rename ``source`` inside its own parent directory and return the new relative path."""
    _validate_new_name(new_name)
    if source == root:
        raise NotAllowed('Cannot rename the root directory')
    if not os.path.lexists(source):
        raise NotFound(f'Path not found: {relative_to_root(root, source)}')

    target = source.parent / new_name
    if os.path.lexists(target):
        raise AlreadyExists('A file or directory with that name already exists')

    os.rename(source, target)
    return relative_to_root(root, target)


def delete_entry(root: Path, target: Path) -> None:
    if target == root:
        raise NotAllowed('Cannot delete the root directory')
    try:
        info = os.lstat(target)
    except FileNotFoundError as exc:
        raise NotFound(f'Path not found: {relative_to_root(root, target)}') from exc

    if stat.S_ISDIR(info.st_mode):
        shutil.rmtree(target)
    else:
        os.remove(target)
