"""Snapshot of the directory subtree under the configured root.

Every call reads the filesystem afresh; nothing is cached between requests.

Children appear in the order ``os.scandir`` yields them. That order is not
sorted and differs between platforms and filesystems, so clients that need a
stable order must sort on their side.

Filtering happens while a directory is listed. A hidden or ignored directory
is never opened, so nothing beneath it is read.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Union

from ..errors import ReadFailure
from .path_guard import relative_to_root

logger = logging.getLogger(__name__)

HIDDEN_MARKER = '.'


@dataclass(frozen=True)
class FilterConfig:
    show_hidden: bool = False
    ignored_dir_names: frozenset[str] = frozenset()

    def skip_reason(self, name: str, is_dir: bool) -> Optional[str]:
        if not self.show_hidden and name.startswith(HIDDEN_MARKER):
            return 'hidden'
        if is_dir and name in self.ignored_dir_names:
            return 'ignored'
        return None


@dataclass(frozen=True)
class Node:
    name: str
    path: str
    size: int
    is_dir: bool
    modified: datetime
    children: Optional[tuple[Node, ...]] = None

    def _fields(self) -> dict:
        return {
            'name': self.name,
            'path': self.path,
            'size': self.size,
            'isDir': self.is_dir,
            'modified': self.modified.isoformat(),
        }

    def to_dict(self) -> dict:
        data = self._fields()
        pending = [(self, data)]
        while pending:
            node, out = pending.pop()
            # Files carry no children key at all; an empty directory carries [].
            if node.children is None:
                continue
            out['children'] = []
            for child in node.children:
                child_out = child._fields()
                out['children'].append(child_out)
                pending.append((child, child_out))
        return data


@dataclass(frozen=True)
class Skipped:
    path: str
    reason: str


@dataclass(frozen=True)
class Failed:
    path: str
    error: ReadFailure


EntryResult = Union[Node, Skipped, Failed]


@dataclass
class _Frame:
    """A directory whose entries are still being visited."""

    path: str
    info: os.stat_result
    entries: Iterator[os.DirEntry]
    children: list[Node] = field(default_factory=list)


def _node_from_stat(path: str, root: Path, info: os.stat_result, children=None) -> Node:
    is_dir = stat.S_ISDIR(info.st_mode)
    return Node(
        name=os.path.basename(path) or path,
        path=relative_to_root(root, path),
        size=0 if is_dir else info.st_size,
        is_dir=is_dir,
        modified=datetime.fromtimestamp(info.st_mtime, tz=timezone.utc).astimezone(),
        children=children,
    )


def _entry_is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _list_entries(path: str) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return list(it)


def _stat(path: str) -> os.stat_result:
    try:
        return os.stat(path)
    except OSError as exc:
        raise ReadFailure(path, exc) from exc


def _open_frame(path: str, info: os.stat_result) -> _Frame:
    try:
        entries = _list_entries(path)
    except OSError as exc:
        logger.warning('Error reading directory %s: %s', path, exc)
        entries = []
    return _Frame(path, info, iter(entries))


def _check_entry(entry: os.DirEntry, filters: FilterConfig) -> Union[Skipped, Failed, os.stat_result]:
    reason = filters.skip_reason(entry.name, _entry_is_dir(entry))
    if reason:
        return Skipped(entry.path, reason)
    try:
        return _stat(entry.path)
    except ReadFailure as exc:
        return Failed(entry.path, exc)


def _report(result: Union[Skipped, Failed]) -> None:
    if isinstance(result, Failed):
        logger.warning('Error scanning %s: %s', result.path, result.error.cause)
    elif result.reason == 'ignored':
        logger.info('Ignoring directory: %s', result.path)
    else:
        logger.debug('Skipping hidden entry: %s', result.path)


def _walk(path: str, info: os.stat_result, root: Path, filters: FilterConfig) -> Node:
    # Explicit stack: nesting depth is not limited by the interpreter recursion limit.
    stack = [_open_frame(path, info)]
    while True:
        frame = stack[-1]
        entry = next(frame.entries, None)
        if entry is None:
            stack.pop()
            node = _node_from_stat(frame.path, root, frame.info, children=tuple(frame.children))
            if not stack:
                return node
            stack[-1].children.append(node)
            continue

        result = _check_entry(entry, filters)
        if isinstance(result, (Skipped, Failed)):
            _report(result)
        elif stat.S_ISDIR(result.st_mode):
            stack.append(_open_frame(entry.path, result))
        else:
            frame.children.append(_node_from_stat(entry.path, root, result))


def scan_entry(entry: os.DirEntry, root: Path, filters: FilterConfig) -> EntryResult:
    result = _check_entry(entry, filters)
    if isinstance(result, (Skipped, Failed)):
        return result
    if stat.S_ISDIR(result.st_mode):
        return _walk(entry.path, result, root, filters)
    return _node_from_stat(entry.path, root, result)


def build_tree(path: str | os.PathLike, root: Path, filters: FilterConfig) -> Node:
    """Build the node for ``path`` and, for a directory, everything visible below it.

    Raises ReadFailure only when ``path`` itself cannot be stat'ed. Unreadable
    descendants are dropped from their parent's children and logged.
    """
    path = os.fspath(path)
    info = _stat(path)
    if not stat.S_ISDIR(info.st_mode):
        return _node_from_stat(path, root, info)
    return _walk(path, info, root, filters)


def list_immediate_children(directory: str | os.PathLike, root: Path, filters: FilterConfig) -> list[Node]:
    """One level of ``directory`` with the same filtering as ``build_tree``, no recursion."""
    directory = os.fspath(directory)
    try:
        entries = _list_entries(directory)
    except OSError as exc:
        raise ReadFailure(directory, exc) from exc

    items: list[Node] = []
    for entry in entries:
        if filters.skip_reason(entry.name, _entry_is_dir(entry)):
            continue
        try:
            info = entry.stat()
        except OSError as exc:
            logger.warning('Error scanning %s: %s', entry.path, exc)
            continue
        items.append(_node_from_stat(entry.path, root, info))
    return items
