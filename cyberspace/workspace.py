from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import Settings, parse_ignore_dirs
from .services.tree import FilterConfig


@dataclass(frozen=True)
class Workspace:
    """The root and filter rules every request works against, fixed at startup."""

    root: Path
    filters: FilterConfig

    @classmethod
    def from_settings(cls, settings: Settings) -> Workspace:
        return cls(
            root=resolve_root(settings.root_path),
            filters=FilterConfig(
                show_hidden=settings.show_hidden,
                ignored_dir_names=parse_ignore_dirs(settings.ignore_dirs),
            ),
        )


def resolve_root(root_path: str) -> Path:
    try:
        root = Path(os.path.abspath(os.path.expanduser(root_path)))
    except (OSError, ValueError) as exc:
        raise RuntimeError(f'Error resolving path {root_path!r}: {exc}') from exc

    if not root.exists():
        raise RuntimeError(f'Refusing to start: root path {root} does not exist')
    if not root.is_dir():
        raise RuntimeError(f'Refusing to start: root path {root} is not a directory')
    return root
