"""Failure types raised by the tree builder, the path guard and file operations.

Each one subclasses the builtin exception it refines, so code that only knows
about ``PermissionError`` or ``FileNotFoundError`` keeps handling them.
"""

from __future__ import annotations

import os


class ReadFailure(OSError):
    """An entry could not be stat'ed or listed."""

    def __init__(self, path: str | os.PathLike, cause: OSError):
        super().__init__(f'Error accessing path {os.fspath(path)}: {cause}')
        self.path = os.fspath(path)
        self.cause = cause

    @property
    def missing(self) -> bool:
        return isinstance(self.cause, FileNotFoundError)


class AccessDenied(PermissionError):
    """The requested path resolves outside the configured root."""


class AlreadyExists(FileExistsError):
    pass


class NotFound(FileNotFoundError):
    pass


class NotAllowed(ValueError):
    """The operation does not apply to this kind of entry."""
