from __future__ import annotations

import logging
import os
import stat
import sys
from pathlib import Path

from ..errors import NotAllowed, NotFound
from .system_cmd import CommandResult, CommandRunner, shell_preview

logger = logging.getLogger(__name__)

_REVEAL_COMMANDS = {
    'darwin': 'open',
    'win32': 'explorer',
    'linux': 'xdg-open',
}


def reveal_command(path: Path, platform: str | None = None) -> list[str]:
    platform = platform or sys.platform
    opener = _REVEAL_COMMANDS.get(platform)
    if opener is None:
        raise OSError(f'Unsupported operating system: {platform}')
    return [opener, str(path)]


async def reveal_in_os_browser(target: Path, runner: CommandRunner, platform: str | None = None) -> CommandResult:
    try:
        info = os.stat(target)
    except FileNotFoundError as exc:
        raise NotFound(f'Path not found: {target.name}') from exc
    if not stat.S_ISDIR(info.st_mode):
        raise NotAllowed('Path is not a directory')

    cmd = reveal_command(target, platform)
    logger.info('Opening directory: %s', shell_preview(cmd))
    result = await runner.run(cmd)
    if not result.success:
        raise OSError(result.stderr or f'{cmd[0]} exited with code {result.exit_code}')
    return result
