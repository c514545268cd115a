from __future__ import annotations

import pytest

from cyberspace.errors import NotAllowed, NotFound
from cyberspace.services.reveal import reveal_command, reveal_in_os_browser
from cyberspace.services.system_cmd import CommandResult, MockCommandRunner


@pytest.mark.parametrize(
    ('platform', 'opener'),
    [('darwin', 'open'), ('win32', 'explorer'), ('linux', 'xdg-open')],
)
def test_reveal_command_per_platform(tmp_path, platform, opener):
    assert reveal_command(tmp_path, platform) == [opener, str(tmp_path)]


def test_reveal_command_unsupported_platform(tmp_path):
    with pytest.raises(OSError, match='Unsupported operating system'):
        reveal_command(tmp_path, 'sunos5')


@pytest.mark.asyncio
async def test_reveal_directory_runs_opener(tmp_path):
    runner = MockCommandRunner()

    result = await reveal_in_os_browser(tmp_path, runner, platform='linux')

    assert result.success is True
    assert runner.calls == [{'cmd': ['xdg-open', str(tmp_path)], 'timeout': None}]


@pytest.mark.asyncio
async def test_reveal_file_is_not_allowed(tmp_path):
    target = tmp_path / 'a.txt'
    target.write_text('x')
    runner = MockCommandRunner()

    with pytest.raises(NotAllowed):
        await reveal_in_os_browser(target, runner, platform='linux')

    assert runner.calls == []


@pytest.mark.asyncio
async def test_reveal_missing_path(tmp_path):
    runner = MockCommandRunner()

    with pytest.raises(NotFound):
        await reveal_in_os_browser(tmp_path / 'ghost', runner, platform='linux')


@pytest.mark.asyncio
async def test_reveal_command_failure_is_reported(tmp_path):
    runner = MockCommandRunner()
    runner.queue_result(CommandResult(False, '', 'no display', 3, 0.01))

    with pytest.raises(OSError, match='no display'):
        await reveal_in_os_browser(tmp_path, runner, platform='linux')
