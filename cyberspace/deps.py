from __future__ import annotations

from fastapi import HTTPException, Request, status

from .services.system_cmd import CommandRunner, RealCommandRunner
from .workspace import Workspace


def get_workspace(request: Request) -> Workspace:
    workspace = getattr(request.app.state, 'workspace', None)
    if workspace is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail='Server is not ready')
    return workspace


def get_command_runner() -> CommandRunner:
    return RealCommandRunner()
