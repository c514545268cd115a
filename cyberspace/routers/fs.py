from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse, JSONResponse

from ..deps import get_command_runner, get_workspace
from ..errors import AccessDenied, AlreadyExists, NotAllowed, NotFound, ReadFailure
from ..schemas import ApiResponse, DeleteRequest, RenameRequest
from ..services.file_ops import delete_entry, rename_entry
from ..services.path_guard import relative_to_root, resolve
from ..services.reveal import reveal_in_os_browser
from ..services.system_cmd import CommandRunner
from ..services.tree import build_tree, list_immediate_children
from ..workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/api', tags=['fs'])


def _read_failure(exc: ReadFailure) -> HTTPException:
    if exc.missing:
        return HTTPException(status_code=404, detail='Path not found')
    return HTTPException(status_code=500, detail=f'Error accessing path: {exc.cause}')


@router.get('/fs')
def get_tree(path: str = Query(default=''), workspace: Workspace = Depends(get_workspace)):
    try:
        target = resolve(workspace.root, path) if path else workspace.root
        node = build_tree(target, workspace.root, workspace.filters)
    except AccessDenied as exc:
        raise HTTPException(status_code=403, detail=str(exc))
    except ReadFailure as exc:
        raise _read_failure(exc)
    return JSONResponse(node.to_dict())


@router.get('/open')
def open_path(path: str = Query(default=''), workspace: Workspace = Depends(get_workspace)):
    if not path:
        raise HTTPException(status_code=400, detail='Path parameter is required')
    try:
        target = resolve(workspace.root, path)
    except AccessDenied as exc:
        raise HTTPException(status_code=403, detail=str(exc))

    if not target.exists():
        raise HTTPException(status_code=404, detail='Path not found')
    if not target.is_dir():
        return FileResponse(target)

    try:
        items = list_immediate_children(target, workspace.root, workspace.filters)
    except ReadFailure as exc:
        raise _read_failure(exc)
    return [item.to_dict() for item in items]


@router.post('/rename')
def rename(payload: RenameRequest, workspace: Workspace = Depends(get_workspace)):
    if not payload.path or not payload.new_name:
        raise HTTPException(status_code=400, detail='Path and newName are required')
    try:
        source = resolve(workspace.root, payload.path)
        new_path = rename_entry(workspace.root, source, payload.new_name)
    except AccessDenied as exc:
        raise HTTPException(status_code=403, detail=str(exc))
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except (AlreadyExists, NotAllowed) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except OSError as exc:
        logger.error('Rename of %s failed: %s', payload.path, exc)
        raise HTTPException(status_code=500, detail=f'Error renaming: {exc.strerror or exc}')

    return {'ok': True, 'oldPath': payload.path, 'newPath': new_path, 'message': 'Renamed successfully'}


@router.post('/delete')
def delete(payload: DeleteRequest, workspace: Workspace = Depends(get_workspace)):
    if not payload.path:
        raise HTTPException(status_code=400, detail='Path is required')
    try:
        target = resolve(workspace.root, payload.path)
        delete_entry(workspace.root, target)
    except AccessDenied as exc:
        raise HTTPException(status_code=403, detail=str(exc))
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except NotAllowed as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except OSError as exc:
        logger.error('Delete of %s failed: %s', payload.path, exc)
        raise HTTPException(status_code=500, detail=f'Error deleting: {exc.strerror or exc}')

    return {'ok': True, 'path': payload.path, 'message': 'Deleted successfully'}


@router.post('/open-directory')
async def open_directory(
    path: str = Query(default=''),
    workspace: Workspace = Depends(get_workspace),
    runner: CommandRunner = Depends(get_command_runner),
):
    if not path:
        raise HTTPException(status_code=400, detail='Path parameter is required')
    try:
        target = resolve(workspace.root, path)
        await reveal_in_os_browser(target, runner)
    except AccessDenied as exc:
        raise HTTPException(status_code=403, detail=str(exc))
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except NotAllowed as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except OSError as exc:
        logger.warning('Opening %s in the file browser failed: %s', path, exc)
        raise HTTPException(status_code=500, detail=f'Error opening directory: {exc}')

    return ApiResponse(ok=True, message=f'Directory opened: {relative_to_root(workspace.root, target)}')
