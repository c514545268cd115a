from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .config import settings
from .routers import fs
from .workspace import Workspace

logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent

_SECURITY_HEADERS = {
    'Content-Security-Policy': "default-src 'self'; script-src 'self'; style-src 'self' 'unsafe-inline'",
    'X-Frame-Options': 'DENY',
    'X-Content-Type-Options': 'nosniff',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    workspace = Workspace.from_settings(settings)
    app.state.workspace = workspace

    logger.info('%s serving %s', settings.app_name, workspace.root)
    if workspace.filters.ignored_dir_names:
        logger.info('Ignoring directories: %s', ', '.join(sorted(workspace.filters.ignored_dir_names)))
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)


def _parse_cors_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(',') if origin.strip()]


cors_origins = _parse_cors_origins(settings.cors_origins)
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=['GET', 'POST', 'OPTIONS'],
        allow_headers=['Content-Type'],
    )

app.mount('/static', StaticFiles(directory=_PACKAGE_DIR / 'static'), name='static')
templates = Jinja2Templates(directory=_PACKAGE_DIR / 'templates')


def _apply_security_headers(response):
    for key, value in _SECURITY_HEADERS.items():
        response.headers[key] = value
    return response


@app.middleware('http')
async def security_middleware(request: Request, call_next):
    response = await call_next(request)
    return _apply_security_headers(response)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    if request.url.path.startswith('/api/'):
        response = JSONResponse({'detail': 'Internal server error. Please try again.'}, status_code=500)
    else:
        response = HTMLResponse('<h1>Unexpected error</h1><p>Please try again.</p>', status_code=500)
    return _apply_security_headers(response)


@app.get('/', response_class=HTMLResponse)
def index(request: Request):
    workspace = getattr(request.app.state, 'workspace', None)
    root_name = workspace.root.name if workspace else ''
    return templates.TemplateResponse(request, 'index.html', {'app_name': settings.app_name, 'root_name': root_name})


@app.get('/healthz')
def healthz():
    return {'ok': True}


app.include_router(fs.router)
