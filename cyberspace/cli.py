"""Command-line entry point: parse options into the settings and serve the app.

Example:
    $ cyberspace ~/projects --ignore node_modules,.venv --port 9000
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

import uvicorn

from . import __version__
from .config import Settings, settings


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cyberspace',
        description='Browse, rename and delete the files under one directory from a web page.',
    )
    parser.add_argument('-V', '--version', action='version', version=f'cyberspace {__version__}')
    parser.add_argument(
        'directory',
        nargs='?',
        help='Directory to serve. Takes precedence over --path.',
    )
    parser.add_argument('--path', dest='root_path', help='Directory to serve (default: current directory).')
    parser.add_argument('--host', help='Interface to bind.')
    parser.add_argument('--port', type=int, help='Port to serve on.')
    parser.add_argument(
        '--hidden',
        action='store_true',
        default=None,
        help='Show hidden files and directories.',
    )
    parser.add_argument(
        '--ignore',
        metavar='NAMES',
        help='Comma-separated directory names to leave out of the tree, e.g. "node_modules,.git".',
    )
    parser.add_argument(
        '--log-level',
        choices=['critical', 'error', 'warning', 'info', 'debug'],
        help='Logging verbosity.',
    )
    return parser


def apply_args(target: Settings, args: argparse.Namespace) -> Settings:
    """Copy the options given on the command line onto ``target``; unset ones keep their value."""
    root_path = args.directory or args.root_path
    if root_path:
        target.root_path = root_path
    if args.host:
        target.app_host = args.host
    if args.port is not None:
        target.app_port = args.port
    if args.hidden:
        target.show_hidden = True
    if args.ignore is not None:
        target.ignore_dirs = args.ignore
    if args.log_level:
        target.log_level = args.log_level
    return target


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    apply_args(settings, args)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    from .main import app

    uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_level=settings.log_level)
    return 0
