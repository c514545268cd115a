from __future__ import annotations

import os
from pathlib import Path

import pytest

from cyberspace.errors import AccessDenied
from cyberspace.services.path_guard import is_within, relative_to_root, resolve


def test_resolve_blocks_traversal(tmp_path):
    with pytest.raises(PermissionError):
        resolve(tmp_path, '../../etc/passwd')


@pytest.mark.parametrize('requested', ['../outside', '../', '..', 'sub/../../outside', './a/../../b'])
def test_resolve_denies_paths_above_root(tmp_path, requested):
    root = tmp_path / 'root'
    root.mkdir()

    with pytest.raises(AccessDenied):
        resolve(root, requested)


def test_resolve_denies_sibling_sharing_name_prefix(tmp_path):
    root = tmp_path / 'b'
    root.mkdir()
    (tmp_path / 'bc').mkdir()

    with pytest.raises(AccessDenied):
        resolve(root, '../bc')


def test_resolve_returns_absolute_path_under_root(tmp_path):
    (tmp_path / 'sub' / 'dir').mkdir(parents=True)

    assert resolve(tmp_path, 'sub/dir') == tmp_path / 'sub' / 'dir'


def test_resolve_normalizes_dot_segments_without_touching_disk(tmp_path):
    assert resolve(tmp_path, 'a/./b/../c') == tmp_path / 'a' / 'c'
    assert resolve(tmp_path, '.') == tmp_path


def test_resolve_treats_leading_slash_as_relative(tmp_path):
    assert resolve(tmp_path, '/etc/passwd') == tmp_path / 'etc' / 'passwd'


def test_resolve_rejects_nul_bytes(tmp_path):
    with pytest.raises(AccessDenied):
        resolve(tmp_path, 'a\x00b')


def test_is_within_is_segment_aware():
    root = Path('/srv/data')

    assert is_within(root, Path('/srv/data'))
    assert is_within(root, Path('/srv/data/x'))
    assert not is_within(root, Path('/srv/database'))
    assert not is_within(root, Path('/srv'))


def test_relative_to_root_uses_dot_for_root(tmp_path):
    assert relative_to_root(tmp_path, tmp_path) == '.'
    assert relative_to_root(tmp_path, tmp_path / 'a' / 'b.txt') == os.path.join('a', 'b.txt')


def test_relative_to_root_falls_back_to_base_name_outside_root(tmp_path):
    root = tmp_path / 'root'

    assert relative_to_root(root, tmp_path / 'elsewhere' / 'file.txt') == 'file.txt'
