from __future__ import annotations

import os
from unittest import mock

import pytest

from core.errors import AccessDenied
from infrastructure.access import DirectoryAccessGrant


def test_access_is_scoped_and_balanced(tmp_path):
    grant = DirectoryAccessGrant(tmp_path)

    with grant.access():
        assert grant.is_active
        with grant.access():
            assert grant.is_active
        assert grant.is_active

    assert not grant.is_active


def test_access_is_released_when_block_raises(tmp_path):
    grant = DirectoryAccessGrant(tmp_path)

    with pytest.raises(ValueError):
        with grant.access():
            raise ValueError("boom")

    assert not grant.is_active


def test_missing_directory_cannot_be_accessed(tmp_path):
    grant = DirectoryAccessGrant(tmp_path / "nope")

    assert grant.start_accessing() is False
    with pytest.raises(AccessDenied):
        with grant.access():
            pass


def test_released_grant_stays_released(tmp_path):
    with DirectoryAccessGrant(tmp_path) as grant:
        assert grant.start_accessing()
        grant.stop_accessing()

    assert grant.is_released
    assert grant.start_accessing() is False
    grant.release()


def test_path_is_resolved(tmp_path):
    grant = DirectoryAccessGrant(tmp_path / "." / "")

    assert grant.path == tmp_path.resolve()


def test_read_only_directory_can_be_accessed(tmp_path):
    real_access = os.access

    def deny_write(path, mode):
        return not mode & os.W_OK and real_access(path, mode)

    with mock.patch("infrastructure.access.os.access", side_effect=deny_write):
        grant = DirectoryAccessGrant(tmp_path)
        with grant.access():
            assert grant.is_active
