from __future__ import annotations

from unittest import mock

import pytest
from send2trash.exceptions import TrashPermissionError

from core.errors import DispositionFailed, FailureCause
from infrastructure.delete_service import DeleteService


@pytest.fixture
def send2trash_mock():
    with mock.patch("infrastructure.delete_service.send2trash") as patched:
        yield patched


def test_existing_file_is_sent_to_trash(tmp_path, send2trash_mock):
    target = tmp_path / "a.txt"
    target.write_text("hello")

    DeleteService().move_to_trash(str(target))

    send2trash_mock.assert_called_once_with(str(target))


def test_missing_file_is_a_no_op_success(tmp_path, send2trash_mock):
    DeleteService().move_to_trash(str(tmp_path / "gone.txt"))

    send2trash_mock.assert_not_called()


def test_file_vanishing_during_the_call_counts_as_success(tmp_path, send2trash_mock):
    target = tmp_path / "racy.txt"
    target.write_text("x")

    def vanish(path):
        target.unlink()
        raise FileNotFoundError(2, "No such file or directory", path)

    send2trash_mock.side_effect = vanish

    DeleteService().move_to_trash(str(target))


@pytest.mark.parametrize(
    "error, cause",
    [
        (PermissionError(13, "Permission denied"), FailureCause.PERMISSION_LOST),
        (TrashPermissionError("stuck.bin"), FailureCause.PERMISSION_LOST),
        (OSError(5, "Input/output error"), FailureCause.IO_ERROR),
        (FileNotFoundError(2, "Trash directory not found"), FailureCause.FILE_MISSING),
    ],
)
def test_trash_errors_raise_disposition_failed(tmp_path, send2trash_mock, error, cause):
    target = tmp_path / "stuck.bin"
    target.write_bytes(b"\0")
    send2trash_mock.side_effect = error

    with pytest.raises(DispositionFailed) as info:
        DeleteService().move_to_trash(str(target))

    assert info.value.cause is cause
    assert info.value.path == str(target)
    assert info.value.message.startswith("Failed to move stuck.bin to Trash:")
    assert target.exists()
