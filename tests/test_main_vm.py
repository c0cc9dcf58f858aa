from __future__ import annotations

import os
from pathlib import Path
from unittest import mock

import pytest

from conftest import FakeGrant, FakeTrash

from app.viewmodels.main_vm import MainVM
from core.errors import DispositionFailed, FailureCause, ListingFailed, OpenFailed
from core.models import Disposition, EntryState, PreviewKind, SortCriterion
from infrastructure.delete_service import DeleteService
from infrastructure.directory_repository import DirectoryRepository


@pytest.fixture
def folder(tmp_path):
    a = tmp_path / "a.txt"
    a.write_bytes(b"0123456789")
    os.utime(a, (1_600_000_000, 1_600_000_000))
    b = tmp_path / "b.png"
    b.write_bytes(b"p" * 2000)
    os.utime(b, (1_700_000_000, 1_700_000_000))
    return tmp_path


def _names(vm):
    return [e.display_name for e in vm.queue.entries]


def _vm(trash, **kwargs):
    kwargs.setdefault("opener", lambda path, grant: None)
    return MainVM(DirectoryRepository(), trash, **kwargs)


def test_end_to_end_discard_then_keep(folder, trash):
    vm = _vm(trash)

    assert vm.select_directory(folder)
    assert _names(vm) == ["a.txt", "b.png"]
    assert vm.current.file_name == "a.txt"
    assert vm.current.preview_kind is PreviewKind.TEXT

    result = vm.discard()
    assert result.ok
    assert trash.calls == [str(folder / "a.txt")]
    assert _names(vm) == ["b.png"]

    result = vm.keep()
    assert result.ok
    assert vm.queue.is_empty
    assert vm.current is None
    assert trash.calls == [str(folder / "a.txt")]
    assert vm.is_finished
    assert vm.error_message is None


def test_failed_discard_sets_error_and_reinserts(folder):
    trash = FakeTrash(
        error=DispositionFailed("Failed to move a.txt to Trash: busy", FailureCause.IO_ERROR)
    )
    vm = _vm(trash)
    vm.select_directory(folder)
    seen = []
    trash.observer = lambda _path: seen.append(_names(vm))

    result = vm.discard()

    assert seen == [["b.png"]]
    assert result.state is EntryState.REINSERTED_QUEUED
    assert _names(vm) == ["a.txt", "b.png"]
    assert vm.error_message == "Failed to move a.txt to Trash: busy"
    assert not vm.is_finished

    trash.error = None
    vm.discard()
    assert vm.error_message is None
    assert _names(vm) == ["b.png"]


def test_sort_criterion_reorders_queue(folder, trash):
    vm = _vm(trash, default_sort=SortCriterion.LARGEST_FIRST)
    vm.select_directory(folder)
    assert _names(vm) == ["b.png", "a.txt"]

    vm.set_sort_criterion(SortCriterion.OLDEST_FIRST)

    assert vm.sort_criterion is SortCriterion.OLDEST_FIRST
    assert _names(vm) == ["a.txt", "b.png"]


def test_unreadable_folder_sets_error_and_leaves_queue_empty(tmp_path, trash):
    vm = _vm(trash)

    assert not vm.select_directory(tmp_path / "missing")

    assert vm.error_message == "Could not access selected folder"
    assert vm.queue.is_empty
    assert vm.selected_directory is None


def test_listing_failure_is_surfaced(tmp_path, trash):
    class BrokenRepo:
        def list_entries(self, directory, grant):
            raise ListingFailed("Error loading files: Input/output error")

    vm = MainVM(BrokenRepo(), trash, grant_factory=FakeGrant)

    assert not vm.select_directory(tmp_path)
    assert vm.error_message == "Error loading files: Input/output error"
    assert vm.queue.is_empty


def test_new_selection_releases_previous_grant(folder, tmp_path_factory, trash):
    grants = []

    def factory(path):
        grants.append(FakeGrant(path))
        return grants[-1]

    vm = MainVM(DirectoryRepository(), trash, grant_factory=factory)
    vm.select_directory(folder)
    other = tmp_path_factory.mktemp("other")
    vm.select_directory(other)

    assert grants[0].released
    assert not grants[1].released
    assert vm.queue.is_empty
    assert vm.is_finished

    vm.shutdown()
    assert grants[1].released
    assert vm.grant is None


def test_empty_folder_is_not_an_error(tmp_path, trash):
    vm = _vm(trash)

    assert vm.select_directory(tmp_path)
    assert vm.queue.is_empty
    assert vm.error_message is None


def test_decisions_without_folder_do_nothing(trash):
    vm = _vm(trash)

    assert vm.decide(Disposition.KEEP) is None
    assert vm.decide(Disposition.DISCARD) is None
    assert trash.calls == []
    assert not vm.open_current()


def test_open_current_failure_sets_error(folder, trash):
    calls = []

    def opener(path: Path, grant):
        calls.append(path)
        raise OpenFailed("Could not open a.txt: no handler")

    vm = _vm(trash, opener=opener)
    vm.select_directory(folder)

    assert not vm.open_current()
    assert calls == [folder / "a.txt"]
    assert vm.error_message == "Could not open a.txt: no handler"


def test_reload_picks_up_new_files(folder, trash):
    vm = _vm(trash)
    vm.select_directory(folder)
    vm.keep()
    (folder / "c.md").write_text("new")

    assert vm.reload()
    assert _names(vm) == ["a.txt", "b.png", "c.md"]


def test_read_only_folder_is_reviewable_and_discard_reinserts(folder):
    real_access = os.access

    def deny_write(path, mode):
        return not mode & os.W_OK and real_access(path, mode)

    with (
        mock.patch("infrastructure.access.os.access", side_effect=deny_write),
        mock.patch(
            "infrastructure.delete_service.send2trash",
            side_effect=PermissionError(13, "Permission denied"),
        ),
    ):
        vm = _vm(DeleteService())

        assert vm.select_directory(folder)
        assert vm.error_message is None
        assert _names(vm) == ["a.txt", "b.png"]

        result = vm.discard()

    assert result.state is EntryState.REINSERTED_QUEUED
    assert "Failed to move a.txt to Trash" in vm.error_message
    assert _names(vm) == ["a.txt", "b.png"]
    assert (folder / "a.txt").exists()

    vm.keep()
    assert _names(vm) == ["b.png"]


def test_reload_after_losing_access_sets_error(folder, trash):
    vm = _vm(trash, grant_factory=FakeGrant)
    assert vm.select_directory(folder)

    vm.grant.allowed = False

    assert not vm.reload()
    assert vm.error_message == "Could not access folder"
    assert vm.queue.is_empty
