from __future__ import annotations

import pytest

from conftest import make_entry

from core.models import PreviewKind
from core.services.classifier import (
    MAX_IMAGE_PREVIEW_BYTES,
    classify_entry,
    classify_extension,
    classify_name,
    preview_kind,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("photo.HEIC", PreviewKind.IMAGE),
        ("clip.mov", PreviewKind.VIDEO),
        ("doc.PDF", PreviewKind.PDF),
        ("notes.md", PreviewKind.TEXT),
        ("archive.zip", PreviewKind.NONE),
        ("Makefile", PreviewKind.NONE),
        ("script.py", PreviewKind.TEXT),
        ("movie.3gp", PreviewKind.VIDEO),
    ],
)
def test_classify_name(name, expected):
    assert classify_name(name) is expected


def test_classify_extension_accepts_leading_dot_and_case():
    assert classify_extension(".JPG") is PreviewKind.IMAGE
    assert classify_extension("webm") is PreviewKind.VIDEO
    assert classify_extension("") is PreviewKind.NONE


def test_directories_never_get_a_preview():
    folder = make_entry("holiday.png", is_container=True)

    assert classify_entry(folder) is PreviewKind.NONE
    assert preview_kind(folder) is PreviewKind.NONE


def test_oversized_images_are_unpreviewable():
    at_limit = make_entry("ok.png", size=MAX_IMAGE_PREVIEW_BYTES)
    too_big = make_entry("huge.png", size=MAX_IMAGE_PREVIEW_BYTES + 1)
    big_video = make_entry("huge.mp4", size=MAX_IMAGE_PREVIEW_BYTES * 4)

    assert preview_kind(at_limit) is PreviewKind.IMAGE
    assert preview_kind(too_big) is PreviewKind.NONE
    assert preview_kind(big_video) is PreviewKind.VIDEO
    assert preview_kind(too_big, max_image_bytes=MAX_IMAGE_PREVIEW_BYTES * 2) is PreviewKind.IMAGE
