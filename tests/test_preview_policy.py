from __future__ import annotations

from core.services.preview_policy import (
    TRUNCATION_MARKER,
    fit_within,
    format_file_size,
    truncate_text,
)


def test_short_text_is_unchanged():
    assert truncate_text("hello\nworld\n") == "hello\nworld\n"


def test_text_is_cut_to_forty_lines_with_marker():
    content = "\n".join(f"line {i}" for i in range(100))

    preview = truncate_text(content)

    assert preview.endswith(TRUNCATION_MARKER)
    body = preview[: -len(TRUNCATION_MARKER)]
    assert body.split("\n") == [f"line {i}" for i in range(40)]


def test_text_is_cut_to_two_thousand_chars():
    content = "x" * 5000

    preview = truncate_text(content)

    assert preview == "x" * 2000 + TRUNCATION_MARKER


def test_exactly_forty_lines_has_no_marker():
    content = "\n".join("y" for _ in range(40)) + "\n"

    assert TRUNCATION_MARKER not in truncate_text(content)


def test_fit_within_preserves_aspect_ratio():
    assert fit_within(4000, 3000, 2000) == (2000, 1500)
    assert fit_within(1000, 8000, 2000) == (250, 2000)


def test_fit_within_never_upscales():
    assert fit_within(800, 600, 2000) == (800, 600)
    assert fit_within(0, 0, 2000) == (0, 0)


def test_format_file_size():
    assert format_file_size(10) == "0 KB"
    assert format_file_size(2000) == "2 KB"
    assert format_file_size(1_500_000) == "1.5 MB"
    assert format_file_size(250_000_000) == "250 MB"
    assert format_file_size(3_200_000_000) == "3.2 GB"
    assert format_file_size(-5) == "0 KB"


def test_format_duration():
    from core.services.preview_policy import format_duration

    assert format_duration(-1) == "--:--"
    assert format_duration(0) == "00:00"
    assert format_duration(65_400) == "01:05"
    assert format_duration(3_725_000) == "1:02:05"
