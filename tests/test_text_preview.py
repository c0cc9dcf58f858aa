from __future__ import annotations

from core.services.preview_policy import TRUNCATION_MARKER
from infrastructure.text_preview import TextPreviewReader


def test_reads_small_utf8_file(tmp_path):
    path = tmp_path / "notes.md"
    path.write_text("# Title\nsome text ✓\n", encoding="utf-8")

    assert TextPreviewReader().read(path) == "# Title\nsome text ✓\n"


def test_invalid_utf8_is_unpreviewable(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes("caf\xe9".encode("latin-1"))

    assert TextPreviewReader().read(path) is None


def test_missing_file_is_unpreviewable(tmp_path):
    assert TextPreviewReader().read(tmp_path / "nope.txt") is None


def test_long_file_is_truncated(tmp_path):
    path = tmp_path / "big.log"
    path.write_text("\n".join(f"row {i}" for i in range(10_000)), encoding="utf-8")

    preview = TextPreviewReader().read(path)

    assert preview.endswith(TRUNCATION_MARKER)
    assert preview.count("\n") == 39 + TRUNCATION_MARKER.count("\n")


def test_huge_multibyte_file_is_decoded_across_chunks(tmp_path):
    path = tmp_path / "wide.txt"
    path.write_text("é" * 100_000, encoding="utf-8")

    preview = TextPreviewReader().read(path)

    assert preview == "é" * 2000 + TRUNCATION_MARKER


def test_limits_are_configurable(tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("1\n2\n3\n4\n", encoding="utf-8")

    assert TextPreviewReader(max_lines=2).read(path) == "1\n2" + TRUNCATION_MARKER


def test_invalid_utf8_past_the_preview_is_unpreviewable(tmp_path):
    path = tmp_path / "mixed.txt"
    path.write_bytes(b"a" * 200_000 + b"\xff" + b"b" * 10)

    assert TextPreviewReader().read(path) is None


def test_text_beyond_the_kept_head_still_marks_truncation(tmp_path):
    path = tmp_path / "tail.txt"
    path.write_bytes(b"\n" * 100_000 + b"tail")

    preview = TextPreviewReader(max_lines=200_000, max_chars=10).read(path)

    assert preview == "\n" * 10 + TRUNCATION_MARKER
