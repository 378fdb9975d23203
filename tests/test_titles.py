"""Tests for title extraction."""

from pathlib import Path

import pytest

from prompts_web_viewer.titles import extract_title, humanize_filename, read_title


def test_extract_title_from_heading() -> None:
    """Test that the first level-one heading is the title."""
    text = "Intro line\n# Debugging Checklist\n\n# Second Heading\n"
    assert extract_title(text, "checklist.md") == "Debugging Checklist"


def test_extract_title_strips_indentation_and_trailing_space() -> None:
    """Test that surrounding whitespace is ignored."""
    assert extract_title("   #   Padded Title   \n", "padded.md") == "Padded Title"


def test_extract_title_ignores_deeper_headings() -> None:
    """Test that ## headings do not count as titles."""
    text = "## Not A Title\n### Nor This\n"
    assert extract_title(text, "api-design-review.md") == "Api Design Review"


def test_extract_title_requires_space_after_marker() -> None:
    """Test that #hashtag lines are not headings."""
    assert extract_title("#hashtag\n", "my-notes.md") == "My Notes"


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("code-review-checklist.md", "Code Review Checklist"),
        ("README.md", "README"),
        ("vsCode-setup.md", "VsCode Setup"),
        ("plain", "Plain"),
    ],
)
def test_humanize_filename(filename: str, expected: str) -> None:
    """Test filename humanisation keeps the rest of each word untouched."""
    assert humanize_filename(filename) == expected


def test_read_title_from_file(tmp_path: Path) -> None:
    """Test reading a title from disk."""
    file_path = tmp_path / "intro.md"
    file_path.write_text("# Welcome\n\nHello.\n", encoding="utf-8")

    assert read_title(file_path) == "Welcome"


def test_read_title_falls_back_to_filename_on_decode_error(tmp_path: Path) -> None:
    """Test that undecodable files fall back to the bare filename."""
    file_path = tmp_path / "broken-file.md"
    file_path.write_bytes(b"\xff\xfe# Title")

    assert read_title(file_path) == "broken-file"


def test_read_title_falls_back_to_filename_when_missing(tmp_path: Path) -> None:
    """Test that a missing file never raises."""
    assert read_title(tmp_path / "gone.md") == "gone"
