"""Title extraction for markdown documents."""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"
HEADING_MARKER = "# "

_WORD_START = re.compile(r"\b\w")


def humanize_filename(filename: str) -> str:
    """Turn a markdown filename into a readable title.

    Args:
        filename: Bare filename such as ``code-review-checklist.md``.

    Returns:
        Title with the extension stripped, hyphens replaced by spaces and
        the first letter of each word capitalised.
    """
    stem = _strip_suffix(filename)
    return _WORD_START.sub(lambda match: match.group(0).upper(), stem.replace("-", " "))


def extract_title(text: str, filename: str) -> str:
    """Extract the title of a markdown document.

    The first line whose stripped form starts with a level-one heading
    marker wins. Documents without one fall back to the humanised filename.

    Args:
        text: Markdown source.
        filename: Bare filename used for the fallback.

    Returns:
        Non-empty title string.
    """
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped.startswith(HEADING_MARKER):
            return stripped[len(HEADING_MARKER) :].strip()
    return humanize_filename(filename) or filename


def read_title(file_path: Path) -> str:
    """Read a file and extract its title, never raising.

    Args:
        file_path: Path to the markdown file.

    Returns:
        The extracted title, or the bare filename stem if the file cannot
        be read.
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read title from %s: %s", file_path, exc)
        return _strip_suffix(file_path.name) or file_path.name
    return extract_title(text, file_path.name)


def _strip_suffix(filename: str) -> str:
    if filename.endswith(MARKDOWN_SUFFIX):
        return filename[: -len(MARKDOWN_SUFFIX)]
    return filename
