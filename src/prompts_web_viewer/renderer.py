"""Markdown to HTML rendering."""

from collections.abc import Callable, Sequence

import markdown

Renderer = Callable[[str], str]

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    "fenced_code",
    "tables",
    "codehilite",
    "nl2br",
    "sane_lists",
    "toc",
)


class MarkdownRenderer:
    """Renders markdown with GitHub-flavoured extensions and highlighted code."""

    def __init__(self, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> None:
        self.extensions = list(extensions)
        self.extension_configs = {"codehilite": {"guess_lang": False}}

    def __call__(self, text: str) -> str:
        """Render ``text`` to an HTML fragment."""
        return markdown.markdown(
            text,
            extensions=self.extensions,
            extension_configs=self.extension_configs,
        )
