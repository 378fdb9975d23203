"""Memoisation of rendered document content."""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path, PurePosixPath

from prompts_web_viewer.errors import NotFoundError, RenderError
from prompts_web_viewer.models import ContentRecord, Document
from prompts_web_viewer.renderer import Renderer
from prompts_web_viewer.titles import extract_title

logger = logging.getLogger(__name__)

PLACEHOLDER_CONTENT = "<p>Error loading content</p>"

Resolver = Callable[[str], Path]


def normalize_path(path: str) -> str:
    """Normalise a request path into the slash-separated cache key form.

    Args:
        path: Root-relative path as received from a client.

    Returns:
        Path with backslashes converted and empty or ``.`` segments dropped.
    """
    return PurePosixPath(path.replace("\\", "/")).as_posix().lstrip("/")


def resolve_document(documents: Mapping[str, Document], path: str) -> Path:
    """Resolve a normalised path to the file of a walked document.

    Only documents found by the corpus walk resolve, so files in hidden
    or excluded directories are never served.

    Args:
        documents: Corpus keyed by root-relative path.
        path: Normalised root-relative path.

    Returns:
        Absolute path of the document.

    Raises:
        NotFoundError: If the path is not in the corpus or its file is gone.
    """
    doc = documents.get(path)
    if doc is None or not doc.absolute_path.is_file():
        raise NotFoundError(f"Content not found: {path}")
    return doc.absolute_path


class ContentCache:
    """Process-wide map of document path to rendered content record.

    Entries are only ever added one at a time or dropped all at once by
    :meth:`invalidate_all`. Failed renders are never stored.
    """

    def __init__(self, resolver: Resolver, renderer: Renderer) -> None:
        """Initialise cache.

        Args:
            resolver: Callable mapping a normalised path to its file,
                raising NotFoundError for unknown paths.
            renderer: Callable converting markdown text to HTML.
        """
        self.resolver = resolver
        self.renderer = renderer
        self._entries: dict[str, ContentRecord] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._entries

    def get_or_render(self, path: str) -> ContentRecord:
        """Return the cached record for ``path``, rendering it on a miss.

        Args:
            path: Root-relative document path.

        Returns:
            ContentRecord with rendered HTML, title and normalised path. When
            rendering fails a placeholder record is returned and nothing is
            cached.

        Raises:
            NotFoundError: If ``path`` does not resolve to a document.
        """
        key = normalize_path(path)
        # A render finishing after invalidate_all must not land in the new map.
        entries = self._entries
        cached = entries.get(key)
        if cached is not None:
            return cached

        file_path = self.resolver(key)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error reading file %s: %s", file_path, exc)
            return self._placeholder(key, "", file_path.name)

        try:
            record = self._render(key, text, file_path.name)
        except RenderError as exc:
            logger.error("%s", exc.message)
            return self._placeholder(key, text, file_path.name)

        entries[key] = record
        return record

    def invalidate_all(self) -> None:
        """Drop every cached record."""
        count = len(self._entries)
        self._entries = {}
        logger.debug("Cleared %d cached records", count)

    def _render(self, key: str, text: str, filename: str) -> ContentRecord:
        try:
            content = self.renderer(text)
        except Exception as exc:
            raise RenderError(f"Error rendering {key}: {exc}") from exc
        return ContentRecord(content=content, title=extract_title(text, filename), path=key)

    @staticmethod
    def _placeholder(key: str, text: str, filename: str) -> ContentRecord:
        return ContentRecord(content=PLACEHOLDER_CONTENT, title=extract_title(text, filename), path=key)
