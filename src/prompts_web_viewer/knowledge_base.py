"""Unified access to navigation, content and search in live or snapshot mode."""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Collection
from pathlib import Path
from typing import Any

from prompts_web_viewer.cache import ContentCache, normalize_path, resolve_document
from prompts_web_viewer.errors import NotFoundError, SnapshotError
from prompts_web_viewer.models import ContentRecord, Document, SearchResult
from prompts_web_viewer.navigation import NavigationTree, build_navigation_tree, navigation_to_dict
from prompts_web_viewer.renderer import MarkdownRenderer, Renderer
from prompts_web_viewer.search import SearchIndex
from prompts_web_viewer.walker import FileWalker, TraversalPolicy

logger = logging.getLogger(__name__)

NAVIGATION_FILE = "navigation.json"
MANIFEST_FILE = "documents.json"
CONTENT_DIR = "content"
RECORD_SUFFIX = ".json"


class KnowledgeBase(ABC):
    """Read interface shared by the live and snapshot implementations."""

    @abstractmethod
    def fetch_navigation(self) -> dict[str, Any]:
        """Return the navigation tree in its JSON shape."""

    @abstractmethod
    def fetch_content(self, path: str) -> ContentRecord:
        """Return the rendered record for ``path``.

        Raises:
            NotFoundError: If ``path`` is not a document.
        """

    @abstractmethod
    def fetch_raw(self, path: str) -> str:
        """Return the markdown source of ``path``.

        Raises:
            NotFoundError: If ``path`` is not a document.
        """

    @abstractmethod
    def documents(self) -> list[Document]:
        """Return the corpus in traversal order."""

    @abstractmethod
    def search(self, query: str) -> list[SearchResult]:
        """Return documents matching ``query``."""


class LiveKnowledgeBase(KnowledgeBase):
    """Serves documents straight from a directory on disk."""

    def __init__(
        self,
        root: Path,
        renderer: Renderer | None = None,
        policy: TraversalPolicy = TraversalPolicy.LIVE,
        exclude_names: Collection[str] = (),
        exclude_paths: Collection[Path] = (),
    ) -> None:
        """Initialise the knowledge base and build the navigation tree.

        Args:
            root: Corpus root directory.
            renderer: Markdown renderer; defaults to :class:`MarkdownRenderer`.
            policy: Directory traversal policy for the walker.
            exclude_names: Directory names to skip while walking.
            exclude_paths: Directories to skip while walking.

        Raises:
            ValueError: If the root directory does not exist.
        """
        if not root.is_dir():
            msg = f"Documentation root does not exist: {root}"
            raise ValueError(msg)

        self.root = root.resolve()
        self.walker = FileWalker(self.root, policy, exclude_names, exclude_paths)
        self.cache = ContentCache(self.resolve, renderer or MarkdownRenderer())
        self.search_index = SearchIndex(self.walker.clone().walk, Document.read_raw)
        self._documents: list[Document] = []
        self._by_path: dict[str, Document] = {}
        self._tree: NavigationTree = {}
        self.rebuild()

    @property
    def tree(self) -> NavigationTree:
        return self._tree

    def rebuild(self) -> NavigationTree:
        """Re-walk the root and replace the navigation tree.

        Returns:
            The new navigation tree.
        """
        logger.info("Building navigation tree from %s", self.root)
        documents = list(self.walker.walk())
        tree = build_navigation_tree(documents)
        by_path = {doc.path: doc for doc in documents}
        self._documents, self._by_path, self._tree = documents, by_path, tree
        logger.info("Navigation tree built with %d documents", len(documents))
        return tree

    def invalidate(self) -> None:
        """Clear every cached content record."""
        self.cache.invalidate_all()

    def handle_change(self, path: str) -> None:
        """React to a change notification for ``path``.

        The whole cache is cleared and the tree rebuilt, whatever the path.
        """
        logger.info("File %s changed, clearing cache", path)
        self.invalidate()
        self.rebuild()

    def fetch_navigation(self) -> dict[str, Any]:
        return navigation_to_dict(self._tree)

    def fetch_content(self, path: str) -> ContentRecord:
        return self.cache.get_or_render(path)

    def resolve(self, path: str) -> Path:
        """Return the file of the walked document at ``path``.

        Raises:
            NotFoundError: If ``path`` is not part of the current corpus.
        """
        return resolve_document(self._by_path, normalize_path(path))

    def fetch_raw(self, path: str) -> str:
        key = normalize_path(path)
        file_path = self.resolve(key)
        try:
            return file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error reading file %s: %s", file_path, exc)
            raise NotFoundError(f"Content not found: {key}") from exc

    def documents(self) -> list[Document]:
        return list(self._documents)

    def search(self, query: str) -> list[SearchResult]:
        return self.search_index.search(query)


class SnapshotKnowledgeBase(KnowledgeBase):
    """Serves a static snapshot written by :class:`StaticSnapshotBuilder`."""

    def __init__(self, snapshot_dir: Path) -> None:
        """Load the snapshot's navigation and manifest.

        Args:
            snapshot_dir: Directory holding the snapshot.

        Raises:
            SnapshotError: If the navigation file is missing or unreadable.
        """
        self.snapshot_dir = snapshot_dir.resolve()
        self.content_dir = self.snapshot_dir / CONTENT_DIR
        self._navigation = self._load_json(self.snapshot_dir / NAVIGATION_FILE)
        self._documents = self._load_documents()
        self.search_index = SearchIndex(self.documents, lambda doc: self.fetch_raw(doc.path))
        logger.info("Loaded snapshot %s with %d documents", self.snapshot_dir, len(self._documents))

    def fetch_navigation(self) -> dict[str, Any]:
        return self._navigation

    def fetch_content(self, path: str) -> ContentRecord:
        record = self._load_record(path)
        return ContentRecord(content=record["content"], title=record["title"], path=record["path"])

    def fetch_raw(self, path: str) -> str:
        return str(self._load_record(path)["raw"])

    def documents(self) -> list[Document]:
        return list(self._documents)

    def search(self, query: str) -> list[SearchResult]:
        return self.search_index.search(query)

    def record_path(self, path: str) -> Path:
        """Return the file holding the serialised record for ``path``."""
        return self.content_dir / (normalize_path(path) + RECORD_SUFFIX)

    def _load_record(self, path: str) -> dict[str, Any]:
        record_file = self.record_path(path).resolve()
        if not record_file.is_relative_to(self.content_dir) or not record_file.is_file():
            raise NotFoundError(f"Content not found: {path}")
        try:
            return json.loads(record_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Error loading record %s: %s", record_file, exc)
            raise NotFoundError(f"Content not found: {path}") from exc

    def _load_documents(self) -> list[Document]:
        manifest_file = self.snapshot_dir / MANIFEST_FILE
        if manifest_file.is_file():
            entries = self._load_json(manifest_file)
        else:
            logger.warning("Snapshot has no %s, listing records instead", MANIFEST_FILE)
            entries = [self._load_json(path) for path in sorted(self.content_dir.rglob("*" + RECORD_SUFFIX))]

        documents = []
        for entry in entries:
            try:
                path, title = str(entry["path"]), str(entry["title"])
            except (KeyError, TypeError) as exc:
                msg = f"Invalid snapshot entry in {MANIFEST_FILE}: {entry!r}"
                raise SnapshotError(msg) from exc
            documents.append(
                Document(
                    path=path,
                    absolute_path=self.record_path(path),
                    name=path.rsplit("/", 1)[-1],
                    title=title,
                )
            )
        return documents

    @staticmethod
    def _load_json(file_path: Path) -> Any:
        try:
            return json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            msg = f"Cannot load snapshot file {file_path}: {exc}"
            raise SnapshotError(msg) from exc
