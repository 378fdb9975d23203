"""Discovery of markdown documents under a corpus root."""

import logging
import os
from collections import deque
from collections.abc import Collection, Iterator
from enum import Enum
from pathlib import Path

from prompts_web_viewer.errors import WalkError
from prompts_web_viewer.models import Document
from prompts_web_viewer.navigation import SOURCE_DIRECTORIES
from prompts_web_viewer.titles import MARKDOWN_SUFFIX, read_title

logger = logging.getLogger(__name__)


class TraversalPolicy(str, Enum):
    """Rules deciding which directories a walk descends into."""

    # Every directory except dot-prefixed and excluded ones.
    LIVE = "live"
    # Root level limited to the taxonomy source directories.
    ALLOW_LIST = "allow-list"


class FileWalker:
    """Walks a corpus root and produces Document descriptors."""

    def __init__(
        self,
        root: Path,
        policy: TraversalPolicy = TraversalPolicy.LIVE,
        exclude_names: Collection[str] = (),
        exclude_paths: Collection[Path] = (),
    ) -> None:
        """Initialise walker.

        Args:
            root: Corpus root directory.
            policy: Directory descent policy.
            exclude_names: Directory names never descended into.
            exclude_paths: Directories never descended into, such as a
                snapshot output directory living under the root.
        """
        self.root = root.resolve()
        self.policy = TraversalPolicy(policy)
        self.exclude_names = frozenset(exclude_names)
        self.exclude_paths = frozenset(path.resolve() for path in exclude_paths)
        self.errors: list[WalkError] = []

    def iter_files(self) -> Iterator[tuple[str, Path]]:
        """Yield markdown files without reading them.

        Directories are processed breadth-first from an explicit queue and
        entries inside a directory in name order. Unreadable directories
        are logged, recorded in :attr:`errors` and skipped.

        Yields:
            ``(relative_path, absolute_path)`` pairs, the relative path
            always slash-separated.
        """
        self.errors = []
        pending: deque[Path] = deque([self.root])

        while pending:
            directory = pending.popleft()
            try:
                with os.scandir(directory) as it:
                    entries = sorted(it, key=lambda entry: entry.name)
            except OSError as exc:
                error = WalkError(f"Error reading directory {directory}: {exc}")
                self.errors.append(error)
                logger.warning(error.message)
                continue

            for entry in entries:
                entry_path = Path(entry.path)
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    is_file = entry.is_file()
                except OSError as exc:
                    logger.warning("Could not stat %s: %s", entry_path, exc)
                    continue

                if is_dir:
                    if self._should_descend(directory, entry.name, entry_path):
                        pending.append(entry_path)
                elif is_file and entry.name.endswith(MARKDOWN_SUFFIX):
                    yield entry_path.relative_to(self.root).as_posix(), entry_path

    def clone(self) -> "FileWalker":
        """Return a walker with the same settings and its own error list.

        Concurrent callers each walk with their own instance so
        :attr:`errors` reflects that caller's last walk.
        """
        return FileWalker(self.root, self.policy, self.exclude_names, self.exclude_paths)

    def walk(self) -> Iterator[Document]:
        """Yield every document reachable under the root, with its title."""
        for relative_path, absolute_path in self.iter_files():
            yield Document(
                path=relative_path,
                absolute_path=absolute_path,
                name=absolute_path.name,
                title=read_title(absolute_path),
            )

    def _should_descend(self, parent: Path, name: str, path: Path) -> bool:
        if name.startswith("."):
            return False
        if name in self.exclude_names or path.resolve() in self.exclude_paths:
            return False
        if self.policy is TraversalPolicy.ALLOW_LIST and parent == self.root:
            return name in SOURCE_DIRECTORIES
        return True
