"""Data models for the prompts knowledge base."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Document:
    """Represents one markdown file discovered under the corpus root."""

    path: str
    absolute_path: Path
    name: str
    title: str

    def read_raw(self) -> str:
        """Read the unrendered markdown source.

        Returns:
            The file contents decoded as UTF-8.
        """
        return self.absolute_path.read_text(encoding="utf-8")

    def to_dict(self) -> dict[str, str]:
        """Return the public JSON shape of this document."""
        return {"path": self.path, "name": self.name, "title": self.title}


@dataclass(frozen=True)
class ContentRecord:
    """Rendered content for a single document."""

    content: str
    title: str
    path: str

    def to_dict(self) -> dict[str, str]:
        """Return the public JSON shape of this record."""
        return {"content": self.content, "title": self.title, "path": self.path}


@dataclass(frozen=True)
class SearchMatch:
    """A single matching line with one line of context on each side."""

    line: int
    content: str
    context: str

    def to_dict(self) -> dict[str, Any]:
        """Return the public JSON shape of this match."""
        return {"line": self.line, "content": self.content, "context": self.context}


@dataclass
class SearchResult:
    """Represents a search hit for one document."""

    file: Document
    matches: list[SearchMatch] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the public JSON shape of this result."""
        return {
            "file": self.file.to_dict(),
            "matches": [match.to_dict() for match in self.matches],
        }
