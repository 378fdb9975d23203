"""Substring search over the document corpus."""

import logging
from collections.abc import Callable, Iterable

from prompts_web_viewer.errors import ViewerError
from prompts_web_viewer.models import Document, SearchMatch, SearchResult

logger = logging.getLogger(__name__)

MAX_RESULTS = 20
MAX_MATCHES_PER_DOCUMENT = 3


def find_matches(text: str, query: str, limit: int = MAX_MATCHES_PER_DOCUMENT) -> list[SearchMatch]:
    """Collect lines of ``text`` containing ``query``.

    Args:
        text: Raw document text.
        query: Lower-cased query string.
        limit: Maximum number of matches to return.

    Returns:
        Matches in line order, each with the line before and after as context.
    """
    lines = text.split("\n")
    matches: list[SearchMatch] = []
    for index, line in enumerate(lines):
        if query not in line.lower():
            continue
        matches.append(
            SearchMatch(
                line=index + 1,
                content=line.strip(),
                context="\n".join(lines[max(0, index - 1) : index + 2]),
            )
        )
        if len(matches) == limit:
            break
    return matches


class SearchIndex:
    """Answers free-text queries by scanning the corpus on every call.

    There is no persistent index: each query re-reads every document, so
    results always reflect the files on disk at the time of the call.
    """

    def __init__(
        self,
        documents: Callable[[], Iterable[Document]],
        reader: Callable[[Document], str],
    ) -> None:
        """Initialise search index.

        Args:
            documents: Callable returning the corpus in traversal order.
            reader: Callable returning the raw text of a document.
        """
        self.documents = documents
        self.reader = reader

    def search(self, query: str) -> list[SearchResult]:
        """Find documents whose title or content contains ``query``.

        Args:
            query: Free-text query, matched case-insensitively as a substring.

        Returns:
            Up to ``MAX_RESULTS`` results in corpus order, each holding up to
            ``MAX_MATCHES_PER_DOCUMENT`` line matches.
        """
        if not query:
            return []

        needle = query.lower()
        results: list[SearchResult] = []
        for doc in self.documents():
            try:
                text = self.reader(doc)
            except (OSError, UnicodeDecodeError, ViewerError) as exc:
                logger.warning("Error searching file %s: %s", doc.path, exc)
                continue

            if needle not in doc.title.lower() and needle not in text.lower():
                continue

            results.append(SearchResult(file=doc, matches=find_matches(text, needle)))
            if len(results) == MAX_RESULTS:
                break

        logger.debug("Search for %r returned %d results", query, len(results))
        return results
