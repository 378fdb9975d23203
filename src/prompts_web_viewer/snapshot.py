"""Static snapshot generation for offline browsing."""

import json
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from prompts_web_viewer.errors import ViewerError
from prompts_web_viewer.knowledge_base import (
    CONTENT_DIR,
    MANIFEST_FILE,
    NAVIGATION_FILE,
    RECORD_SUFFIX,
    LiveKnowledgeBase,
)

logger = logging.getLogger(__name__)


@dataclass
class SnapshotSummary:
    """Outcome of a snapshot build."""

    output_dir: Path
    document_count: int = 0
    failures: list[str] = field(default_factory=list)


class StaticSnapshotBuilder:
    """Serialises a live knowledge base into a self-contained directory.

    Records are produced through the live ``fetch_content`` so a snapshot
    record and the live API response carry the same fields and values.
    """

    def __init__(self, knowledge_base: LiveKnowledgeBase) -> None:
        self.knowledge_base = knowledge_base

    def build(self, output_dir: Path, assets_dir: Path | None = None) -> SnapshotSummary:
        """Write navigation, manifest and one content record per document.

        Args:
            output_dir: Destination directory, created if missing.
            assets_dir: Optional directory of front-end files copied into
                the output.

        Returns:
            SnapshotSummary with the number of records written and the
            paths that failed.
        """
        logger.info("Building static snapshot in %s", output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        summary = SnapshotSummary(output_dir=output_dir)

        documents = self.knowledge_base.documents()
        self._write_json(output_dir / NAVIGATION_FILE, self.knowledge_base.fetch_navigation())
        self._write_json(output_dir / MANIFEST_FILE, [doc.to_dict() for doc in documents])
        logger.info("Generated navigation data with %d files", len(documents))

        content_dir = output_dir / CONTENT_DIR
        for doc in documents:
            try:
                record = self.knowledge_base.fetch_content(doc.path).to_dict()
                record["raw"] = self.knowledge_base.fetch_raw(doc.path)
                self._write_json(content_dir / (doc.path + RECORD_SUFFIX), record)
            except (OSError, ViewerError) as exc:
                logger.error("Error generating content for %s: %s", doc.path, exc)
                summary.failures.append(doc.path)
                continue
            summary.document_count += 1
            logger.debug("Generated content for: %s", doc.path)

        if assets_dir is not None:
            shutil.copytree(assets_dir, output_dir, dirs_exist_ok=True)
            logger.info("Copied static assets from %s", assets_dir)

        logger.info(
            "Static build complete: %d records, %d failures",
            summary.document_count,
            len(summary.failures),
        )
        return summary

    @staticmethod
    def _write_json(file_path: Path, payload: Any) -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
