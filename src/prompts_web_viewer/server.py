"""Flask application exposing the knowledge base over HTTP."""

import logging
from pathlib import Path

from flask import Flask, Response, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException

from prompts_web_viewer.errors import BadRequestError, ViewerError
from prompts_web_viewer.knowledge_base import KnowledgeBase

logger = logging.getLogger(__name__)


def create_app(knowledge_base: KnowledgeBase, static_dir: Path | None = None) -> Flask:
    """Create the Flask application.

    Args:
        knowledge_base: Live or snapshot knowledge base to serve.
        static_dir: Optional directory with the front-end (``index.html``
            and assets).

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__, static_folder=None)
    app.config["KNOWLEDGE_BASE"] = knowledge_base
    app.json.sort_keys = False

    @app.errorhandler(ViewerError)
    def handle_viewer_error(error: ViewerError):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        if isinstance(error, HTTPException):
            return error
        logger.exception("Unhandled error for %s", request.path)
        return jsonify({"error": "internal_error", "message": "Something broke!"}), 500

    @app.get("/health")
    def health():
        return jsonify({"status": "healthy", "documents": len(knowledge_base.documents())})

    @app.get("/api/navigation")
    def navigation():
        return jsonify(knowledge_base.fetch_navigation())

    @app.get("/api/content")
    def content():
        record = knowledge_base.fetch_content(_required_arg("path", "Path parameter required"))
        return jsonify(record.to_dict())

    @app.get("/api/raw")
    def raw():
        text = knowledge_base.fetch_raw(_required_arg("path", "Path parameter required"))
        return Response(text, mimetype="text/plain")

    @app.get("/api/search")
    def search():
        query = _required_arg("q", "Query parameter required", allow_empty=True)
        results = knowledge_base.search(query)
        return jsonify([result.to_dict() for result in results])

    if static_dir is not None:
        static_root = static_dir.resolve()

        @app.get("/")
        def index():
            return send_from_directory(static_root, "index.html")

        @app.get("/<path:filename>")
        def assets(filename: str):
            return send_from_directory(static_root, filename)

    return app


def _required_arg(name: str, message: str, allow_empty: bool = False) -> str:
    value = request.args.get(name)
    if value is None or (not value and not allow_empty):
        raise BadRequestError(message)
    return value
