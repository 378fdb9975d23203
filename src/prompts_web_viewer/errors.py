"""Error types raised by the knowledge base."""


class ViewerError(Exception):
    """Base class for errors with a stable, machine-readable kind."""

    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Return the JSON error body.

        Returns:
            Mapping with ``error`` (the kind) and ``message`` keys.
        """
        return {"error": self.kind, "message": self.message}


class NotFoundError(ViewerError):
    """The requested path does not resolve to a document."""

    kind = "not_found"
    status_code = 404


class BadRequestError(ViewerError):
    """A required request parameter is missing."""

    kind = "bad_request"
    status_code = 400


class RenderError(ViewerError):
    """The markdown renderer failed on a specific document."""

    kind = "render_failure"
    status_code = 500


class WalkError(ViewerError):
    """A directory could not be read during a walk."""

    kind = "walk_failure"
    status_code = 500


class SnapshotError(ViewerError):
    """A snapshot directory is missing or incomplete."""

    kind = "snapshot_invalid"
    status_code = 500
