"""Exception hierarchy for the outer collaborators.

The classification and aggregation engine never raises for malformed board
data; these exceptions cover board retrieval, snapshot files and templates.
"""


class TrestusError(Exception):
    """Base exception for all trestus errors."""


class BoardFetchError(TrestusError):
    """Raised when a board cannot be retrieved from the Trello API."""

    def __init__(
        self,
        message: str,
        board_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize the fetch error.

        Args:
            message: Human-readable error message.
            board_id: Identifier of the board being fetched.
            status_code: HTTP status code if a response was received.
        """
        super().__init__(message)
        self.message = message
        self.board_id = board_id
        self.status_code = status_code

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "message": self.message,
            "board_id": self.board_id,
            "status_code": self.status_code,
        }


class SnapshotLoadError(TrestusError):
    """Raised when a board snapshot file cannot be read or validated."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialize the snapshot error.

        Args:
            path: Path of the snapshot file.
            reason: Why loading failed.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load board snapshot '{path}': {reason}")


class TemplateError(TrestusError):
    """Raised when a template or its YAML data cannot be loaded."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialize the template error.

        Args:
            path: Path of the template or data file.
            reason: Why loading failed.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load template input '{path}': {reason}")


class SnapshotSaveError(TrestusError):
    """Raised when a board snapshot file cannot be written."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialize the snapshot error.

        Args:
            path: Path of the snapshot file.
            reason: Why saving failed.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot save board snapshot '{path}': {reason}")
