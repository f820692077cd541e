"""JSON renderer for the status model."""

import json
from datetime import UTC, datetime

import structlog

from trestus.config.constants import COMPONENT_RENDERER
from trestus.status.models import StatusModel


logger = structlog.get_logger()


class JsonRenderer:
    """Renders the status model as deterministic JSON.

    Keys are sorted and severities are written by symbolic name, so two runs
    over the same board produce byte-identical output apart from
    ``generated_at``.
    """

    def __init__(self, run_id: str | None = None) -> None:
        """Initialize the JSON renderer.

        Args:
            run_id: Optional run identifier for logging.
        """
        self._log = logger.bind(component=COMPONENT_RENDERER)
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def to_dict(
        self, model: StatusModel, generated_at: str | None = None
    ) -> dict[str, object]:
        """Build the JSON document as a dictionary.

        Args:
            model: Status model to render.
            generated_at: Optional ISO timestamp.

        Returns:
            JSON-compatible dictionary.
        """
        document = model.model_dump(mode="json")
        document["generated_at"] = generated_at or datetime.now(UTC).isoformat()
        return document

    def render(self, model: StatusModel, generated_at: str | None = None) -> str:
        """Render the status model to a JSON string.

        Args:
            model: Status model to render.
            generated_at: Optional ISO timestamp.

        Returns:
            Pretty-printed JSON text with a trailing newline.
        """
        content = json.dumps(
            self.to_dict(model, generated_at),
            indent=2,
            sort_keys=True,
            ensure_ascii=False,
        )
        self._log.debug("json_rendered", bytes=len(content))
        return content + "\n"
