"""Status page rendering orchestrator."""

import time
from datetime import UTC, datetime
from importlib import resources
from pathlib import Path

import structlog

from trestus.config.constants import COMPONENT_RENDERER, DEFAULT_STYLESHEET_NAME
from trestus.errors import TrestusError
from trestus.renderer.html_renderer import HtmlRenderer
from trestus.renderer.io import AtomicWriter
from trestus.renderer.json_renderer import JsonRenderer
from trestus.renderer.models import RenderManifest, RenderOptions, RenderResult
from trestus.status.models import StatusModel


logger = structlog.get_logger()


def packaged_stylesheet() -> bytes:
    """Read the stylesheet shipped with the default template."""
    return (
        resources.files("trestus.renderer")
        .joinpath("templates", DEFAULT_STYLESHEET_NAME)
        .read_bytes()
    )


class StatusPageWriter:
    """Renders a StatusModel to HTML and JSON and writes the outputs.

    Produces, depending on options:
        - the HTML page at ``output_path`` (otherwise kept in the result)
        - trestus.css next to the HTML page unless ``skip_css``
        - the JSON document at ``json_output_path``
    """

    def __init__(self, run_id: str, options: RenderOptions | None = None) -> None:
        """Initialize the writer.

        Args:
            run_id: Unique run identifier.
            options: Rendering options.
        """
        self._run_id = run_id
        self._options = options or RenderOptions()
        self._log = logger.bind(run_id=run_id, component=COMPONENT_RENDERER)

    def render(self, model: StatusModel) -> RenderResult:
        """Render and write all requested outputs.

        Args:
            model: Status model to render.

        Returns:
            RenderResult indicating success/failure and manifest.
        """
        start_time = time.perf_counter()
        generated_at = datetime.now(UTC).isoformat()
        manifest = RenderManifest(run_id=self._run_id, generated_at=generated_at)
        options = self._options

        self._log.info(
            "render_started",
            output_path=str(options.output_path) if options.output_path else None,
            custom_template=(
                str(options.custom_template) if options.custom_template else None
            ),
        )

        try:
            html = HtmlRenderer(
                custom_template=options.custom_template,
                template_data=options.template_data,
                run_id=self._run_id,
            ).render(model, generated_at=generated_at)

            if options.output_path is not None:
                output_path = Path(options.output_path)
                writer = AtomicWriter(output_path.parent, self._run_id)
                manifest.add_file(writer.write(output_path, html))
                if not options.skip_css:
                    css_path = output_path.parent / DEFAULT_STYLESHEET_NAME
                    manifest.add_file(
                        writer.write_bytes(css_path, packaged_stylesheet())
                    )

            if options.json_output_path is not None:
                json_path = Path(options.json_output_path)
                content = JsonRenderer(self._run_id).render(
                    model, generated_at=generated_at
                )
                manifest.add_file(
                    AtomicWriter(json_path.parent, self._run_id).write(
                        json_path, content
                    )
                )

        except (TrestusError, OSError) as e:
            error_summary = f"{type(e).__name__}: {e}"
            self._log.error("render_failed", error=error_summary)
            return RenderResult(
                success=False,
                manifest=manifest,
                error_summary=error_summary,
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        manifest.duration_ms = duration_ms
        self._log.info(
            "render_complete",
            file_count=len(manifest.files),
            total_bytes=manifest.total_bytes,
            duration_ms=round(duration_ms, 2),
        )
        return RenderResult(success=True, manifest=manifest, html=html)
