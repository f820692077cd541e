"""HTML renderer using Jinja2 templates."""

import re
import time
from datetime import UTC, datetime
from pathlib import Path

import jinja2
import structlog
import yaml
from jinja2 import (
    Environment,
    FileSystemLoader,
    PackageLoader,
    select_autoescape,
)

from trestus.config.constants import COMPONENT_RENDERER, DEFAULT_TEMPLATE_NAME
from trestus.errors import TemplateError
from trestus.status.models import SeverityLevel, StatusModel
from trestus.status.text import to_display_label


logger = structlog.get_logger()

_NON_WORD = re.compile(r"[^a-z0-9]+")


def display_label(value: object) -> str:
    """Jinja filter: human-readable severity or camel-cased name."""
    if isinstance(value, SeverityLevel):
        if value == SeverityLevel.NONE:
            return "Operational"
        return to_display_label(value.symbol)
    return to_display_label(str(value))


def severity_class(value: SeverityLevel) -> str:
    """Jinja filter: CSS class for a severity, e.g. ``minor-outage``."""
    if value == SeverityLevel.NONE:
        return "operational"
    return _NON_WORD.sub("-", to_display_label(value.symbol).lower()).strip("-")


def load_template_data(path: Path) -> dict[str, object]:
    """Load YAML template data.

    Args:
        path: YAML file path.

    Returns:
        Mapping exposed to templates as ``data``.

    Raises:
        TemplateError: If the file cannot be read or is not a mapping.
    """
    try:
        loaded = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise TemplateError(str(path), str(e)) from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise TemplateError(str(path), "top-level YAML value must be a mapping")
    return loaded


class HtmlRenderer:
    """Renders the status page with Jinja2.

    The packaged template lives in trestus/renderer/templates/. A custom
    template file may replace it. Auto-escaping is on for every template
    whatever its file extension; pre-rendered descriptions and comments are
    marked safe in the template.
    """

    def __init__(
        self,
        custom_template: Path | None = None,
        template_data: Path | None = None,
        run_id: str | None = None,
    ) -> None:
        """Initialize the HTML renderer.

        Args:
            custom_template: Optional template file to use instead.
            template_data: Optional YAML file with extra template data.
            run_id: Optional run identifier for logging.
        """
        self._log = logger.bind(component=COMPONENT_RENDERER)
        if run_id:
            self._log = self._log.bind(run_id=run_id)

        if custom_template is not None:
            custom_template = Path(custom_template)
            loader: jinja2.BaseLoader = FileSystemLoader(str(custom_template.parent))
            self._template_name = custom_template.name
        else:
            loader = PackageLoader("trestus.renderer", "templates")
            self._template_name = DEFAULT_TEMPLATE_NAME

        self._template_path = str(custom_template or DEFAULT_TEMPLATE_NAME)
        self._data = load_template_data(template_data) if template_data else {}

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(default=True, default_for_string=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["display_label"] = display_label
        self._env.filters["severity_class"] = severity_class

    def render(self, model: StatusModel, generated_at: str | None = None) -> str:
        """Render the status page.

        Args:
            model: Status model to render.
            generated_at: Optional ISO timestamp shown on the page.

        Returns:
            Rendered HTML.

        Raises:
            TemplateError: If the template cannot be loaded or rendered.
        """
        start_time = time.perf_counter()

        try:
            template = self._env.get_template(self._template_name)
        except jinja2.TemplateError as e:
            raise TemplateError(self._template_path, str(e)) from e

        severities = sorted(model.panels, reverse=True)
        context = {
            "incidents": model.incidents,
            "open_incidents": model.open_incidents,
            "closed_incidents": model.closed_incidents,
            "panels": model.panels,
            "panel_severities": severities,
            "systems": model.systems,
            "worst_severity": model.worst_severity,
            "generated_at": generated_at or datetime.now(UTC).isoformat(),
            "data": self._data,
        }

        try:
            html = template.render(**context)
        except jinja2.TemplateError as e:
            raise TemplateError(self._template_path, str(e)) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._log.debug(
            "template_rendered",
            template=self._template_name,
            bytes=len(html.encode("utf-8")),
            duration_ms=round(duration_ms, 2),
        )
        return html
