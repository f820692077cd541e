"""Unit tests for the HTML renderer."""

from pathlib import Path

import pytest

from tests.helpers.boards import API, MAJOR, MINOR, WEB, make_board, make_card
from trestus.board.models import Comment
from trestus.errors import TemplateError
from trestus.renderer.html_renderer import (
    HtmlRenderer,
    display_label,
    load_template_data,
    severity_class,
)
from trestus.status.aggregator import build_status_model
from trestus.status.models import SeverityLevel, StatusModel


@pytest.fixture
def model() -> StatusModel:
    """Build a model with one open and one resolved incident."""
    board = make_board(
        {
            "Investigating": [
                make_card(
                    card_id="a",
                    name="API <errors>",
                    labels=[MAJOR, API],
                    description="Requests **failing**",
                    comments=[Comment(author_full_name="Ada Lovelace", text="on it")],
                )
            ],
            "Fixed": [make_card(card_id="b", name="Slow site", labels=[MINOR, WEB])],
        }
    )
    return build_status_model(board)


class TestFilters:
    """Tests for template filters."""

    @pytest.mark.parametrize(
        ("severity", "label", "css"),
        [
            (SeverityLevel.NONE, "Operational", "operational"),
            (
                SeverityLevel.DEGRADED_PERFORMANCE,
                "Degraded Performance",
                "degraded-performance",
            ),
            (SeverityLevel.MINOR_OUTAGE, "Minor Outage", "minor-outage"),
            (SeverityLevel.MAJOR_OUTAGE, "Major Outage", "major-outage"),
        ],
    )
    def test_severity_filters(
        self, severity: SeverityLevel, label: str, css: str
    ) -> None:
        """Severities map to display text and CSS classes."""
        assert display_label(severity) == label
        assert severity_class(severity) == css

    def test_display_label_on_strings(self) -> None:
        """Plain strings are split on camel-case boundaries."""
        assert display_label("MinorOutage") == "Minor Outage"


class TestHtmlRenderer:
    """Tests for HtmlRenderer."""

    def test_default_template(self, model: StatusModel) -> None:
        """The packaged template shows panels, systems and incidents."""
        html = HtmlRenderer().render(model, generated_at="2017-06-13T00:00:00Z")

        assert '<section class="panel major-outage">' in html
        assert "Major Outage" in html
        assert "Investigating" in html
        assert "Resolved" in html
        assert "<strong>failing</strong>" in html
        assert "AL" in html
        assert "2017-06-13T00:00:00Z" in html

    def test_card_names_are_escaped(self, model: StatusModel) -> None:
        """Autoescape applies to raw card fields."""
        html = HtmlRenderer().render(model)
        assert "API &lt;errors&gt;" in html
        assert "API <errors>" not in html

    def test_all_operational(self) -> None:
        """Without open incidents the page reports all systems operational."""
        model = build_status_model(make_board({"Investigating": []}))
        html = HtmlRenderer().render(model)

        assert "All Systems Operational" in html
        assert "No incidents reported." in html

    def test_custom_template_with_data(
        self, model: StatusModel, tmp_path: Path
    ) -> None:
        """Custom templates receive the model and YAML data."""
        template = tmp_path / "page.html"
        template.write_text(
            "{{ data.company }}|"
            "{% for name, s in systems | dictsort %}{{ name }}={{ s.severity | "
            "display_label }};{% endfor %}",
            encoding="utf-8",
        )
        data = tmp_path / "data.yaml"
        data.write_text("company: Acme & Co\n", encoding="utf-8")

        html = HtmlRenderer(custom_template=template, template_data=data).render(model)

        assert html == (
            "Acme &amp; Co|API=Major Outage;Database=Operational;"
            "Website=Operational;"
        )

    @pytest.mark.parametrize("suffix", [".jinja", ".tpl", ".txt"])
    def test_custom_template_escapes_any_extension(
        self, tmp_path: Path, suffix: str
    ) -> None:
        """Card and list names are escaped whatever the template's extension."""
        board = make_board(
            {
                "<b>Stage</b>": [
                    make_card(name="<script>x</script>", labels=[MAJOR, API])
                ]
            }
        )
        template = tmp_path / f"status{suffix}"
        template.write_text(
            "{% for i in incidents %}{{ i.name }}|{{ i.list_name }}{% endfor %}",
            encoding="utf-8",
        )

        html = HtmlRenderer(custom_template=template).render(
            build_status_model(board)
        )

        assert html == "&lt;script&gt;x&lt;/script&gt;|&lt;b&gt;Stage&lt;/b&gt;"

    def test_template_syntax_error(self, model: StatusModel, tmp_path: Path) -> None:
        """Broken templates raise TemplateError."""
        template = tmp_path / "broken.html"
        template.write_text("{% for %}", encoding="utf-8")

        with pytest.raises(TemplateError, match="broken.html"):
            HtmlRenderer(custom_template=template).render(model)


class TestLoadTemplateData:
    """Tests for load_template_data."""

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty YAML file gives empty data."""
        path = tmp_path / "data.yaml"
        path.write_text("", encoding="utf-8")
        assert load_template_data(path) == {}

    def test_non_mapping(self, tmp_path: Path) -> None:
        """Top-level lists are rejected."""
        path = tmp_path / "data.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(TemplateError, match="mapping"):
            load_template_data(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Malformed YAML raises TemplateError."""
        path = tmp_path / "data.yaml"
        path.write_text("key: [unclosed\n", encoding="utf-8")
        with pytest.raises(TemplateError):
            load_template_data(path)
