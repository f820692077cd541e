"""Unit tests for StatusPageWriter."""

import json
from pathlib import Path

from tests.helpers.boards import make_board, make_card
from trestus.renderer.models import RenderOptions
from trestus.renderer.writer import StatusPageWriter, packaged_stylesheet
from trestus.status.aggregator import build_status_model
from trestus.status.models import StatusModel


def _model() -> StatusModel:
    return build_status_model(make_board({"Investigating": [make_card()]}))


class TestStatusPageWriter:
    """Tests for StatusPageWriter."""

    def test_without_output_path(self) -> None:
        """HTML stays in the result when no output path is given."""
        result = StatusPageWriter("run-1").render(_model())

        assert result.success
        assert result.manifest.files == []
        assert "API errors" in result.html

    def test_writes_html_and_stylesheet(self, tmp_path: Path) -> None:
        """The packaged stylesheet is copied next to the page."""
        output = tmp_path / "site" / "index.html"
        options = RenderOptions(output_path=output)

        result = StatusPageWriter("run-1", options).render(_model())

        assert result.success
        assert output.read_text(encoding="utf-8") == result.html
        css = tmp_path / "site" / "trestus.css"
        assert css.read_bytes() == packaged_stylesheet()
        assert [f.path for f in result.manifest.files] == ["index.html", "trestus.css"]
        assert result.manifest.total_bytes == sum(
            f.bytes_written for f in result.manifest.files
        )

    def test_skip_css(self, tmp_path: Path) -> None:
        """skip_css suppresses the stylesheet copy."""
        output = tmp_path / "index.html"
        options = RenderOptions(output_path=output, skip_css=True)

        StatusPageWriter("run-1", options).render(_model())

        assert not (tmp_path / "trestus.css").exists()

    def test_json_output(self, tmp_path: Path) -> None:
        """A JSON document is written when requested."""
        json_path = tmp_path / "status.json"
        options = RenderOptions(json_output_path=json_path)

        result = StatusPageWriter("run-1", options).render(_model())

        assert result.success
        document = json.loads(json_path.read_text(encoding="utf-8"))
        assert document["panels"] == {"MinorOutage": ["API"]}
        assert document["generated_at"] == result.manifest.generated_at

    def test_template_failure(self, tmp_path: Path) -> None:
        """Template errors give an unsuccessful result instead of raising."""
        template = tmp_path / "broken.html"
        template.write_text("{{ incidents | no_such_filter }}", encoding="utf-8")
        options = RenderOptions(custom_template=template)

        result = StatusPageWriter("run-1", options).render(_model())

        assert not result.success
        assert result.error_summary is not None
        assert result.error_summary.startswith("TemplateError")
