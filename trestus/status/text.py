"""Text rendering for card descriptions, comments and severity names."""

import re

import markdown


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


class TextRenderer:
    """Converts Markdown card text into display-safe HTML.

    The converter's raw-HTML block and inline handlers are removed, so HTML
    typed into a card is treated as text and escaped on output. Only markup
    produced by the Markdown converter reaches the page.
    """

    def __init__(self, extensions: list[str] | None = None) -> None:
        """Initialize the renderer.

        Args:
            extensions: Python-Markdown extension names to enable.
        """
        if extensions is None:
            extensions = ["nl2br", "sane_lists"]
        self._converter = markdown.Markdown(
            extensions=extensions,
            output_format="html",
        )
        self._converter.preprocessors.deregister("html_block")
        self._converter.inlinePatterns.deregister("html")

    def render(self, raw_text: str | None) -> str:
        """Render raw Markdown text to HTML.

        Args:
            raw_text: Card or comment body, possibly empty.

        Returns:
            HTML fragment, empty for empty input.
        """
        if not raw_text or not raw_text.strip():
            return ""
        self._converter.reset()
        return self._converter.convert(raw_text)


def to_display_label(symbolic_name: str) -> str:
    """Split a camel-cased name into words.

    Args:
        symbolic_name: Name such as "DegradedPerformance".

    Returns:
        Spaced name such as "Degraded Performance".
    """
    return _CAMEL_BOUNDARY.sub(" ", symbolic_name)
