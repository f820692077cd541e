"""Data models for status page rendering."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class GeneratedFile:
    """Information about a generated file.

    Attributes:
        path: Path relative to the output directory.
        absolute_path: Absolute path to file.
        bytes_written: Number of bytes written.
        sha256: SHA-256 checksum of content.
    """

    path: str
    absolute_path: str
    bytes_written: int
    sha256: str


@dataclass
class RenderManifest:
    """Manifest of rendered files.

    Attributes:
        run_id: Run identifier.
        generated_at: When rendering started.
        files: List of generated files.
        total_bytes: Total bytes written.
        duration_ms: Rendering duration in milliseconds.
    """

    run_id: str
    generated_at: str
    files: list[GeneratedFile] = field(default_factory=list)
    total_bytes: int = 0
    duration_ms: float = 0.0

    def add_file(self, file_info: GeneratedFile) -> None:
        """Add a file to the manifest.

        Args:
            file_info: Information about the generated file.
        """
        self.files.append(file_info)
        self.total_bytes += file_info.bytes_written


@dataclass(frozen=True)
class RenderOptions:
    """Options for rendering the status page.

    Attributes:
        custom_template: Template file used instead of the packaged one.
        template_data: YAML file exposed to templates as ``data``.
        skip_css: Do not copy the packaged stylesheet next to the HTML.
        output_path: HTML output file; None means the caller prints it.
        json_output_path: Optional JSON output file.
    """

    custom_template: Path | None = None
    template_data: Path | None = None
    skip_css: bool = False
    output_path: Path | None = None
    json_output_path: Path | None = None


@dataclass
class RenderResult:
    """Result of the rendering operation.

    Attributes:
        success: Whether rendering succeeded.
        manifest: Manifest of generated files.
        html: Rendered HTML, kept for printing when no output path is set.
        error_summary: Error summary if failed.
    """

    success: bool
    manifest: RenderManifest
    html: str = ""
    error_summary: str | None = None
