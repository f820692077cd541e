"""CLI commands for building the status page."""

import logging
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path

import click
import structlog

from trestus import __version__
from trestus.board import Board, TrelloClient, dump_board_snapshot, load_board_snapshot
from trestus.config.constants import COMPONENT_CLI
from trestus.errors import TrestusError
from trestus.observability.logging import bind_run_context, configure_logging
from trestus.renderer import RenderOptions, StatusPageWriter
from trestus.renderer.html_renderer import display_label
from trestus.settings import AppSettings, get_settings
from trestus.status import AggregationConfig, AggregationPolicy, StatusAggregator


logger = structlog.get_logger()


@dataclass
class BoardSource:
    """Where the board comes from."""

    settings: AppSettings
    snapshot_path: Path | None = None
    save_snapshot_path: Path | None = None


def _setup_logging(
    command: str, json_logs: bool, verbose: bool
) -> tuple[str, structlog.typing.FilteringBoundLogger]:
    """Configure logging and return the run id with a bound logger."""
    run_id = str(uuid.uuid4())
    log_level = logging.DEBUG if verbose else logging.INFO
    configure_logging(level=log_level, json_format=json_logs)
    bind_run_context(run_id)
    log = logger.bind(run_id=run_id, component=COMPONENT_CLI, command=command)
    return run_id, log  # type: ignore[return-value]


def _load_board(source: BoardSource, run_id: str) -> Board:
    """Load the board from a snapshot file or the Trello API."""
    if source.snapshot_path is not None:
        board = load_board_snapshot(source.snapshot_path)
    else:
        board = TrelloClient(source.settings, run_id=run_id).fetch_board()

    if source.save_snapshot_path is not None:
        dump_board_snapshot(board, source.save_snapshot_path)
    return board


def _fail(log: structlog.typing.FilteringBoundLogger, error: TrestusError) -> None:
    """Report an error and exit with status 1."""
    log.error("command_failed", error_type=type(error).__name__, error=str(error))
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def _board_options(func):  # noqa: ANN001, ANN202
    """Options shared by commands that need a board."""
    options = [
        click.option("--key", "-k", default=None, help="Trello API key."),
        click.option("--token", "-t", default=None, help="Trello API auth token."),
        click.option("--board-id", "-b", default=None, help="Trello board id."),
        click.option(
            "--snapshot",
            "snapshot_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="Read the board from a JSON snapshot instead of Trello.",
        ),
        click.option(
            "--list-priority",
            multiple=True,
            help="List name to process first; repeat to set an order.",
        ),
        click.option(
            "--policy",
            type=click.Choice([policy.value for policy in AggregationPolicy]),
            default=AggregationPolicy.FIRST_WRITER.value,
            show_default=True,
            help="How a service's current status is chosen.",
        ),
        click.option(
            "--json-logs/--no-json-logs",
            default=True,
            help="Use JSON format for logs (default: true).",
        ),
        click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Build a status page from a Trello board."""


@cli.command()
@_board_options
@click.option(
    "--custom-template",
    "-T",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Jinja2 template to use instead of the default.",
)
@click.option(
    "--template-data",
    "-d",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file whose contents are available to the template as 'data'.",
)
@click.option(
    "--skip-css",
    is_flag=True,
    help="Skip copying the default trestus.css to the output dir.",
)
@click.option(
    "--output-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to write rendered HTML to (default: stdout).",
)
@click.option(
    "--json-output",
    "json_output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to write the status model as JSON.",
)
@click.option(
    "--save-snapshot",
    "save_snapshot_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Save the retrieved board as a JSON snapshot.",
)
def run(  # noqa: PLR0913
    key: str | None,
    token: str | None,
    board_id: str | None,
    snapshot_path: Path | None,
    list_priority: tuple[str, ...],
    policy: str,
    json_logs: bool,
    verbose: bool,
    custom_template: Path | None,
    template_data: Path | None,
    skip_css: bool,
    output_path: Path | None,
    json_output_path: Path | None,
    save_snapshot_path: Path | None,
) -> None:
    """Fetch the board, build the status model and render the page."""
    run_id, log = _setup_logging("run", json_logs, verbose)
    settings = get_settings().with_overrides(key=key, token=token, board_id=board_id)
    log.info(
        "status_run_started",
        board_id=settings.trello_board_id,
        snapshot=str(snapshot_path) if snapshot_path else None,
        policy=policy,
        list_priority=list(list_priority),
    )

    try:
        board = _load_board(
            BoardSource(
                settings=settings,
                snapshot_path=snapshot_path,
                save_snapshot_path=save_snapshot_path,
            ),
            run_id,
        )
    except TrestusError as e:
        _fail(log, e)
        return

    config = AggregationConfig(
        list_priority=tuple(list_priority),
        policy=AggregationPolicy(policy),
    )
    model = StatusAggregator(config=config, run_id=run_id).build(board)

    result = StatusPageWriter(
        run_id,
        RenderOptions(
            custom_template=custom_template,
            template_data=template_data,
            skip_css=skip_css,
            output_path=output_path,
            json_output_path=json_output_path,
        ),
    ).render(model)

    if not result.success:
        log.error("status_run_failed", error=result.error_summary)
        click.echo(f"Render failed: {result.error_summary}", err=True)
        sys.exit(1)

    if output_path is None:
        click.echo(result.html)
    else:
        for file_info in result.manifest.files:
            click.echo(
                f"  {file_info.path} ({file_info.bytes_written} bytes)", err=True
            )

    log.info("status_run_complete", incidents=len(model.incidents))


@cli.command()
@_board_options
def summary(
    key: str | None,
    token: str | None,
    board_id: str | None,
    snapshot_path: Path | None,
    list_priority: tuple[str, ...],
    policy: str,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Print each service with its current status."""
    run_id, log = _setup_logging("summary", json_logs, verbose)
    settings = get_settings().with_overrides(key=key, token=token, board_id=board_id)

    try:
        board = _load_board(
            BoardSource(settings=settings, snapshot_path=snapshot_path), run_id
        )
    except TrestusError as e:
        _fail(log, e)
        return

    config = AggregationConfig(
        list_priority=tuple(list_priority),
        policy=AggregationPolicy(policy),
    )
    model = StatusAggregator(config=config, run_id=run_id).build(board)

    for name, system in sorted(model.systems.items()):
        click.echo(
            f"{name}: {system.status_label_text} ({display_label(system.severity)})"
        )
    click.echo(
        f"Incidents: {len(model.open_incidents)} open, "
        f"{len(model.closed_incidents)} resolved"
    )
