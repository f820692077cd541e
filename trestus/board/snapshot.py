"""Board snapshot files for offline runs."""

from pathlib import Path

import structlog
from pydantic import ValidationError

from trestus.board.models import Board
from trestus.config.constants import COMPONENT_BOARD
from trestus.errors import SnapshotLoadError, SnapshotSaveError


logger = structlog.get_logger()


def load_board_snapshot(path: Path) -> Board:
    """Load a board snapshot from a JSON file.

    Cards in each list are re-ordered newest first, so hand-written
    snapshots need not be pre-sorted.

    Args:
        path: Snapshot file path.

    Returns:
        The Board.

    Raises:
        SnapshotLoadError: If the file cannot be read or is invalid.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotLoadError(str(path), str(e)) from e

    try:
        board = Board.model_validate_json(raw)
    except ValidationError as e:
        reason = f"{e.error_count()} validation errors"
        raise SnapshotLoadError(str(path), reason) from e

    board = board.model_copy(
        update={"lists": [card_list.newest_first() for card_list in board.lists]}
    )
    logger.bind(component=COMPONENT_BOARD).info(
        "board_snapshot_loaded",
        path=str(path),
        lists=len(board.lists),
        cards=board.card_count,
    )
    return board


def dump_board_snapshot(board: Board, path: Path) -> None:
    """Write a board snapshot as JSON.

    Args:
        board: Board to save.
        path: Destination file path.

    Raises:
        SnapshotSaveError: If the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(board.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise SnapshotSaveError(str(path), str(e)) from e
    logger.bind(component=COMPONENT_BOARD).info(
        "board_snapshot_saved", path=str(path), cards=board.card_count
    )
