"""Board snapshot models and retrieval."""

from trestus.board.client import TrelloClient, creation_time_from_id
from trestus.board.models import Board, Card, CardList, Comment, Label, LabelColor
from trestus.board.snapshot import dump_board_snapshot, load_board_snapshot


__all__ = [
    "Board",
    "Card",
    "CardList",
    "Comment",
    "Label",
    "LabelColor",
    "TrelloClient",
    "creation_time_from_id",
    "dump_board_snapshot",
    "load_board_snapshot",
]
