"""Board snapshot models: labels, cards, comments and lists.

These models describe one materialized board as delivered by the retrieval
client or read from a snapshot file. They are immutable; the status engine
only reads them.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from trestus.data_model.base import StrictBaseModel


class LabelColor(str, Enum):
    """Trello label colors."""

    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"
    PURPLE = "purple"
    BLUE = "blue"
    SKY = "sky"
    LIME = "lime"
    PINK = "pink"
    BLACK = "black"
    GREEN_DARK = "green_dark"
    YELLOW_DARK = "yellow_dark"
    ORANGE_DARK = "orange_dark"
    RED_DARK = "red_dark"
    PURPLE_DARK = "purple_dark"
    BLUE_DARK = "blue_dark"
    SKY_DARK = "sky_dark"
    LIME_DARK = "lime_dark"
    PINK_DARK = "pink_dark"
    BLACK_DARK = "black_dark"
    GREEN_LIGHT = "green_light"
    YELLOW_LIGHT = "yellow_light"
    ORANGE_LIGHT = "orange_light"
    RED_LIGHT = "red_light"
    PURPLE_LIGHT = "purple_light"
    BLUE_LIGHT = "blue_light"
    SKY_LIGHT = "sky_light"
    LIME_LIGHT = "lime_light"
    PINK_LIGHT = "pink_light"
    BLACK_LIGHT = "black_light"


_KNOWN_COLORS = {color.value for color in LabelColor}


class Label(StrictBaseModel):
    """A board label.

    Attributes:
        id: Label identifier, unique within a board.
        name: Label text. Unnamed Trello labels have an empty name.
        color: Label color, None when uncolored or unknown.
    """

    id: str = Field(min_length=1)
    name: str = ""
    color: LabelColor | None = None

    @field_validator("name", mode="before")
    @classmethod
    def coerce_missing_name(cls, v: object) -> object:
        """Treat a null name as empty."""
        return "" if v is None else v

    @field_validator("color", mode="before")
    @classmethod
    def drop_unknown_color(cls, v: object) -> object:
        """Tolerate colors this enumeration does not know."""
        if isinstance(v, LabelColor):
            return v
        if isinstance(v, str) and v.lower() in _KNOWN_COLORS:
            return v.lower()
        return None


class Comment(StrictBaseModel):
    """A comment on a card.

    Attributes:
        author_full_name: Full name of the comment author.
        author_initials: Stored initials of the author, if any.
        created_at: When the comment was posted.
        text: Raw comment body.
    """

    author_full_name: str = ""
    author_initials: str | None = None
    created_at: datetime | None = None
    text: str = ""


class Card(StrictBaseModel):
    """A card on the board.

    Attributes:
        id: Card identifier.
        name: Card title.
        created_at: When the card was created.
        description: Raw card description.
        labels: Labels attached to the card, in card order.
        comments: Comments on the card, oldest first.
    """

    id: str = Field(min_length=1)
    name: str = ""
    created_at: datetime
    description: str | None = None
    labels: list[Label] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)


class CardList(StrictBaseModel):
    """A list (column) on the board.

    Attributes:
        name: List name, also used as the status text of open incidents.
        cards: Cards in the list, newest first.
    """

    id: str = ""
    name: str = ""
    cards: list[Card] = Field(default_factory=list)

    def newest_first(self) -> "CardList":
        """Return a copy with cards ordered by descending creation time."""
        ordered = sorted(self.cards, key=lambda c: c.created_at, reverse=True)
        return self.model_copy(update={"cards": ordered})


class Board(StrictBaseModel):
    """One materialized board snapshot.

    Attributes:
        id: Board identifier.
        name: Board name.
        labels: All labels defined on the board.
        lists: Lists in board order.
    """

    id: str = ""
    name: str = ""
    labels: list[Label] = Field(default_factory=list)
    lists: list[CardList] = Field(default_factory=list)

    @property
    def card_count(self) -> int:
        """Total number of cards across all lists."""
        return sum(len(card_list.cards) for card_list in self.lists)
