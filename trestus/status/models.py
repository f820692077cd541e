"""Models for severity classification and the derived status model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum

from pydantic import Field, field_serializer

from trestus.data_model.base import StrictBaseModel


class SeverityLevel(IntEnum):
    """Incident severity, totally ordered from NONE to MAJOR_OUTAGE.

    Status labels name a level by its symbolic name (``DegradedPerformance``,
    ``MinorOutage``...), matched case-insensitively.
    """

    NONE = 0
    DEGRADED_PERFORMANCE = 1
    MINOR_OUTAGE = 2
    MAJOR_OUTAGE = 3

    @property
    def symbol(self) -> str:
        """Symbolic name as written on status labels."""
        return SEVERITY_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, text: str) -> "SeverityLevel | None":
        """Look up a level by symbolic name, ignoring case.

        Args:
            text: Candidate symbolic name, whitespace already removed.

        Returns:
            The matching level, or None when nothing matches.
        """
        return _SEVERITY_BY_SYMBOL.get(text.lower())


SEVERITY_SYMBOLS: dict[SeverityLevel, str] = {
    SeverityLevel.NONE: "None",
    SeverityLevel.DEGRADED_PERFORMANCE: "DegradedPerformance",
    SeverityLevel.MINOR_OUTAGE: "MinorOutage",
    SeverityLevel.MAJOR_OUTAGE: "MajorOutage",
}

_SEVERITY_BY_SYMBOL: dict[str, SeverityLevel] = {
    symbol.lower(): level for level, symbol in SEVERITY_SYMBOLS.items()
}


class LabelKind(str, Enum):
    """Outcome of reading a single label for severity.

    - PARSED: status label whose suffix names a severity
    - UNPARSEABLE: status label whose suffix names nothing known
    - NOT_STATUS: service label
    """

    PARSED = "parsed"
    UNPARSEABLE = "unparseable"
    NOT_STATUS = "not_status"


@dataclass(frozen=True)
class LabelReading:
    """Tri-state result of reading a label.

    Attributes:
        kind: What the label turned out to be.
        severity: Parsed severity, set only when kind is PARSED.
    """

    kind: LabelKind
    severity: SeverityLevel | None = None

    @classmethod
    def parsed(cls, severity: SeverityLevel) -> "LabelReading":
        """Build a reading for a recognized severity."""
        return cls(kind=LabelKind.PARSED, severity=severity)


UNPARSEABLE = LabelReading(kind=LabelKind.UNPARSEABLE)
NOT_A_STATUS_LABEL = LabelReading(kind=LabelKind.NOT_STATUS)


class SkipReason(str, Enum):
    """Why a card did not become an incident."""

    NO_SERVICES = "no_services"
    NO_SEVERITY = "no_severity"


class RenderedComment(StrictBaseModel):
    """A comment prepared for display.

    Attributes:
        author_initials: Display initials of the author.
        created_at: When the comment was posted.
        rendered_text: Display-safe HTML body.
    """

    author_initials: str = ""
    created_at: datetime | None = None
    rendered_text: str = ""


class Incident(StrictBaseModel):
    """A card that has a recognized severity and at least one service.

    Attributes:
        name: Card title.
        created_at: Card creation time.
        list_name: Name of the list holding the card.
        severity: Severity read from the card's status labels.
        closed: Whether the card sits in the fixed list.
        rendered_description: Display-safe HTML description.
        affected_services: Service names in card label order.
        comments: Rendered comments, oldest first.
    """

    name: str
    created_at: datetime
    list_name: str
    severity: SeverityLevel
    closed: bool = False
    rendered_description: str = ""
    affected_services: list[str] = Field(min_length=1)
    comments: list[RenderedComment] = Field(default_factory=list)

    @field_serializer("severity")
    def serialize_severity(self, severity: SeverityLevel) -> str:
        """Serialize severity by symbolic name."""
        return severity.symbol


class SystemStatus(StrictBaseModel):
    """Current status of one service.

    Attributes:
        status_label_text: List name of the representative open incident,
            or "Operational".
        severity: Severity of that incident, NONE when operational.
    """

    status_label_text: str
    severity: SeverityLevel = SeverityLevel.NONE

    @field_serializer("severity")
    def serialize_severity(self, severity: SeverityLevel) -> str:
        """Serialize severity by symbolic name."""
        return severity.symbol


@dataclass(frozen=True)
class CardEvaluation:
    """Decision reached for one card.

    Exactly one of ``incident`` and ``skip_reason`` is set.
    """

    card_id: str
    incident: Incident | None = None
    skip_reason: SkipReason | None = None

    @property
    def skipped(self) -> bool:
        """Whether the card produced no incident."""
        return self.incident is None


class StatusModel(StrictBaseModel):
    """Everything a renderer needs to draw the status page.

    Attributes:
        incidents: Incidents in processing order, open and closed.
        panels: Services affected by open incidents, per severity.
        systems: Current status per service name.
    """

    incidents: list[Incident] = Field(default_factory=list)
    panels: dict[SeverityLevel, list[str]] = Field(default_factory=dict)
    systems: dict[str, SystemStatus] = Field(default_factory=dict)

    @field_serializer("panels")
    def serialize_panels(
        self, panels: dict[SeverityLevel, list[str]]
    ) -> dict[str, list[str]]:
        """Key panels by symbolic severity name."""
        return {severity.symbol: list(names) for severity, names in panels.items()}

    @property
    def open_incidents(self) -> list[Incident]:
        """Incidents that are not closed."""
        return [incident for incident in self.incidents if not incident.closed]

    @property
    def closed_incidents(self) -> list[Incident]:
        """Incidents in the fixed list."""
        return [incident for incident in self.incidents if incident.closed]

    @property
    def worst_severity(self) -> SeverityLevel:
        """Highest severity across all services."""
        return max(
            (system.severity for system in self.systems.values()),
            default=SeverityLevel.NONE,
        )
