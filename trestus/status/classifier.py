"""Label classification: service labels versus status labels."""

from collections.abc import Iterable

from trestus.board.models import Label
from trestus.config.constants import STATUS_PREFIX
from trestus.status.models import (
    NOT_A_STATUS_LABEL,
    UNPARSEABLE,
    LabelReading,
    SeverityLevel,
)


def is_status_label(label: Label) -> bool:
    """Check whether a label encodes a severity."""
    return label.name.startswith(STATUS_PREFIX)


def is_service_label(label: Label) -> bool:
    """Check whether a label names a service."""
    return not is_status_label(label)


def parse_severity(label: Label) -> SeverityLevel | None:
    """Parse a status label's severity.

    The prefix is stripped and all whitespace removed before a
    case-insensitive match against the severity names, so
    ``"status: Minor Outage"`` reads as MINOR_OUTAGE.

    Args:
        label: A status label.

    Returns:
        The parsed severity, or None if the suffix names no severity.
        Note that SeverityLevel.NONE is a valid parse result.
    """
    suffix = label.name[len(STATUS_PREFIX) :]
    return SeverityLevel.from_symbol("".join(suffix.split()))


def read_label(label: Label) -> LabelReading:
    """Read a label into a tri-state result."""
    if not is_status_label(label):
        return NOT_A_STATUS_LABEL
    severity = parse_severity(label)
    if severity is None:
        return UNPARSEABLE
    return LabelReading.parsed(severity)


class LabelClassifier:
    """Partitions a board's labels into service and status labels.

    Service labels with a blank name are kept in ``service_labels`` but are
    not treated as services: their ids are left out of ``service_ids``.
    """

    def __init__(self, labels: Iterable[Label]) -> None:
        """Classify the board labels.

        Args:
            labels: All labels defined on the board.
        """
        self.service_labels: list[Label] = []
        self.status_labels: list[Label] = []
        for label in labels:
            if is_service_label(label):
                self.service_labels.append(label)
            else:
                self.status_labels.append(label)

        self.service_ids: frozenset[str] = frozenset(
            label.id for label in self.service_labels if label.name.strip()
        )

    @property
    def service_names(self) -> list[str]:
        """Distinct non-empty service names in board order."""
        return list(
            dict.fromkeys(
                label.name for label in self.service_labels if label.name.strip()
            )
        )

    def is_service_label(self, label: Label) -> bool:
        """Check whether a label names a service."""
        return is_service_label(label)

    def parse_severity(self, label: Label) -> SeverityLevel | None:
        """Parse a status label's severity."""
        return parse_severity(label)

    def read(self, label: Label) -> LabelReading:
        """Read a label into a tri-state result."""
        return read_label(label)

    def is_known_service(self, label: Label) -> bool:
        """Check whether a card label refers to a board service label."""
        return label.id in self.service_ids
