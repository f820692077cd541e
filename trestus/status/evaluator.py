"""Per-card evaluation: severity, affected services and closed state."""

import structlog

from trestus.board.models import Card, Comment, LabelColor
from trestus.config.constants import COMPONENT_STATUS, FIXED_LIST_NAME
from trestus.status.classifier import LabelClassifier
from trestus.status.metrics import StatusMetrics
from trestus.status.models import (
    CardEvaluation,
    Incident,
    LabelKind,
    RenderedComment,
    SeverityLevel,
    SkipReason,
)
from trestus.status.text import TextRenderer


logger = structlog.get_logger()


def derive_initials(full_name: str) -> str:
    """Build initials from the first character of each name token."""
    return "".join(token[0] for token in full_name.split())


def resolve_initials(comment: Comment) -> str:
    """Return stored author initials, falling back to the full name."""
    if comment.author_initials:
        return comment.author_initials
    return derive_initials(comment.author_full_name)


def is_fixed_list(list_name: str) -> bool:
    """Check whether a list holds resolved incidents."""
    return list_name.lower() == FIXED_LIST_NAME


class CardEvaluator:
    """Turns a single card into an Incident or a skip decision.

    Severity scan rules, applied to the card's labels in order:
    - service labels are ignored
    - an unparseable status label ends the scan, keeping what was read so far
    - a red status label ends the scan right after its severity is taken
    - otherwise the last parsed status label wins
    """

    def __init__(
        self,
        classifier: LabelClassifier,
        text_renderer: TextRenderer | None = None,
        metrics: StatusMetrics | None = None,
    ) -> None:
        """Initialize the evaluator.

        Args:
            classifier: Labels of the board, already classified.
            text_renderer: Renderer for descriptions and comments.
            metrics: Optional metrics instance.
        """
        self._classifier = classifier
        self._text = text_renderer or TextRenderer()
        self._metrics = metrics or StatusMetrics.get_instance()
        self._log = logger.bind(component=COMPONENT_STATUS)

    def scan_severity(self, card: Card) -> SeverityLevel:
        """Determine the severity of a card from its status labels.

        Args:
            card: Card to scan.

        Returns:
            The severity, NONE when no status label contributed.
        """
        severity = SeverityLevel.NONE
        for label in card.labels:
            reading = self._classifier.read(label)
            if reading.kind == LabelKind.NOT_STATUS:
                continue
            if reading.kind == LabelKind.UNPARSEABLE or reading.severity is None:
                self._log.debug(
                    "status_label_unparseable",
                    card_id=card.id,
                    label=label.name,
                )
                break
            severity = reading.severity
            if label.color == LabelColor.RED:
                break
        return severity

    def affected_services(self, card: Card) -> list[str]:
        """Names of the card's service labels, in card order."""
        return [
            label.name
            for label in card.labels
            if self._classifier.is_known_service(label)
        ]

    def evaluate(self, card: Card, list_name: str) -> CardEvaluation:
        """Evaluate one card.

        Args:
            card: Card to evaluate.
            list_name: Name of the list holding the card.

        Returns:
            CardEvaluation carrying either an Incident or a skip reason.
        """
        self._metrics.record_card_evaluated()

        severity = self.scan_severity(card)
        services = self.affected_services(card)

        skip_reason: SkipReason | None = None
        if not services:
            skip_reason = SkipReason.NO_SERVICES
        elif severity == SeverityLevel.NONE:
            skip_reason = SkipReason.NO_SEVERITY

        if skip_reason is not None:
            self._metrics.record_card_skipped(skip_reason.value)
            self._log.debug(
                "card_skipped",
                card_id=card.id,
                list_name=list_name,
                reason=skip_reason.value,
            )
            return CardEvaluation(card_id=card.id, skip_reason=skip_reason)

        closed = is_fixed_list(list_name)
        incident = Incident(
            name=card.name,
            created_at=card.created_at,
            list_name=list_name,
            severity=severity,
            closed=closed,
            rendered_description=self._text.render(card.description),
            affected_services=services,
            comments=[self._render_comment(comment) for comment in card.comments],
        )
        self._metrics.record_incident(severity.symbol, closed)
        return CardEvaluation(card_id=card.id, incident=incident)

    def _render_comment(self, comment: Comment) -> RenderedComment:
        return RenderedComment(
            author_initials=resolve_initials(comment),
            created_at=comment.created_at,
            rendered_text=self._text.render(comment.text),
        )
