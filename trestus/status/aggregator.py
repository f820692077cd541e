"""Aggregation of evaluated cards into the status model."""

import copy
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

import structlog

from trestus.board.models import Board, CardList
from trestus.config.constants import COMPONENT_STATUS, OPERATIONAL_STATUS_TEXT
from trestus.status.classifier import LabelClassifier
from trestus.status.evaluator import CardEvaluator
from trestus.status.metrics import StatusMetrics
from trestus.status.models import (
    CardEvaluation,
    Incident,
    SeverityLevel,
    StatusModel,
    SystemStatus,
)
from trestus.status.text import TextRenderer


logger = structlog.get_logger()


class AggregationPolicy(str, Enum):
    """How the representative open incident of a service is chosen.

    - FIRST_WRITER: the first open incident processed sets the status
    - HIGHEST_SEVERITY: a later open incident replaces the status when it is
      more severe, or equally severe and created more recently
    """

    FIRST_WRITER = "first_writer"
    HIGHEST_SEVERITY = "highest_severity"


@dataclass(frozen=True)
class AggregationConfig:
    """Ordering and selection settings for aggregation.

    Attributes:
        list_priority: List names processed first, in this order, matched
            case-insensitively. Remaining lists follow in board order.
        policy: Representative incident policy.
    """

    list_priority: tuple[str, ...] = ()
    policy: AggregationPolicy = AggregationPolicy.FIRST_WRITER


@dataclass
class AggregationState:
    """Accumulator threaded through the fold.

    Attributes:
        incidents: Incidents in processing order.
        panels: Open incident services per severity.
        systems: Status per service set by open incidents.
        representatives: Incident that set each service's status.
    """

    incidents: list[Incident] = field(default_factory=list)
    panels: dict[SeverityLevel, list[str]] = field(default_factory=dict)
    systems: dict[str, SystemStatus] = field(default_factory=dict)
    representatives: dict[str, Incident] = field(default_factory=dict)


def order_lists(
    lists: Iterable[CardList], list_priority: Iterable[str]
) -> list[CardList]:
    """Order lists for processing.

    Args:
        lists: Lists in board order.
        list_priority: List names to process first.

    Returns:
        Prioritized lists first, then the others in board order.
    """
    remaining = list(lists)
    ordered: list[CardList] = []
    for wanted in list_priority:
        key = wanted.lower()
        ordered.extend(c for c in remaining if c.name.lower() == key)
        remaining = [c for c in remaining if c.name.lower() != key]
    return ordered + remaining


def _supersedes(candidate: Incident, current: Incident) -> bool:
    if candidate.severity != current.severity:
        return candidate.severity > current.severity
    return candidate.created_at > current.created_at


def apply_incident(
    state: AggregationState,
    incident: Incident,
    policy: AggregationPolicy = AggregationPolicy.FIRST_WRITER,
) -> None:
    """Fold one incident into the accumulator.

    Closed incidents are recorded but never touch panels or systems.

    Args:
        state: Accumulator to update.
        incident: Incident to add.
        policy: Representative incident policy.
    """
    state.incidents.append(incident)
    if incident.closed:
        return

    state.panels.setdefault(incident.severity, []).extend(incident.affected_services)

    for service in incident.affected_services:
        current = state.representatives.get(service)
        if current is not None:
            if policy == AggregationPolicy.FIRST_WRITER:
                continue
            if not _supersedes(incident, current):
                continue
        state.representatives[service] = incident
        state.systems[service] = SystemStatus(
            status_label_text=incident.list_name,
            severity=incident.severity,
        )


def fold(
    initial: AggregationState,
    evaluations: Iterable[CardEvaluation],
    policy: AggregationPolicy = AggregationPolicy.FIRST_WRITER,
) -> AggregationState:
    """Reduce card evaluations into a new accumulator.

    The initial state is copied, never modified.

    Args:
        initial: Starting accumulator.
        evaluations: Card evaluations in processing order.
        policy: Representative incident policy.

    Returns:
        The resulting accumulator.
    """
    state = copy.deepcopy(initial)
    for evaluation in evaluations:
        if evaluation.incident is not None:
            apply_incident(state, evaluation.incident, policy)
    return state


def backfill_operational(
    systems: dict[str, SystemStatus],
    service_names: Iterable[str],
) -> dict[str, SystemStatus]:
    """Mark services without an open incident as operational.

    Args:
        systems: Status set by open incidents.
        service_names: All service names on the board.

    Returns:
        New mapping with one entry per non-empty service name.
    """
    result = dict(systems)
    for name in service_names:
        if not name.strip() or name in result:
            continue
        result[name] = SystemStatus(
            status_label_text=OPERATIONAL_STATUS_TEXT,
            severity=SeverityLevel.NONE,
        )
    return result


class StatusAggregator:
    """Builds a StatusModel from a board snapshot.

    Cards are evaluated list by list (board order unless a list priority is
    configured), newest first within each list, as delivered by the board
    snapshot. The per-service status depends on that order.
    """

    def __init__(
        self,
        config: AggregationConfig | None = None,
        text_renderer: TextRenderer | None = None,
        metrics: StatusMetrics | None = None,
        run_id: str | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            config: Ordering and selection settings.
            text_renderer: Renderer for descriptions and comments.
            metrics: Optional metrics instance.
            run_id: Optional run identifier for logging.
        """
        self._config = config or AggregationConfig()
        self._text = text_renderer or TextRenderer()
        self._metrics = metrics or StatusMetrics.get_instance()
        self._log = logger.bind(component=COMPONENT_STATUS)
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    @property
    def config(self) -> AggregationConfig:
        """Aggregation settings in use."""
        return self._config

    def evaluate_board(
        self, board: Board, classifier: LabelClassifier
    ) -> Iterator[CardEvaluation]:
        """Evaluate every card of the board in processing order.

        Args:
            board: Board snapshot.
            classifier: Classified board labels.

        Yields:
            One CardEvaluation per card.
        """
        evaluator = CardEvaluator(classifier, self._text, self._metrics)
        for card_list in order_lists(board.lists, self._config.list_priority):
            for card in card_list.cards:
                yield evaluator.evaluate(card, card_list.name)

    def build(self, board: Board) -> StatusModel:
        """Build the status model for a board.

        Args:
            board: Board snapshot.

        Returns:
            The derived StatusModel.
        """
        classifier = LabelClassifier(board.labels)
        state = fold(
            AggregationState(),
            self.evaluate_board(board, classifier),
            self._config.policy,
        )
        systems = backfill_operational(state.systems, classifier.service_names)

        model = StatusModel(
            incidents=state.incidents,
            panels=state.panels,
            systems=systems,
        )

        self._log.info(
            "status_model_built",
            board_id=board.id,
            cards_total=board.card_count,
            incidents_total=len(model.incidents),
            open_incidents=len(model.open_incidents),
            services_total=len(model.systems),
            worst_severity=model.worst_severity.symbol,
            policy=self._config.policy.value,
        )
        return model


def build_status_model(
    board: Board,
    config: AggregationConfig | None = None,
) -> StatusModel:
    """Pure function API for building a status model.

    Args:
        board: Board snapshot.
        config: Optional ordering and selection settings.

    Returns:
        The derived StatusModel.
    """
    return StatusAggregator(config=config).build(board)
