"""Metrics for card evaluation and aggregation."""

from collections import Counter
from threading import Lock


class StatusMetrics:
    """Collects metrics for status model computation.

    Provides thread-safe counters for:
    - cards_evaluated_total
    - cards_skipped_total{reason}
    - incidents_total{severity, closed}
    """

    _instance: "StatusMetrics | None" = None
    _lock = Lock()

    def __init__(self) -> None:
        """Initialize the metrics collector."""
        self._cards_evaluated = 0
        self._cards_skipped: Counter[str] = Counter()
        self._incidents: Counter[tuple[str, bool]] = Counter()
        self._lock = Lock()

    @classmethod
    def get_instance(cls) -> "StatusMetrics":
        """Get the singleton metrics instance.

        Returns:
            The shared StatusMetrics instance.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing)."""
        with cls._lock:
            cls._instance = None

    def record_card_evaluated(self) -> None:
        """Record that a card was evaluated."""
        with self._lock:
            self._cards_evaluated += 1

    def record_card_skipped(self, reason: str) -> None:
        """Record a card that produced no incident.

        Args:
            reason: Skip reason code.
        """
        with self._lock:
            self._cards_skipped[reason] += 1

    def record_incident(self, severity: str, closed: bool) -> None:
        """Record an incident.

        Args:
            severity: Symbolic severity name.
            closed: Whether the incident is resolved.
        """
        with self._lock:
            self._incidents[(severity, closed)] += 1

    def get_cards_evaluated_total(self) -> int:
        """Get the number of evaluated cards."""
        with self._lock:
            return self._cards_evaluated

    def get_cards_skipped_total(self) -> dict[str, int]:
        """Get skipped card counts.

        Returns:
            Dict mapping skip reason to count.
        """
        with self._lock:
            return dict(self._cards_skipped)

    def get_incidents_total(self) -> dict[tuple[str, bool], int]:
        """Get incident counts.

        Returns:
            Dict mapping (severity, closed) to count.
        """
        with self._lock:
            return dict(self._incidents)

    def reset(self) -> None:
        """Reset all metrics (for testing)."""
        with self._lock:
            self._cards_evaluated = 0
            self._cards_skipped.clear()
            self._incidents.clear()
