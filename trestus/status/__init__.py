"""Status classification and aggregation.

This module provides:
- SeverityLevel and the tri-state LabelReading for status labels
- LabelClassifier for splitting service and status labels
- CardEvaluator for turning one card into an Incident
- StatusAggregator and fold() for building the StatusModel
- TextRenderer for display-safe descriptions and comments
- Metrics for evaluation tracking
"""

from trestus.status.aggregator import (
    AggregationConfig,
    AggregationPolicy,
    AggregationState,
    StatusAggregator,
    build_status_model,
    fold,
)
from trestus.status.classifier import LabelClassifier
from trestus.status.evaluator import CardEvaluator
from trestus.status.models import (
    CardEvaluation,
    Incident,
    LabelKind,
    LabelReading,
    RenderedComment,
    SeverityLevel,
    SkipReason,
    StatusModel,
    SystemStatus,
)
from trestus.status.text import TextRenderer, to_display_label


__all__ = [
    "AggregationConfig",
    "AggregationPolicy",
    "AggregationState",
    "CardEvaluation",
    "CardEvaluator",
    "Incident",
    "LabelClassifier",
    "LabelKind",
    "LabelReading",
    "RenderedComment",
    "SeverityLevel",
    "SkipReason",
    "StatusAggregator",
    "StatusModel",
    "SystemStatus",
    "TextRenderer",
    "build_status_model",
    "fold",
    "to_display_label",
]
