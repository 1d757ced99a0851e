"""Monitoring and metrics instrumentation for the classifier.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from text_classifier.monitoring.metrics import (
    classification_errors_total,
    classification_stage_seconds,
    classifications_total,
    short_output_buffers_total,
)

__all__ = [
    "classifications_total",
    "classification_errors_total",
    "classification_stage_seconds",
    "short_output_buffers_total",
]
