"""Custom Prometheus metrics for the Text Classifier Runtime.

Exposed at the /metrics endpoint alongside the HTTP instrumentation.
Alert rules worth configuring:
- classification_errors_total (model or resource failures)
- classification_stage_seconds (inference latency regressions)
"""

from prometheus_client import Counter, Histogram

# === Request Metrics ===

classifications_total = Counter(
    "classifications_total",
    "Total classification calls by outcome",
    ["status"],
)
"""
Classification calls counter.

Labels:
- status: success, error
"""

classification_errors_total = Counter(
    "classification_errors_total",
    "Classification failures by pipeline stage and error type",
    ["stage", "error_type"],
)
"""
Failures counter.

Labels:
- stage: preprocess, inference, postprocess
- error_type: InferenceError, ResourceError, ...
"""

# === Latency Metrics ===

classification_stage_seconds = Histogram(
    "classification_stage_seconds",
    "Classification latency per pipeline stage in seconds",
    ["stage"],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)
"""
Per-stage latency histogram.

Labels:
- stage: preprocess, inference, postprocess, total

Buckets target small on-device style models (sub-millisecond to 1s).
The 50ms/100ms buckets line up with the performance rating bands.
"""

# === Output Metrics ===

short_output_buffers_total = Counter(
    "short_output_buffers_total",
    "Model outputs that held fewer scores than there are labels",
)
