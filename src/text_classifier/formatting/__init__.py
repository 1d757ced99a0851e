"""Result formatting."""

from text_classifier.formatting.formatter import (
    ResultFormatter,
    estimate_throughput,
    render_bar,
)

__all__ = ["ResultFormatter", "estimate_throughput", "render_bar"]
