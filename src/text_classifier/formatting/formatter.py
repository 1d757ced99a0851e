"""
Human-readable summaries of classification results.

The summary has up to three sections:
- best label with its confidence percentage
- one bar per label, scaled to the score
- timing per stage, throughput estimate and a performance rating
"""

import math
from pathlib import Path
from typing import Optional

import structlog
from jinja2 import Environment, FileSystemLoader

from text_classifier.models.classification import ClassificationResult, TimingBreakdown
from text_classifier.models.enums import PerformanceRating

logger = structlog.get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
SUMMARY_TEMPLATE = "summary.txt.j2"

BAR_FILLED = "█"
BAR_EMPTY = "░"


def render_bar(score: float, width: int = 20) -> str:
    """
    Draw a fixed-width bar for a score in [0, 1].
    
    Scores outside the range are clamped; NaN draws an empty bar.
    
    Examples:
        >>> render_bar(0.5, width=4)
        '██░░'
    """
    if math.isnan(score):
        return BAR_EMPTY * width
    fraction = min(max(score, 0.0), 1.0)
    filled = round(fraction * width)
    return BAR_FILLED * filled + BAR_EMPTY * (width - filled)


def estimate_throughput(total_ms: float) -> Optional[float]:
    """Classifications per second at the given latency (None if unmeasurable)."""
    if total_ms <= 0:
        return None
    return 1000.0 / total_ms


class ResultFormatter:
    """
    Render ClassificationResult objects as multi-line text summaries.
    
    Formatting never fails: a result without predictions or timing simply
    renders fewer sections.
    """
    
    def __init__(
        self,
        bar_width: int = 20,
        excellent_below_ms: float = 50.0,
        good_below_ms: float = 100.0,
        templates_dir: Path = TEMPLATES_DIR,
    ):
        """
        Args:
            bar_width: Characters per score bar
            excellent_below_ms: Upper bound of the "excellent" latency band
            good_below_ms: Upper bound of the "good" latency band
            templates_dir: Directory holding the summary template
        """
        self.bar_width = bar_width
        self.excellent_below_ms = excellent_below_ms
        self.good_below_ms = good_below_ms
        
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # Plain text output
            keep_trailing_newline=True,
        )
        self.template = self.jinja_env.get_template(SUMMARY_TEMPLATE)
    
    def rate(self, timing: TimingBreakdown) -> PerformanceRating:
        return PerformanceRating.from_latency(
            timing.total_ms,
            excellent_below_ms=self.excellent_below_ms,
            good_below_ms=self.good_below_ms,
        )
    
    def describe_throughput(self, total_ms: float) -> str:
        throughput = estimate_throughput(total_ms)
        if throughput is None:
            return "n/a"
        return f"~{throughput:.1f} classifications/s"
    
    def rating_band(self, rating: PerformanceRating) -> str:
        if rating is PerformanceRating.EXCELLENT:
            return f"< {self.excellent_below_ms:g} ms"
        if rating is PerformanceRating.GOOD:
            return f"< {self.good_below_ms:g} ms"
        return f">= {self.good_below_ms:g} ms"
    
    def format(
        self,
        result: ClassificationResult,
        timing: Optional[TimingBreakdown] = None,
    ) -> str:
        """
        Build the summary for one result.
        
        Args:
            result: Ranked predictions and input text
            timing: Timing to report; defaults to ``result.timing``
        
        Returns:
            Multi-line summary string
        """
        timing = timing or result.timing
        best = result.best
        
        rows = [
            {
                "label": prediction.label,
                "bar": render_bar(prediction.score, self.bar_width),
                "percent": prediction.score * 100.0,
            }
            for prediction in result.predictions
        ]
        
        context = {
            "text": result.text,
            "best": best,
            "confidence": best.score * 100.0 if best else 0.0,
            "rows": rows,
            "label_width": max((len(row["label"]) for row in rows), default=0),
            "timing": timing,
        }
        
        if timing is not None:
            rating = self.rate(timing)
            context.update(
                stages=[
                    {
                        "name": "Tokenize + normalize",
                        "ms": timing.preprocess_ms,
                        "percent": timing.share_of_total(timing.preprocess_ms),
                    },
                    {
                        "name": "Inference",
                        "ms": timing.inference_ms,
                        "percent": timing.share_of_total(timing.inference_ms),
                    },
                    {
                        "name": "Decode + rank",
                        "ms": timing.postprocess_ms,
                        "percent": timing.share_of_total(timing.postprocess_ms),
                    },
                ],
                throughput=self.describe_throughput(timing.total_ms),
                rating=rating,
                rating_band=self.rating_band(rating),
            )
        
        return self.template.render(**context)
