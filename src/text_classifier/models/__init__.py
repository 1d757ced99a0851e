"""
Pydantic data models for the classifier.

Includes:
- Result models (Prediction, TimingBreakdown, ClassificationResult)
- Enums (PerformanceRating)
"""

from text_classifier.models.enums import PerformanceRating
from text_classifier.models.classification import (
    ClassificationResult,
    Prediction,
    TimingBreakdown,
)

__all__ = [
    "PerformanceRating",
    "Prediction",
    "TimingBreakdown",
    "ClassificationResult",
]
