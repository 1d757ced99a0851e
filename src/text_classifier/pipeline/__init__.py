"""
Classification pipeline.

Components:
- ClassifierPipeline: tokenize -> normalize -> infer -> decode/rank
- normalize_sequence: fixed-length padding/truncation
- decode_scores: score vector -> ranked predictions
"""

from text_classifier.pipeline.classifier import ClassifierPipeline
from text_classifier.pipeline.decoding import decode_scores
from text_classifier.pipeline.sequence import normalize_sequence

__all__ = [
    "ClassifierPipeline",
    "decode_scores",
    "normalize_sequence",
]
