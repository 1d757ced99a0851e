"""
Vocabulary and label-map resources.

Components:
- VocabLoader: Parses the JSON resources into lookup tables
- Vocabulary: Word -> token id table with OOV handling
- LabelMap: Class index -> label table
"""

from text_classifier.vocab.loader import VocabLoader, parse_class_index
from text_classifier.vocab.tables import UNKNOWN_LABEL, LabelMap, Vocabulary

__all__ = [
    "VocabLoader",
    "Vocabulary",
    "LabelMap",
    "UNKNOWN_LABEL",
    "parse_class_index",
]
