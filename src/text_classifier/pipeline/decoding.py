"""
Score decoding: ScoreVector + LabelMap -> ranked predictions.
"""

import math
from typing import Sequence

from text_classifier.models.classification import Prediction
from text_classifier.vocab.tables import LabelMap


def decode_scores(scores: Sequence[float], label_map: LabelMap) -> list[Prediction]:
    """
    Pair each score with its label by position and rank by score.
    
    Only the first ``label_map.class_count`` scores are decoded. Indices
    missing from the label map get the "Unknown" label. The sort is stable,
    so equal scores keep their class-index order. NaN scores rank last.
    
    Examples:
        >>> ranked = decode_scores([0.2, 0.8], LabelMap({0: "negative", 1: "positive"}))
        >>> [(p.label, p.score) for p in ranked]
        [('positive', 0.8), ('negative', 0.2)]
    """
    predictions = [
        Prediction(label=label_map.label_for(index), score=float(score), index=index)
        for index, score in enumerate(scores[: label_map.class_count])
    ]
    return sorted(predictions, key=_rank_key)


def _rank_key(prediction: Prediction) -> tuple[bool, float]:
    # NaN compares false against everything, so it gets its own bucket
    if math.isnan(prediction.score):
        return (True, 0.0)
    return (False, -prediction.score)
