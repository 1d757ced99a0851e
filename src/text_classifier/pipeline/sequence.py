"""
Fixed-length sequence normalization.
"""

from typing import Sequence


def normalize_sequence(token_ids: Sequence[int], length: int, pad_id: int = 0) -> list[int]:
    """
    Fit a token sequence to exactly ``length`` ids.
    
    Shorter sequences are right-padded with ``pad_id``; longer ones keep
    only their first ``length`` ids.
    
    Note:
        The default pad id 0 is not reserved in the vocabulary, so a 0 in
        the output means either padding or a real token with id 0.
    
    Examples:
        >>> normalize_sequence([3, 3], 5)
        [3, 3, 0, 0, 0]
        >>> normalize_sequence([1, 2, 3], 2)
        [1, 2]
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    
    ids = list(token_ids[:length])
    ids.extend([pad_id] * (length - len(ids)))
    return ids
