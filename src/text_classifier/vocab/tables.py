"""
Immutable lookup tables loaded from the JSON resources.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class Vocabulary:
    """
    Word -> token id table with a reserved out-of-vocabulary entry.
    
    Keys are used as loaded; the tokenizer lowercases words before lookup,
    so keys with uppercase letters never match. Lookups of absent words
    return the OOV id, or ``fallback_id`` when the table has no OOV entry.
    """
    
    token_ids: Mapping[str, int]
    oov_token: str = "<OOV>"
    fallback_id: int = 1
    
    def __post_init__(self) -> None:
        object.__setattr__(self, "token_ids", MappingProxyType(dict(self.token_ids)))
    
    @property
    def oov_id(self) -> int:
        return self.token_ids.get(self.oov_token, self.fallback_id)
    
    @property
    def has_oov_entry(self) -> bool:
        return self.oov_token in self.token_ids
    
    def lookup(self, word: str) -> int:
        return self.token_ids.get(word, self.oov_id)
    
    def __contains__(self, word: object) -> bool:
        return word in self.token_ids
    
    def __len__(self) -> int:
        return len(self.token_ids)


@dataclass(frozen=True)
class LabelMap:
    """
    Class index -> label table.
    
    Indices are expected to be contiguous (0..N-1). Gaps are tolerated:
    an unmapped index decodes as "Unknown".
    """
    
    labels: Mapping[int, str]
    _ordered: tuple[str, ...] = field(init=False, repr=False, compare=False)
    
    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))
        object.__setattr__(
            self, "_ordered", tuple(self.labels[i] for i in sorted(self.labels))
        )
    
    @property
    def class_count(self) -> int:
        return len(self.labels)
    
    @property
    def is_contiguous(self) -> bool:
        return set(self.labels) == set(range(len(self.labels)))
    
    def label_for(self, index: int, default: Optional[str] = UNKNOWN_LABEL) -> Optional[str]:
        return self.labels.get(index, default)
    
    def ordered_labels(self) -> list[str]:
        """Labels sorted by class index."""
        return list(self._ordered)
    
    def __len__(self) -> int:
        return len(self.labels)
