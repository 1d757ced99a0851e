"""
Word-level tokenizer matching the model's training-time preprocessing.

Text is lower-cased and split on the space character only. Runs of spaces
collapse (empty pieces are dropped), but tabs and newlines are NOT split
points: "hello\\tworld" stays one word and is looked up as-is.
"""

import structlog

from text_classifier.vocab.tables import Vocabulary

logger = structlog.get_logger(__name__)

WORD_DELIMITER = " "


def split_words(text: str) -> list[str]:
    """
    Lower-case and split text on single spaces, dropping empty pieces.
    
    Examples:
        >>> split_words("Good  Movie ")
        ['good', 'movie']
        >>> split_words("   ")
        []
    """
    return [word for word in text.lower().split(WORD_DELIMITER) if word]


class Tokenizer:
    """
    Map text to token ids through a Vocabulary.
    
    Output length equals the word count; fitting it to the model's input
    length is done by normalize_sequence().
    """
    
    def __init__(self, vocabulary: Vocabulary):
        self.vocabulary = vocabulary
    
    def tokenize(self, text: str) -> list[int]:
        """
        Tokenize text into ids. Unknown words map to the OOV id.
        
        Never raises; empty or all-space input yields an empty list.
        """
        words = split_words(text)
        token_ids = [self.vocabulary.lookup(word) for word in words]
        
        logger.debug(
            "Tokenized text",
            word_count=len(words),
            oov_count=sum(1 for word in words if word not in self.vocabulary),
        )
        return token_ids
