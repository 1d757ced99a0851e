"""Text tokenization."""

from text_classifier.tokenization.tokenizer import Tokenizer, split_words

__all__ = ["Tokenizer", "split_words"]
