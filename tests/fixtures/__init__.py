"""
Test fixtures for the Text Classifier Runtime.

Contains sample resources:
- vocab.json: Small vocabulary with an <OOV> entry
- label_map.json: Three contiguous labels (negative, positive, neutral)
- label_map_with_gap.json: Non-contiguous indices plus a non-integer key
- vocab_wrong_shape.json: Valid JSON with a string token id
- vocab_truncated.json: Malformed JSON
"""
