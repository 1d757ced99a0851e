"""
Unit tests for the Text Classifier Runtime.

Test individual components in isolation:
- Vocabulary and label-map loading
- Tokenizer and sequence normalization
- Score decoding and the classification pipeline (fake adapter)
- Inference adapters (onnxruntime session mocked)
- Result formatting
- API dependencies and models
"""
