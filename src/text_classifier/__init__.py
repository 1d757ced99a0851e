"""
Text Classifier Runtime.

Turns raw text into ranked label probabilities using a pre-trained ONNX model:
- Vocabulary and label-map loading (JSON resources)
- Space-delimited tokenization into a fixed-length int32 sequence
- Inference through onnxruntime behind a swappable adapter
- Ranking and human-readable summaries of the output scores

Architecture: FastAPI presentation layer + ClassifierPipeline + ONNX adapter
"""

__version__ = "0.1.0"
