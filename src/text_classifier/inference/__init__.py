"""
Inference adapters.

Components:
- BaseInferenceAdapter: Tensor contract, call serialization, output checks
- OnnxRuntimeAdapter: onnxruntime implementation
"""

from text_classifier.inference.base_adapter import BaseInferenceAdapter
from text_classifier.inference.onnx_adapter import OnnxRuntimeAdapter

__all__ = [
    "BaseInferenceAdapter",
    "OnnxRuntimeAdapter",
]
