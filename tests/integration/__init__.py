"""
Integration tests for the Text Classifier Runtime.

Exercise the FastAPI app end to end with fixture resources, and the
onnxruntime adapter against a real model artifact when one is available.
"""
