"""
Abstract base adapter for model execution engines.

The adapter owns the tensor contract between the pipeline and the engine:
- in:  int32 tensor of shape [1, L] under a fixed input name
- out: float32 scores read from a fixed output name, one per class

Concrete adapters only implement ``run`` (the raw engine call). Shaping,
call serialization and output-buffer checks live here, so test doubles get
the same contract as the real engine.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

import numpy as np
import structlog

from text_classifier.exceptions import InferenceError

logger = structlog.get_logger(__name__)

FLOAT32_SIZE = np.dtype(np.float32).itemsize
INT32_RANGE = np.iinfo(np.int32)
# Floats, signed and unsigned integers, booleans
NUMERIC_DTYPE_KINDS = "fiub"


class BaseInferenceAdapter(ABC):
    """
    Abstract base class for inference adapters.
    
    Responsibilities:
    - Shape token ids into the engine's input tensor
    - Serialize calls through the shared engine handle
    - Reinterpret the named output buffer as float32 scores
    
    Does NOT handle:
    - Tokenization or padding (that's the pipeline's job)
    - Mapping scores to labels (that's decoding's job)
    """
    
    def __init__(self, input_name: str = "input", output_name: str = "sequential"):
        """
        Args:
            input_name: Name of the model's token-id input tensor
            output_name: Name of the model's score output tensor
        """
        self.input_name = input_name
        self.output_name = output_name
        # Engines are not assumed to be safe for concurrent runs on one handle
        self._lock = threading.Lock()
        
        logger.info(
            "Initialized inference adapter",
            adapter_class=self.__class__.__name__,
            input_name=input_name,
            output_name=output_name,
        )
    
    @abstractmethod
    def run(self, inputs: Mapping[str, np.ndarray]) -> Mapping[str, Any]:
        """
        Execute the model once.
        
        Args:
            inputs: Input tensors keyed by name
        
        Returns:
            Output values keyed by tensor name. A missing key means the
            engine did not produce that output.
        
        Raises:
            InferenceError: The engine failed during the run
        """
        pass
    
    @property
    def input_names(self) -> list[str]:
        """Input tensor names declared by the model (if known)."""
        return [self.input_name]
    
    @property
    def output_names(self) -> list[str]:
        """Output tensor names declared by the model (if known)."""
        return [self.output_name]
    
    def build_input_tensor(self, token_ids: Sequence[int]) -> np.ndarray:
        """
        Shape a token sequence as an int32 [1, L] tensor.
        
        Raises:
            InferenceError: A token id does not fit in int32
        """
        try:
            ids = np.asarray(token_ids, dtype=np.int64)
        except OverflowError as e:
            raise InferenceError(
                "Token id out of int32 range", details={"error": str(e)}
            ) from e
        
        if ids.size and (ids.min() < INT32_RANGE.min or ids.max() > INT32_RANGE.max):
            raise InferenceError(
                "Token id out of int32 range",
                details={"min_id": int(ids.min()), "max_id": int(ids.max())},
            )
        return ids.astype(np.int32).reshape(1, len(token_ids))
    
    def predict_scores(self, token_ids: Sequence[int], class_count: int) -> list[float]:
        """
        Run the model on one token sequence and return its scores.
        
        Args:
            token_ids: Normalized token sequence of length L
            class_count: Number of labels; the score buffer is cut to this
        
        Returns:
            Up to ``class_count`` float scores, by output position. Fewer
            are returned when the engine's buffer is shorter.
        
        Raises:
            InferenceError: Token id out of range, or output tensor missing
                or not a numeric buffer
        """
        tensor = self.build_input_tensor(token_ids)
        
        with self._lock:
            outputs = self.run({self.input_name: tensor})
        
        if self.output_name not in outputs:
            raise InferenceError(
                f"Missing '{self.output_name}' output",
                details={
                    "output_name": self.output_name,
                    "available_outputs": sorted(outputs),
                },
            )
        
        scores = self._read_float32_buffer(outputs[self.output_name])
        return [float(score) for score in scores[:class_count]]
    
    def _read_float32_buffer(self, value: Any) -> np.ndarray:
        if isinstance(value, np.ndarray):
            # String and object arrays hold text or pointers, not numbers
            if value.dtype.kind not in NUMERIC_DTYPE_KINDS:
                raise InferenceError(
                    "Output is not a numeric buffer",
                    details={"output_name": self.output_name, "dtype": str(value.dtype)},
                )
            value = np.ascontiguousarray(value)
        
        try:
            raw = memoryview(value).cast("B")
        except TypeError as e:
            raise InferenceError(
                "Output is not a byte-addressable buffer",
                details={
                    "output_name": self.output_name,
                    "value_type": type(value).__name__,
                },
            ) from e
        
        if raw.nbytes % FLOAT32_SIZE:
            raise InferenceError(
                "Output buffer length is not a whole number of float32 values",
                details={"output_name": self.output_name, "byte_length": raw.nbytes},
            )
        
        return np.frombuffer(raw, dtype=np.float32)
    
    def close(self) -> None:
        """Release engine resources. Default implementation does nothing."""
        logger.debug("Closing inference adapter", adapter_class=self.__class__.__name__)
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"input_name={self.input_name}, "
            f"output_name={self.output_name})"
        )
