"""
onnxruntime adapter.

Loads an ONNX model into an ``onnxruntime.InferenceSession`` once and runs
it on the CPU execution provider for every classification call.
"""

from pathlib import Path
from typing import Any, Mapping, Optional

import numpy as np
import onnxruntime as ort
import structlog

from text_classifier.exceptions import InferenceError, ModelLoadError
from text_classifier.inference.base_adapter import BaseInferenceAdapter

logger = structlog.get_logger(__name__)


class OnnxRuntimeAdapter(BaseInferenceAdapter):
    """
    Inference adapter backed by onnxruntime.
    
    The session is created in the constructor; a missing or unloadable
    model raises ModelLoadError so the pipeline never reaches a ready
    state with a broken engine.
    """
    
    def __init__(
        self,
        model_path: str | Path,
        input_name: str = "input",
        output_name: str = "sequential",
        log_severity: int = 2,
        intra_op_threads: int = 0,
        providers: Optional[list[str]] = None,
    ):
        """
        Args:
            model_path: Path to the .onnx artifact
            input_name: Name of the token-id input tensor
            output_name: Name of the score output tensor
            log_severity: onnxruntime log severity (2 = warning)
            intra_op_threads: Intra-op thread count (0 = engine default)
            providers: Execution providers (default: CPU only)
        """
        super().__init__(input_name=input_name, output_name=output_name)
        self.model_path = Path(model_path)
        
        if not self.model_path.is_file():
            raise ModelLoadError(
                f"Model file not found: {self.model_path}",
                details={"model_path": str(self.model_path)},
            )
        
        session_options = ort.SessionOptions()
        session_options.log_severity_level = log_severity
        if intra_op_threads > 0:
            session_options.intra_op_num_threads = intra_op_threads
        
        try:
            self._session = ort.InferenceSession(
                str(self.model_path),
                sess_options=session_options,
                providers=providers or ["CPUExecutionProvider"],
            )
        except Exception as e:
            raise ModelLoadError(
                f"Failed to create inference session: {e}",
                details={
                    "model_path": str(self.model_path),
                    "error_type": type(e).__name__,
                },
            ) from e
        
        self._input_names = [node.name for node in self._session.get_inputs()]
        self._output_names = [node.name for node in self._session.get_outputs()]
        
        logger.info(
            "Model loaded",
            model_path=str(self.model_path),
            input_names=self._input_names,
            output_names=self._output_names,
        )
        if input_name not in self._input_names:
            logger.warning(
                "Configured input tensor not declared by model",
                input_name=input_name,
                input_names=self._input_names,
            )
        if output_name not in self._output_names:
            logger.warning(
                "Configured output tensor not declared by model",
                output_name=output_name,
                output_names=self._output_names,
            )
    
    @property
    def input_names(self) -> list[str]:
        return list(self._input_names)
    
    @property
    def output_names(self) -> list[str]:
        return list(self._output_names)
    
    def run(self, inputs: Mapping[str, np.ndarray]) -> Mapping[str, Any]:
        # onnxruntime rejects unknown output names outright; report them as absent
        if self.output_name not in self._output_names:
            return {}
        
        try:
            values = self._session.run([self.output_name], dict(inputs))
        except Exception as e:
            raise InferenceError(
                f"Model run failed: {e}",
                details={
                    "model_path": str(self.model_path),
                    "error_type": type(e).__name__,
                },
            ) from e
        
        return dict(zip([self.output_name], values))
    
    def close(self) -> None:
        super().close()
        self._session = None
