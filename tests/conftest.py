"""Shared test fixtures and configuration for all tests.

Provides settings pointing at the fixture resources, ready-made lookup
tables, and a fake inference adapter that stands in for onnxruntime.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import numpy as np
import pytest

from text_classifier.config import Settings
from text_classifier.inference.base_adapter import BaseInferenceAdapter
from text_classifier.vocab.tables import LabelMap, Vocabulary

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeInferenceAdapter(BaseInferenceAdapter):
    """Adapter returning canned scores and recording every input tensor."""
    
    def __init__(
        self,
        scores: Optional[Sequence[float]] = None,
        outputs: Optional[Mapping[str, Any]] = None,
        input_name: str = "input",
        output_name: str = "sequential",
    ):
        super().__init__(input_name=input_name, output_name=output_name)
        self.scores = scores if scores is not None else []
        self.outputs = outputs
        self.calls: list[dict[str, np.ndarray]] = []
    
    def run(self, inputs: Mapping[str, np.ndarray]) -> Mapping[str, Any]:
        self.calls.append({name: tensor.copy() for name, tensor in inputs.items()})
        if self.outputs is not None:
            return self.outputs
        return {self.output_name: np.asarray([self.scores], dtype=np.float32)}


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings wired to the fixture resources.
    
    MODEL_PATH points at a file that does not exist; tests that need a
    model inject a fake adapter instead.
    """
    return Settings(
        APP_NAME="Text Classifier Runtime (Test)",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        MODEL_PATH=str(tmp_path / "missing_model.onnx"),
        VOCAB_PATH=str(FIXTURES_DIR / "vocab.json"),
        LABEL_MAP_PATH=str(FIXTURES_DIR / "label_map.json"),
        MAX_SEQUENCE_LENGTH=30,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def vocabulary() -> Vocabulary:
    """Vocabulary matching fixtures/vocab.json."""
    return Vocabulary(
        {
            "<OOV>": 1,
            "the": 2,
            "good": 3,
            "bad": 4,
            "movie": 5,
            "was": 6,
            "great": 7,
            "terrible": 8,
        }
    )


@pytest.fixture
def label_map() -> LabelMap:
    """LabelMap matching fixtures/label_map.json."""
    return LabelMap({0: "negative", 1: "positive", 2: "neutral"})


@pytest.fixture
def create_fake_adapter():
    """Factory fixture for FakeInferenceAdapter.
    
    Usage:
        def test_something(create_fake_adapter):
            adapter = create_fake_adapter(scores=[0.25, 0.75])
            broken = create_fake_adapter(outputs={})
    """
    def _create(
        scores: Optional[Sequence[float]] = None,
        outputs: Optional[Mapping[str, Any]] = None,
        **kwargs,
    ) -> FakeInferenceAdapter:
        return FakeInferenceAdapter(scores=scores, outputs=outputs, **kwargs)
    
    return _create
