"""
Result models produced by the classification pipeline.

All models are frozen: a result is created once per classification call,
handed to the presentation layer and discarded.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Prediction(BaseModel):
    """A single (label, score) pair decoded from the model output."""
    
    model_config = ConfigDict(frozen=True)
    
    label: str = Field(..., description="Human-readable class label ('Unknown' if unmapped)")
    score: float = Field(..., description="Raw model score for this class")
    index: int = Field(..., ge=0, description="Position of the score in the output tensor")


class TimingBreakdown(BaseModel):
    """
    Wall-clock durations of one classification call, in milliseconds.
    
    ``total_ms`` is always the sum of the three stages.
    """
    
    model_config = ConfigDict(frozen=True)
    
    preprocess_ms: float = Field(..., ge=0.0, description="Tokenize + normalize")
    inference_ms: float = Field(..., ge=0.0, description="Model invocation")
    postprocess_ms: float = Field(..., ge=0.0, description="Decode + rank")
    total_ms: float = Field(..., ge=0.0, description="Sum of all stages")
    
    @classmethod
    def from_stages(
        cls, preprocess_ms: float, inference_ms: float, postprocess_ms: float
    ) -> "TimingBreakdown":
        return cls(
            preprocess_ms=preprocess_ms,
            inference_ms=inference_ms,
            postprocess_ms=postprocess_ms,
            total_ms=preprocess_ms + inference_ms + postprocess_ms,
        )
    
    def share_of_total(self, stage_ms: float) -> float:
        """Percentage of the total spent in a stage (0.0 when total is zero)."""
        if self.total_ms <= 0:
            return 0.0
        return stage_ms / self.total_ms * 100.0


class ClassificationResult(BaseModel):
    """
    Ranked predictions for one input text.
    
    ``predictions`` is sorted by descending score; ties keep the order of
    the original class indices.
    """
    
    model_config = ConfigDict(frozen=True)
    
    text: str = Field(..., description="Input text as submitted")
    predictions: list[Prediction] = Field(default_factory=list)
    timing: Optional[TimingBreakdown] = Field(
        default=None,
        description="Per-stage timing (absent when timing is disabled)"
    )
    
    @property
    def best(self) -> Optional[Prediction]:
        """Top-ranked prediction, or None when nothing was decoded."""
        return self.predictions[0] if self.predictions else None
