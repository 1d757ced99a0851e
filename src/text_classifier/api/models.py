"""
API request and response models for the FastAPI endpoints.

These wrap the core result models with API-specific status fields.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from text_classifier.models.classification import Prediction, TimingBreakdown


class ClassifyRequest(BaseModel):
    """Request for the classify endpoint."""
    
    text: str = Field(
        description="Raw text to classify",
        examples=["this movie was really good"]
    )
    include_timing: bool = Field(
        default=True,
        description="Include the per-stage timing breakdown"
    )
    include_summary: bool = Field(
        default=True,
        description="Include the formatted text summary"
    )


class ClassifyResponse(BaseModel):
    """Response for the classify endpoint."""
    
    status: str = Field(
        description="Request status",
        examples=["success"]
    )
    predictions: list[Prediction] = Field(
        description="Labels ranked by descending score"
    )
    best_label: Optional[str] = Field(
        default=None,
        description="Top-ranked label (absent when no scores were decoded)"
    )
    confidence: Optional[float] = Field(
        default=None,
        description="Score of the top-ranked label"
    )
    timing: Optional[TimingBreakdown] = Field(
        default=None,
        description="Per-stage timing in milliseconds"
    )
    summary: Optional[str] = Field(
        default=None,
        description="Human-readable summary"
    )


class LabelsResponse(BaseModel):
    """Response for the labels endpoint."""
    
    class_count: int = Field(ge=0)
    labels: list[str] = Field(
        description="Labels in class-index order"
    )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(
        description="Overall health status",
        examples=["healthy", "unhealthy"]
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"]
    )
    services: dict[str, str] = Field(
        description="Component status",
        examples=[{"pipeline": "ok"}]
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp (UTC)"
    )


class VersionResponse(BaseModel):
    """Response for version info endpoint."""
    
    version: str
    model_path: str
    input_tensor: str
    output_tensor: str
    max_sequence_length: int
    vocabulary_size: int
    class_count: int
    model_inputs: list[str] = Field(default_factory=list)
    model_outputs: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response format. Never carries predictions."""
    
    error: str = Field(
        description="Error code",
        examples=["inference_failed", "model_unavailable", "resource_malformed"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[dict] = Field(
        default=None,
        description="Structured error context (stage, paths, ...)"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Error timestamp (UTC)"
    )
