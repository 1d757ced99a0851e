"""
API routes for text classification.

Classification runs in the threadpool so model inference never blocks the
event loop; the result (or the error) is returned once the call completes.
"""

from datetime import datetime
from typing import Callable

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from text_classifier.api.dependencies import (
    get_formatter,
    get_pipeline,
    get_pipeline_loader,
    get_settings,
)
from text_classifier.api.models import (
    ClassifyRequest,
    ClassifyResponse,
    HealthResponse,
    LabelsResponse,
    VersionResponse,
)
from text_classifier.config import Settings
from text_classifier.exceptions import ClassifierError
from text_classifier.formatting.formatter import ResultFormatter
from text_classifier.pipeline.classifier import ClassifierPipeline

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/classify",
    response_model=ClassifyResponse,
    status_code=status.HTTP_200_OK,
    summary="Classify a text",
    description="""
    Tokenize the text, run the model and return labels ranked by score.
    
    On any failure the response is an error body without predictions.
    """,
    responses={
        200: {"description": "Classification completed"},
        422: {"description": "Invalid request body"},
        502: {"description": "Model run failed or returned an unusable output"},
        503: {"description": "Model or resources unavailable"},
    },
)
async def classify_text(
    request: ClassifyRequest,
    pipeline: ClassifierPipeline = Depends(get_pipeline),
    formatter: ResultFormatter = Depends(get_formatter),
) -> ClassifyResponse:
    """
    Classify a single text.
    
    Args:
        request: Text and output options
        pipeline: Classification pipeline (injected)
        formatter: Summary formatter (injected)
    
    Returns:
        ClassifyResponse with ranked predictions
    """
    logger.info("Classification request received", text_length=len(request.text))
    
    result = await run_in_threadpool(pipeline.classify, request.text)
    best = result.best
    
    return ClassifyResponse(
        status="success",
        predictions=result.predictions,
        best_label=best.label if best else None,
        confidence=best.score if best else None,
        timing=result.timing if request.include_timing else None,
        summary=formatter.format(result) if request.include_summary else None,
    )


@router.get(
    "/labels",
    response_model=LabelsResponse,
    summary="List model labels",
)
async def list_labels(
    pipeline: ClassifierPipeline = Depends(get_pipeline),
) -> LabelsResponse:
    """Return the label set in class-index order."""
    return LabelsResponse(
        class_count=pipeline.label_map.class_count,
        labels=pipeline.label_map.ordered_labels(),
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "Pipeline loaded"},
        503: {"description": "Pipeline could not be loaded"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
    load_pipeline: Callable[[], ClassifierPipeline] = Depends(get_pipeline_loader),
) -> JSONResponse:
    """
    Report whether the pipeline (resources + model session) is ready.
    
    Loads the pipeline on first call; load errors are reported rather
    than raised.
    """
    services = {}
    
    try:
        await run_in_threadpool(load_pipeline)
        services["pipeline"] = "ok"
        health_status = "healthy"
        status_code = status.HTTP_200_OK
    except ClassifierError as e:
        services["pipeline"] = f"unavailable ({type(e).__name__}: {e.message})"
        health_status = "unhealthy"
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    
    logger.info("Health check", status=health_status, services=services)
    
    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services=services,
        timestamp=datetime.utcnow(),
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Get model and pipeline configuration",
)
async def get_version(
    pipeline: ClassifierPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
) -> VersionResponse:
    """Return version and tensor-contract information."""
    return VersionResponse(
        version=settings.APP_VERSION,
        model_path=settings.MODEL_PATH,
        input_tensor=pipeline.adapter.input_name,
        output_tensor=pipeline.adapter.output_name,
        max_sequence_length=pipeline.max_sequence_length,
        vocabulary_size=len(pipeline.vocabulary),
        class_count=pipeline.label_map.class_count,
        model_inputs=pipeline.adapter.input_names,
        model_outputs=pipeline.adapter.output_names,
    )
