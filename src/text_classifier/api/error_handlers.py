"""
FastAPI exception handlers for structured error responses.

Maps classifier exceptions to HTTP status codes. Error bodies never carry
predictions, so clients always drop any stale result on failure.
"""

from datetime import datetime

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

from text_classifier.exceptions import (
    ClassifierError,
    InferenceError,
    ModelLoadError,
    ParseError,
    ResourceError,
)

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, error: str, exc: ClassifierError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": exc.message,
            "details": exc.details,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


async def model_unavailable_handler(request: Request, exc: ClassifierError) -> JSONResponse:
    """
    Handle ModelLoadError and ResourceError.
    
    Maps to 503 Service Unavailable (the pipeline is not ready).
    """
    logger.error(
        "Classifier unavailable",
        error_type=type(exc).__name__,
        details=exc.details,
    )
    return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "model_unavailable", exc)


async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
    """
    Handle ParseError (malformed vocabulary or label map).
    
    Maps to 500 Internal Server Error (deployment problem, not client input).
    """
    logger.error("Classifier resources malformed", details=exc.details)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "resource_malformed", exc
    )


async def inference_error_handler(request: Request, exc: InferenceError) -> JSONResponse:
    """
    Handle InferenceError (engine run failed or output unusable).
    
    Maps to 502 Bad Gateway (the engine is an upstream dependency).
    """
    logger.error("Inference failed", details=exc.details)
    return _error_response(status.HTTP_502_BAD_GATEWAY, "inference_failed", exc)


async def classifier_error_handler(request: Request, exc: ClassifierError) -> JSONResponse:
    """Fallback for ClassifierError subclasses without a dedicated handler."""
    logger.error("Classifier error", error_type=type(exc).__name__, details=exc.details)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "classifier_error", exc
    )


EXCEPTION_HANDLERS = {
    ModelLoadError: model_unavailable_handler,
    ResourceError: model_unavailable_handler,
    ParseError: parse_error_handler,
    InferenceError: inference_error_handler,
    ClassifierError: classifier_error_handler,
}
