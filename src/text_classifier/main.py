"""
FastAPI application entry point for the Text Classifier Runtime.
"""

from pathlib import Path

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from text_classifier.api.error_handlers import EXCEPTION_HANDLERS
from text_classifier.api.middleware import RequestTracingMiddleware
from text_classifier.api.routes import router
from text_classifier.config import settings
from text_classifier.logging_config import configure_logging

# Configure structured logging before the app starts emitting events
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Text classification with an ONNX model: ranked label scores and summaries",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["classification"])


@app.on_event("startup")
async def startup():
    """Log configuration and report missing resources early."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        model_path=settings.MODEL_PATH,
        input_tensor=settings.INPUT_TENSOR_NAME,
        output_tensor=settings.OUTPUT_TENSOR_NAME,
        max_sequence_length=settings.MAX_SEQUENCE_LENGTH,
    )
    
    # The pipeline itself is loaded lazily by the first request or /health
    for name, path in (
        ("model", settings.MODEL_PATH),
        ("vocabulary", settings.VOCAB_PATH),
        ("label_map", settings.LABEL_MAP_PATH),
    ):
        if Path(path).is_file():
            logger.info("Resource found", resource=name, path=path)
        else:
            logger.error("Resource not found", resource=name, path=path)


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with service links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "classify": "/classify",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "text_classifier.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
