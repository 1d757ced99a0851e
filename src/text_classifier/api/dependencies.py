"""
FastAPI dependency injection for the classifier service.

The pipeline (vocabulary, label map, model session) and the formatter are
built once and shared across requests. Tests swap them out through
``app.dependency_overrides``.
"""

import threading
from functools import lru_cache
from typing import Callable

from text_classifier.config import Settings, settings
from text_classifier.formatting.formatter import ResultFormatter
from text_classifier.pipeline.classifier import ClassifierPipeline


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.
    
    Returns:
        Settings instance
    """
    return settings


_pipeline_lock = threading.Lock()


@lru_cache()
def load_pipeline() -> ClassifierPipeline:
    """
    Build the classification pipeline once and cache it.
    
    Construction failures (ModelLoadError, ResourceError, ParseError) are
    not cached by lru_cache, so a later request loads again once the
    resources are in place.
    
    Returns:
        Ready ClassifierPipeline
    """
    return ClassifierPipeline.from_settings(get_settings())


def get_pipeline() -> ClassifierPipeline:
    """
    Get the singleton classification pipeline.
    
    Concurrent first requests wait for a single build instead of each
    creating a model session.
    
    Returns:
        Ready ClassifierPipeline
    """
    with _pipeline_lock:
        return load_pipeline()


@lru_cache()
def get_formatter() -> ResultFormatter:
    """
    Get the singleton result formatter.
    
    Returns:
        ResultFormatter instance
    """
    current = get_settings()
    return ResultFormatter(
        bar_width=current.SCORE_BAR_WIDTH,
        excellent_below_ms=current.EXCELLENT_LATENCY_MS,
        good_below_ms=current.GOOD_LATENCY_MS,
    )


def get_pipeline_loader() -> Callable[[], ClassifierPipeline]:
    """
    Get the callable that loads the pipeline.
    
    The health check calls it itself so a load failure becomes a health
    status instead of an error response.
    """
    return get_pipeline
