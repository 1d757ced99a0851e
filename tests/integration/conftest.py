"""Integration test fixtures (app wiring and prerequisites).

The API tests run the real FastAPI app with the pipeline dependency
overridden. Tests that need a real ONNX model are skipped unless one is
available.
"""

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from text_classifier.api.dependencies import (
    get_pipeline,
    get_pipeline_loader,
    get_settings,
)
from text_classifier.main import app
from text_classifier.pipeline.classifier import ClassifierPipeline

MODEL_ENV_VAR = "TEXT_CLASSIFIER_TEST_MODEL"


@pytest.fixture
def fake_pipeline(test_settings, create_fake_adapter) -> ClassifierPipeline:
    """Pipeline over the fixture resources with a canned-score adapter."""
    return ClassifierPipeline.from_settings(
        test_settings,
        adapter=create_fake_adapter(scores=[0.125, 0.75, 0.125]),
    )


@pytest.fixture
def override_app(test_settings):
    """Install dependency overrides on the app; removed after the test.

    Usage:
        def test_something(override_app, fake_pipeline):
            client = override_app(pipeline=fake_pipeline)
    """

    def _override(pipeline=None, pipeline_loader=None) -> TestClient:
        app.dependency_overrides[get_settings] = lambda: test_settings
        if pipeline is not None:
            app.dependency_overrides[get_pipeline] = lambda: pipeline
            app.dependency_overrides[get_pipeline_loader] = lambda: (lambda: pipeline)
        if pipeline_loader is not None:
            app.dependency_overrides[get_pipeline] = pipeline_loader
            app.dependency_overrides[get_pipeline_loader] = lambda: pipeline_loader
        return TestClient(app)

    yield _override
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def check_model_artifact() -> Path:
    """Locate a real ONNX model for end-to-end tests.

    Uses $TEXT_CLASSIFIER_TEST_MODEL, else resources/model.onnx. Skips
    tests if the file does not exist.
    """
    path = Path(os.environ.get(MODEL_ENV_VAR, "resources/model.onnx"))
    if not path.is_file():
        pytest.skip(f"ONNX model not available at {path}")
    return path


@pytest.fixture
def integration_settings(test_settings, check_model_artifact, fixtures_dir):
    """Settings pointing at the real model and the fixture resources.

    Resource paths can be redirected with TEXT_CLASSIFIER_TEST_VOCAB and
    TEXT_CLASSIFIER_TEST_LABEL_MAP to match the model under test.
    """
    test_settings.MODEL_PATH = str(check_model_artifact)
    test_settings.VOCAB_PATH = os.environ.get(
        "TEXT_CLASSIFIER_TEST_VOCAB", str(fixtures_dir / "vocab.json")
    )
    test_settings.LABEL_MAP_PATH = os.environ.get(
        "TEXT_CLASSIFIER_TEST_LABEL_MAP", str(fixtures_dir / "label_map.json")
    )
    return test_settings
