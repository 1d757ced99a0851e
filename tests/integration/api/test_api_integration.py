"""
Integration tests for FastAPI application.

These tests use TestClient to exercise the full API (middleware, routes,
exception handlers) with the inference engine replaced by a fake adapter.
"""

import numpy as np
import pytest
from fastapi.testclient import TestClient

from text_classifier.exceptions import ModelLoadError
from text_classifier.main import app
from text_classifier.pipeline.classifier import ClassifierPipeline


def test_root_endpoint():
    """Test root endpoint returns service info."""
    response = TestClient(app).get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Text Classifier Runtime"
    assert data["status"] == "running"
    assert data["classify"] == "/classify"
    assert "docs" in data
    assert "health" in data


def test_classify_success(override_app, fake_pipeline):
    """Test classify returns ranked predictions, timing and summary."""
    client = override_app(pipeline=fake_pipeline)

    response = client.post("/classify", json={"text": "The movie was great"})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "success"
    assert [p["label"] for p in data["predictions"]] == ["positive", "negative", "neutral"]
    assert data["best_label"] == "positive"
    assert data["confidence"] == 0.75
    assert data["timing"]["total_ms"] >= 0
    assert "Prediction: positive (75.0% confidence)" in data["summary"]


def test_classify_without_timing_and_summary(override_app, fake_pipeline):
    """Test optional response sections can be turned off."""
    client = override_app(pipeline=fake_pipeline)

    response = client.post(
        "/classify",
        json={"text": "bad movie", "include_timing": False, "include_summary": False},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["timing"] is None
    assert data["summary"] is None
    assert len(data["predictions"]) == 3


def test_classify_invalid_request(override_app, fake_pipeline):
    """Test classify rejects a body without text."""
    client = override_app(pipeline=fake_pipeline)

    response = client.post("/classify", json={"invalid": "request"})

    assert response.status_code == 422
    assert "detail" in response.json()


def test_classify_missing_output_returns_502(override_app, test_settings, create_fake_adapter):
    """Test inference failure yields an error body without predictions."""
    adapter = create_fake_adapter(outputs={"dense": np.zeros((1, 3), dtype=np.float32)})
    pipeline = ClassifierPipeline.from_settings(test_settings, adapter=adapter)
    client = override_app(pipeline=pipeline)

    response = client.post("/classify", json={"text": "good"})

    assert response.status_code == 502
    data = response.json()
    assert data["error"] == "inference_failed"
    assert "Missing 'sequential' output" in data["message"]
    assert data["details"]["stage"] == "inference"
    assert "predictions" not in data


def test_classify_model_unavailable_returns_503(override_app):
    """Test a pipeline that cannot load yields 503."""

    def failing_loader():
        raise ModelLoadError(
            "Missing model or json files",
            details={"missing": {"model": "resources/model.onnx"}},
        )

    client = override_app(pipeline_loader=failing_loader)

    response = client.post("/classify", json={"text": "good"})

    assert response.status_code == 503
    data = response.json()
    assert data["error"] == "model_unavailable"
    assert data["message"] == "Missing model or json files"
    assert "predictions" not in data


def test_health_endpoint_healthy(override_app, fake_pipeline):
    """Test health check reports a loaded pipeline."""
    client = override_app(pipeline=fake_pipeline)

    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "0.1.0"
    assert data["services"] == {"pipeline": "ok"}
    assert "timestamp" in data


def test_health_endpoint_unhealthy(override_app, test_settings):
    """Test health check reports load failures instead of raising."""
    client = override_app(
        pipeline_loader=lambda: ClassifierPipeline.from_settings(test_settings)
    )

    response = client.get("/health")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["services"]["pipeline"].startswith("unavailable (ModelLoadError")


def test_labels_endpoint(override_app, fake_pipeline):
    """Test labels are listed in class-index order."""
    client = override_app(pipeline=fake_pipeline)

    response = client.get("/labels")

    assert response.status_code == 200
    assert response.json() == {
        "class_count": 3,
        "labels": ["negative", "positive", "neutral"],
    }


def test_version_endpoint(override_app, fake_pipeline):
    """Test version endpoint returns the tensor contract."""
    client = override_app(pipeline=fake_pipeline)

    response = client.get("/version")

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "0.1.0"
    assert data["input_tensor"] == "input"
    assert data["output_tensor"] == "sequential"
    assert data["max_sequence_length"] == 30
    assert data["vocabulary_size"] == 8
    assert data["class_count"] == 3


@pytest.mark.parametrize("incoming", [None, "req-123"])
def test_request_id_header(override_app, fake_pipeline, incoming):
    """Test every response carries a request id, reusing the caller's."""
    client = override_app(pipeline=fake_pipeline)
    headers = {"X-Request-ID": incoming} if incoming else {}

    response = client.get("/labels", headers=headers)

    request_id = response.headers["X-Request-ID"]
    if incoming:
        assert request_id == incoming
    else:
        assert request_id
    assert float(response.headers["X-Process-Time-Ms"]) >= 0


def test_malformed_request_id_is_replaced(override_app, fake_pipeline):
    """Test a caller-supplied id with illegal characters is not echoed."""
    client = override_app(pipeline=fake_pipeline)

    response = client.get("/labels", headers={"X-Request-ID": "bad id\twith spaces"})

    assert response.headers["X-Request-ID"] != "bad id\twith spaces"
    assert len(response.headers["X-Request-ID"]) == 36
