import pytest
from fastapi.testclient import TestClient

from main import create_app
from optimizer.errors import GenerationError
from optimizer.gateway import OptimizationGateway
from optimizer.nodes import build_prompt


class EchoGenerator:
    def __init__(self):
        self.calls = []

    def generate(self, prompt):
        self.calls.append(prompt)
        return prompt


class FailingGenerator:
    def __init__(self):
        self.calls = 0

    def generate(self, prompt):
        self.calls += 1
        raise GenerationError("upstream exploded: api key sk-secret-123")


def make_client(generator):
    return TestClient(create_app(OptimizationGateway(generator)))


def test_health():
    client = make_client(EchoGenerator())
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_optimize_returns_generated_text():
    generator = EchoGenerator()
    client = make_client(generator)

    response = client.post("/api/optimize", json={"content": "John Doe, Engineer"})

    assert response.status_code == 200
    assert response.json() == {"optimizedContent": build_prompt("John Doe, Engineer")}
    assert len(generator.calls) == 1


def test_missing_content_is_rejected_before_generation():
    generator = EchoGenerator()
    client = make_client(generator)

    response = client.post("/api/optimize", json={})

    assert response.status_code == 400
    assert response.json()["error"]
    assert generator.calls == []


def test_empty_content_is_rejected_before_generation():
    generator = EchoGenerator()
    client = make_client(generator)

    response = client.post("/api/optimize", json={"content": ""})

    assert response.status_code == 400
    assert generator.calls == []


def test_generation_failure_returns_generic_error():
    generator = FailingGenerator()
    client = make_client(generator)

    response = client.post("/api/optimize", json={"content": "John Doe, Engineer"})

    assert response.status_code == 500
    error = response.json()["error"]
    assert error == "Failed to optimize resume"
    assert "upstream exploded" not in error
    assert "sk-secret-123" not in response.text
    assert generator.calls == 1


@pytest.mark.parametrize("body", ["not json", "null", "[]", '{"content": 123}', '"resume"'])
def test_malformed_body_returns_error_field(body):
    generator = EchoGenerator()
    client = make_client(generator)

    response = client.post(
        "/api/optimize", content=body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "No content provided"}
    assert generator.calls == []
