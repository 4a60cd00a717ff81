"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from perfaudit.models import AuditResult, AuditSummary
from perfaudit.orchestrator import AuditOptions, AuditRunner
from perfaudit.service import create_app
from tests._fixtures.project_builder import ProjectBuilder


class _StubRunner:
    def __init__(self) -> None:
        self.calls: list[dict[str, object]] = []

    def run(self, path: str, options: AuditOptions) -> AuditResult:
        self.calls.append({"path": path, "options": options})
        if Path(path).name == "locked":
            raise PermissionError(f"Project path is not readable: {path}")
        if not Path(path).exists():
            raise FileNotFoundError(f"Project path not found: {path}")
        return AuditResult(
            root=path,
            timestamp="2026-01-01T00:00:00Z",
            sections={},
            summary=AuditSummary(score=100, total_issues=0, critical_issues=0),
            options=options.to_dict(),
        )


@pytest.fixture
def runner() -> _StubRunner:
    return _StubRunner()


@pytest.fixture
def client(runner: _StubRunner) -> TestClient:
    return TestClient(create_app(lambda: runner))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_endpoint_passes_phase_flags(client: TestClient, runner: _StubRunner, tmp_path: Path) -> None:
    response = client.post("/analyze", json={"path": str(tmp_path), "bundle_only": True})

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["score"] == 100
    options = runner.calls[0]["options"]
    assert options.run_performance is False
    assert options.run_bundle is True
    assert options.write_report is False


def test_analyze_missing_path_returns_404(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/analyze", json={"path": str(tmp_path / "missing")})

    assert response.status_code == 404
    assert "Project path not found" in response.json()["detail"]


def test_analyze_unreadable_path_returns_403(client: TestClient, tmp_path: Path) -> None:
    locked = tmp_path / "locked"
    locked.mkdir()

    response = client.post("/analyze", json={"path": str(locked)})

    assert response.status_code == 403
    assert "not readable" in response.json()["detail"]


def test_analyze_conflicting_flags_returns_400(client: TestClient, runner: _StubRunner, tmp_path: Path) -> None:
    response = client.post(
        "/analyze",
        json={"path": str(tmp_path), "performance_only": True, "bundle_only": True},
    )

    assert response.status_code == 400
    assert runner.calls == []


def test_analyze_with_real_runner(project_builder: ProjectBuilder) -> None:
    project_builder.package_json({"dependencies": {"react": "^18.0.0", "moment": "^2.29.0"}})
    client = TestClient(create_app(AuditRunner))

    response = client.post("/analyze", json={"path": str(project_builder.path()), "performance_only": True})

    assert response.status_code == 200
    data = response.json()
    assert data["sections"]["manifest"]["project_type"] == "React"
    assert "build" not in data["sections"]
    assert data["summary"]["critical_issues"] == 1
    assert not (project_builder.path() / "performance-analysis-report.json").exists()
