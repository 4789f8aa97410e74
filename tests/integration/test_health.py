from prometheus_client import REGISTRY

from employee_service.services.employees import EmployeeService


def _request_count(method: str, status_code: str) -> float:
    value = REGISTRY.get_sample_value(
        "http_request_duration_seconds_count",
        {"method": method, "status_code": status_code},
    )
    return value or 0.0


async def test_liveness(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_readiness_checks_database(client):
    response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "checks": {"database": "ok"}}


async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"


async def test_metrics_expose_operation_and_error_counters(client, make_payload):
    await client.post("/employees", json=make_payload())
    await client.get("/employees/999")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "employee_operations_total" in response.text
    assert "api_errors_total" in response.text
    assert "http_request_duration_seconds" in response.text


async def test_failed_request_is_recorded_as_500(client, monkeypatch):
    async def _boom(self):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(EmployeeService, "list_all", _boom)
    before = _request_count("GET", "500")

    response = await client.get("/employees")

    assert response.status_code == 500
    assert _request_count("GET", "500") == before + 1
