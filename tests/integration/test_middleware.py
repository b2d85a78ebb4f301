from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from networknote.middleware import CORSMiddleware, RequestContextMiddleware

ALLOWED = "http://localhost:5173"


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(CORSMiddleware, allowed_origins=[ALLOWED])
    app.add_middleware(RequestContextMiddleware)

    @app.get("/echo")
    async def echo(request: Request):
        return {"request_id": request.state.request_id}

    return app


def test_request_id_generated_and_echoed():
    response = TestClient(build_app()).get("/echo")

    request_id = response.headers["X-Request-ID"]
    assert request_id
    assert response.json()["request_id"] == request_id


def test_incoming_request_id_reused():
    response = TestClient(build_app()).get("/echo", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_preflight_from_allowed_origin():
    response = TestClient(build_app()).options(
        "/echo", headers={"Origin": ALLOWED, "Access-Control-Request-Method": "POST"}
    )

    assert response.status_code == 204
    assert response.headers["Access-Control-Allow-Origin"] == ALLOWED
    assert "PATCH" in response.headers["Access-Control-Allow-Methods"]


def test_preflight_from_unknown_origin_rejected():
    response = TestClient(build_app()).options(
        "/echo", headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "GET"}
    )
    assert response.status_code == 403


def test_simple_request_gets_cors_headers_only_for_allowed_origin():
    client = TestClient(build_app())

    allowed = client.get("/echo", headers={"Origin": ALLOWED})
    other = client.get("/echo", headers={"Origin": "https://evil.example"})

    assert allowed.headers["Access-Control-Allow-Origin"] == ALLOWED
    assert allowed.headers["Access-Control-Allow-Credentials"] == "true"
    assert "Access-Control-Allow-Origin" not in other.headers
