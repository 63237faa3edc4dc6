"""Integration tests for API endpoints"""

import asyncio

from fastapi.testclient import TestClient
from sky_financial.api.dependencies import get_chat_client
from sky_financial.domain.chat import FALLBACK_REPLY, WELCOME_MESSAGE


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/calculate", json={"kind": "SIP", "amount": 5000, "rate": 12, "duration": 10})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "sky_calculation_total" in response.text


def test_list_calculators(client: TestClient):
    """Test GET /v1/calculators returns defaults and bounds for every kind"""
    response = client.get("/v1/calculators")

    assert response.status_code == 200
    calculators = {c["kind"]: c for c in response.json()["calculators"]}
    assert set(calculators) == {"SIP", "LUMPSUM", "EMI", "PPF", "TAX"}
    assert calculators["EMI"]["defaults"]["amount"] == 5000000
    assert calculators["PPF"]["bounds"]["duration"] == [1, 50]
    assert calculators["TAX"]["bounds"]["rate"] is None


def test_calculate_sip(client: TestClient):
    """Test POST /v1/calculate for a SIP"""
    response = client.post(
        "/v1/calculate",
        json={"kind": "SIP", "amount": 1000, "rate": 12, "duration": 1},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["kind"] == "SIP"
    assert data["invested_amount"] == 12000
    assert data["total_value"] == 12809
    assert data["breakdown"][0] == {
        "label": "Invested",
        "value": 12000,
        "color": "#3b82f6",
        "formatted": "₹12,000",
    }


def test_calculate_emi(client: TestClient):
    """Test POST /v1/calculate for a home loan"""
    response = client.post(
        "/v1/calculate",
        json={"kind": "EMI", "amount": 5000000, "rate": 9, "duration": 20},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["kind"] == "EMI"
    assert data["monthly_payment"] == 44986
    assert data["principal"] == 5000000
    assert [entry["label"] for entry in data["breakdown"]] == ["Principal", "Interest"]


def test_calculate_tax(client: TestClient):
    """Test POST /v1/calculate for a regime comparison"""
    response = client.post(
        "/v1/calculate",
        json={"kind": "TAX", "amount": 1200000, "deductions": 150000},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["kind"] == "TAX"
    assert data["old_tax"] == 117000
    assert data["new_tax"] == 71500
    assert data["savings"] == 45500
    assert data["better_regime"] == "NEW"
    assert data["breakdown"][1]["formatted"] == "₹71,500"


def test_calculate_tax_equal_regimes(client: TestClient):
    """Test equal liabilities report no better regime"""
    response = client.post("/v1/calculate", json={"kind": "TAX", "amount": 500000})

    assert response.status_code == 200
    assert response.json()["better_regime"] is None


def test_calculate_out_of_range_rejected(client: TestClient):
    """Test out-of-range input returns the violations"""
    response = client.post(
        "/v1/calculate",
        json={"kind": "LUMPSUM", "amount": 100, "rate": 12, "duration": 10},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == ["amount must be between 500 and 500000, got 100"]


def test_calculate_out_of_range_clamped(client: TestClient):
    """Test clamp flag pulls input into range instead of rejecting"""
    response = client.post(
        "/v1/calculate",
        json={"kind": "SIP", "amount": 100, "rate": 0, "duration": 99, "clamp": True},
    )

    assert response.status_code == 200
    # Clamped to 500/month at 1% for 40 years
    assert response.json()["invested_amount"] == 500 * 40 * 12


def test_calculate_unknown_kind(client: TestClient):
    """Test unknown calculator kind fails validation"""
    response = client.post("/v1/calculate", json={"kind": "FD", "amount": 1000})
    assert response.status_code == 422


def test_calculate_negative_amount(client: TestClient):
    """Test negative amounts fail schema validation"""
    response = client.post("/v1/calculate", json={"kind": "SIP", "amount": -5, "rate": 12, "duration": 1})
    assert response.status_code == 422


def test_tax_liability_endpoint(client: TestClient):
    """Test POST /v1/tax/liability"""
    response = client.post("/v1/tax/liability", json={"taxable_income": 710000, "regime": "NEW"})

    assert response.status_code == 200
    data = response.json()
    assert data["tax"] == 10400
    assert data["formatted"] == "₹10,400"


def test_tax_liability_rebate_boundary(client: TestClient):
    """Test old regime rebate at 5L"""
    response = client.post("/v1/tax/liability", json={"taxable_income": 500000, "regime": "OLD"})
    assert response.json()["tax"] == 0


def test_chat_session_lifecycle(client: TestClient, chat_client):
    """Test open, message, transcript and close"""
    created = client.post("/v1/chat/sessions")
    assert created.status_code == 201
    session = created.json()
    assert session["welcome"] == WELCOME_MESSAGE
    assert session["messages"] == []

    session_id = session["session_id"]
    reply = client.post(f"/v1/chat/sessions/{session_id}/messages", json={"message": "What is a SIP?"})
    assert reply.status_code == 200
    assert reply.text == "A **SIP** is a monthly investment."
    assert chat_client.messages == ["What is a SIP?"]

    transcript = client.get(f"/v1/chat/sessions/{session_id}").json()
    assert [(m["role"], m["text"]) for m in transcript["messages"]] == [
        ("user", "What is a SIP?"),
        ("model", "A **SIP** is a monthly investment."),
    ]

    assert client.delete(f"/v1/chat/sessions/{session_id}").status_code == 204
    assert client.get(f"/v1/chat/sessions/{session_id}").status_code == 404


def test_chat_service_failure_streams_fallback(client: TestClient, failing_chat_client):
    """Test upstream failure ends the stream with the apology text"""
    client.app.dependency_overrides[get_chat_client] = lambda: failing_chat_client

    session_id = client.post("/v1/chat/sessions").json()["session_id"]
    reply = client.post(f"/v1/chat/sessions/{session_id}/messages", json={"message": "Hello"})

    assert reply.status_code == 200
    assert reply.text == FALLBACK_REPLY
    assert client.get(f"/v1/chat/sessions/{session_id}").json()["messages"] == []


def test_chat_unknown_session(client: TestClient):
    """Test messaging a session that does not exist"""
    response = client.post("/v1/chat/sessions/nope/messages", json={"message": "Hello"})
    assert response.status_code == 404


def test_chat_empty_message(client: TestClient):
    """Test empty messages are rejected"""
    session_id = client.post("/v1/chat/sessions").json()["session_id"]
    response = client.post(f"/v1/chat/sessions/{session_id}/messages", json={"message": ""})
    assert response.status_code == 422


def test_chat_message_while_replying_is_rejected(client: TestClient, chat_client):
    """Test a second message is refused until the running reply finishes"""
    session_id = client.post("/v1/chat/sessions").json()["session_id"]
    session = client.app.state.chat_sessions.get_session(session_id)

    asyncio.run(session.reply_lock.acquire())
    busy = client.post(f"/v1/chat/sessions/{session_id}/messages", json={"message": "Second"})
    assert busy.status_code == 409
    assert chat_client.messages == []

    session.reply_lock.release()
    reply = client.post(f"/v1/chat/sessions/{session_id}/messages", json={"message": "Second"})
    assert reply.status_code == 200
    assert len(session.history) == 2


def test_request_duration_help_names_stream_latency(client: TestClient):
    """Test request latency help text points streamed replies at the stream histogram"""
    client.get("/health")

    response = client.get("/metrics")
    help_line = next(
        line for line in response.text.splitlines()
        if line.startswith("# HELP http_request_duration_seconds ")
    )
    assert "llm_stream_latency_seconds" in help_line
