import logging
import uuid

import pytest

pytestmark = pytest.mark.integration


class TestCorrelationIdMiddleware:
    def test_echoes_caller_request_id(self, client):
        response = client.get("/health", HTTP_X_REQUEST_ID="bakery-front-desk-1")
        assert response["X-Request-ID"] == "bakery-front-desk-1"

    def test_generates_uuid4_when_missing(self, client):
        request_id = client.get("/health")["X-Request-ID"]
        assert str(uuid.UUID(request_id, version=4)) == request_id

    def test_each_request_gets_its_own_id(self, client):
        first = client.get("/health")["X-Request-ID"]
        second = client.get("/health")["X-Request-ID"]
        assert first != second

    @pytest.mark.parametrize("url", ["/api/v1/orders/", "/api/v1/dashboard/"])
    def test_header_present_on_rejected_requests(
        self, api_client_with_correlation, url
    ):
        api_client, cid = api_client_with_correlation
        response = api_client.get(url)
        assert response.status_code == 401
        assert response["X-Request-ID"] == cid

    def test_request_lines_carry_the_id(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID="oven-log-456")
        messages = [record.getMessage() for record in caplog.records]
        tagged = [m for m in messages if "oven-log-456" in m]
        assert any("request.started" in m for m in tagged), messages
        assert any("request.finished" in m for m in tagged), messages
