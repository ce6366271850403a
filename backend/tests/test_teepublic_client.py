"""
Tests for the TeePublic HTTP client and response unwrapping.
"""

import json

import httpx
import pytest

from integrations.base import ItemParameters, TeePublicCredentials
from integrations.errors import TransportError
from integrations.request_builder import build_request
from integrations.teepublic import NO_RESPONSE_BODY, TeePublicClient, shape_result, unwrap_response


# ── Unwrapping ────────────────────────────────────────────────────────────


class TestUnwrapResponse:
    def test_data_list_becomes_items(self):
        assert shape_result(unwrap_response({"data": [1, 2, 3]})) == {"items": [1, 2, 3]}

    def test_data_object_is_returned(self):
        assert shape_result(unwrap_response({"data": {"id": 7}})) == {"id": 7}

    def test_empty_body_synthesizes_success(self):
        assert shape_result(unwrap_response(None)) == NO_RESPONSE_BODY
        assert shape_result(unwrap_response("")) == NO_RESPONSE_BODY

    def test_synthesized_body_is_a_fresh_copy(self):
        unwrap_response(None)["message"] = "changed"
        assert unwrap_response(None) == {"success": True, "message": "No response body"}

    def test_response_without_data_field_is_returned_whole(self):
        body = {"orders": [{"id": 1}], "meta": {"page": 1}}
        assert shape_result(unwrap_response(body)) == body

    def test_null_data_falls_back_to_whole_response(self):
        body = {"data": None, "status": "ok"}
        assert unwrap_response(body) == body

    def test_top_level_list_becomes_items(self):
        assert shape_result(unwrap_response([{"id": 1}])) == {"items": [{"id": 1}]}

    def test_raw_output_keeps_data_wrapper(self):
        body = {"data": [1, 2], "meta": {"total": 2}}
        assert shape_result(unwrap_response(body, raw_output=True)) == body

    def test_raw_output_of_empty_body_is_empty_object(self):
        assert shape_result(unwrap_response(None, raw_output=True)) == {}

    def test_scalar_body_is_wrapped(self):
        assert shape_result(unwrap_response("OK", raw_output=True)) == {"data": "OK"}


# ── HTTP transport ────────────────────────────────────────────────────────


class TestTeePublicClient:
    async def test_get_sends_headers_and_query(self, credentials, portal, teepublic_client):
        portal.route("GET", "/api/seller/orders", json_body={"data": [{"id": 1}]})
        request = build_request(
            credentials,
            ItemParameters.parse({"operation": "list", "queryParameters": [{"key": "status", "value": "pending"}]}),
        )

        body = await teepublic_client.send(request)

        assert body == {"data": [{"id": 1}]}
        sent = portal.last_request
        assert sent.method == "GET"
        assert sent.url.params["status"] == "pending"
        assert sent.headers["accept"] == "application/json"
        assert sent.headers["user-agent"] == "teepublic-connector"
        assert sent.headers["cookie"] == credentials.session_cookie

    async def test_post_sends_json_body(self, credentials, portal, teepublic_client):
        portal.route("POST", "/api/seller/orders/42", json_body={"data": {"id": 42, "status": "shipped"}})
        request = build_request(
            credentials,
            ItemParameters.parse(
                {"resource": "orders", "operation": "sync", "orderId": "42", "payload": '{"status":"shipped"}'}
            ),
        )

        body = await teepublic_client.send(request)

        assert body["data"]["status"] == "shipped"
        assert json.loads(portal.last_request.content) == {"status": "shipped"}

    async def test_empty_body_decodes_to_none(self, credentials, portal, teepublic_client):
        portal.route("POST", "/api/seller/designs/d1", status_code=204)
        request = build_request(
            credentials,
            ItemParameters.parse({"resource": "designs", "operation": "sync", "designId": "d1"}),
        )
        assert await teepublic_client.send(request) is None

    async def test_non_json_body_decodes_to_text(self, credentials, portal, teepublic_client):
        portal.route("GET", "/api/seller/payouts", content=b"<html>maintenance</html>")
        request = build_request(credentials, ItemParameters.parse({"resource": "payouts"}))
        assert await teepublic_client.send(request) == "<html>maintenance</html>"

    async def test_error_status_raises_transport_error(self, credentials, portal, teepublic_client):
        portal.route("GET", "/api/seller/orders/missing", status_code=404, json_body={"error": "Not found"})
        request = build_request(
            credentials,
            ItemParameters.parse({"resource": "orders", "operation": "get", "orderId": "missing"}),
        )

        with pytest.raises(TransportError) as exc_info:
            await teepublic_client.send(request)

        assert exc_info.value.status_code == 404
        assert "HTTP 404" in str(exc_info.value)

    async def test_network_error_raises_transport_error(self, credentials):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = TeePublicClient(transport=httpx.MockTransport(refuse))
        request = build_request(credentials, ItemParameters.parse({}))

        with pytest.raises(TransportError, match="connection refused") as exc_info:
            await client.send(request)
        assert exc_info.value.status_code is None

    def test_proxy_url_is_passed_to_httpx(self):
        creds = TeePublicCredentials(base_url="https://seller.test", proxy="http://u:p@proxyhost:9000")
        request = build_request(creds, ItemParameters.parse({}))
        assert TeePublicClient()._client_kwargs(request) == {
            "follow_redirects": True,
            "proxy": "http://u:p@proxyhost:9000",
        }

    async def test_redirects_are_followed(self, credentials):
        def moved(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/seller/orders":
                return httpx.Response(301, headers={"Location": "https://seller.test/api/v2/orders"})
            return httpx.Response(200, json={"data": [1]})

        client = TeePublicClient(transport=httpx.MockTransport(moved))
        request = build_request(credentials, ItemParameters.parse({}))

        assert await client.send(request) == {"data": [1]}
