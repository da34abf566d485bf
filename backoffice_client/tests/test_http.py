"""
Tests for the HTTP transport.
"""

import json
import unittest

import httpx

from ..config import ClientConfig
from ..http import ApiSession, ApprovalRequired, HttpError, InvalidResponse, Ok, TransportError

BASE_URL = "http://backoffice.test"


def make_session(handler, token=None):
    return ApiSession(ClientConfig(base_url=BASE_URL, timeout=5, token=token), transport=httpx.MockTransport(handler))


class ApiRequestTest(unittest.TestCase):

    def test_no_content_returns_none(self):
        session = make_session(lambda request: httpx.Response(204))
        self.assertIsNone(session.api_request("/api/orders/1", "PATCH", {"notes": "x"}))

    def test_empty_body_returns_none(self):
        session = make_session(lambda request: httpx.Response(200, content=b""))
        self.assertIsNone(session.api_request("/api/orders"))

    def test_json_body_returned_unchanged(self):
        body = {"id": 7, "status": "picked", "items": [{"id": 1, "quantity": 5}]}
        session = make_session(lambda request: httpx.Response(200, json=body))
        self.assertEqual(session.api_request("/api/orders/7"), body)

    def test_json_request_body(self):
        seen = {}

        def handler(request):
            seen['content_type'] = request.headers.get('content-type')
            seen['body'] = json.loads(request.content)
            seen['method'] = request.method
            return httpx.Response(201, json={"ok": True})

        session = make_session(handler)
        session.api_request("/api/unshipped-items/authorize", "post", {"itemIds": [3, 4]})

        self.assertEqual(seen['method'], "POST")
        self.assertEqual(seen['content_type'], "application/json")
        self.assertEqual(seen['body'], {"itemIds": [3, 4]})

    def test_text_error_message_carries_status_and_text(self):
        session = make_session(lambda request: httpx.Response(500, text="database unavailable"))

        with self.assertRaises(HttpError) as ctx:
            session.api_request("/api/orders")

        error = ctx.exception
        self.assertEqual(error.status, 500)
        self.assertIsNone(error.data)
        self.assertEqual(str(error), "500: database unavailable")
        self.assertEqual(error.url, "/api/orders")
        self.assertIsNotNone(error.response)

    def test_empty_error_body_uses_reason_phrase(self):
        session = make_session(lambda request: httpx.Response(502, content=b""))

        with self.assertRaises(HttpError) as ctx:
            session.api_request("/api/orders")

        self.assertEqual(str(ctx.exception), "502: Bad Gateway")

    def test_json_error_is_parsed(self):
        body = {"success": False, "error": {"code": "INVALID_TRANSITION", "message": "no"}}
        session = make_session(lambda request: httpx.Response(409, json=body))

        with self.assertRaises(HttpError) as ctx:
            session.api_request("/api/orders/1/status", "PATCH", {"status": "pending"})

        self.assertEqual(ctx.exception.status, 409)
        self.assertEqual(ctx.exception.data, body)
        self.assertTrue(str(ctx.exception).startswith("409: "))
        self.assertNotIsInstance(ctx.exception, ApprovalRequired)

    def test_approval_required(self):
        payload = {
            "message": "Partial order fulfillment requires explicit approval",
            "requiresApproval": True,
            "isPartialFulfillment": True,
            "orderId": 7,
            "unshippedItems": 1,
            "canApprove": True,
        }
        session = make_session(lambda request: httpx.Response(403, json=payload))

        with self.assertRaises(ApprovalRequired) as ctx:
            session.api_request("/api/orders/7/status", "PATCH", {"status": "shipped"})

        error = ctx.exception
        self.assertIsInstance(error, HttpError)
        self.assertEqual(str(error), "Approval required")
        self.assertEqual(error.status, 403)
        self.assertEqual(error.payload, payload)
        self.assertTrue(error.can_approve)
        self.assertEqual(error.url, "/api/orders/7/status")

    def test_plain_forbidden_is_not_approval(self):
        body = {"detail": "You do not have permission to perform this action."}
        session = make_session(lambda request: httpx.Response(403, json=body))

        with self.assertRaises(HttpError) as ctx:
            session.api_request("/api/unshipped-items/authorize", "POST", {"itemIds": [1]})

        self.assertNotIsInstance(ctx.exception, ApprovalRequired)
        self.assertEqual(ctx.exception.data, body)

    def test_non_json_success_body(self):
        session = make_session(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

        with self.assertRaises(HttpError) as ctx:
            session.api_request("/api/orders")

        error = ctx.exception
        self.assertIsInstance(error, InvalidResponse)
        self.assertEqual(error.status, 200)
        self.assertEqual(error.text, "<html>maintenance</html>")
        self.assertIsNotNone(error.response)
        self.assertTrue(str(error).startswith("200: Invalid JSON response"))

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        session = make_session(handler)

        with self.assertRaises(TransportError) as ctx:
            session.api_request("/api/orders")
        self.assertEqual(ctx.exception.url, "/api/orders")

    def test_cookies_are_kept(self):
        seen = []

        def handler(request):
            seen.append(request.headers.get('cookie'))
            return httpx.Response(200, json={}, headers={"set-cookie": "sessionid=abc123; Path=/"})

        session = make_session(handler)
        session.api_request("/api/orders")
        session.api_request("/api/orders")

        self.assertIsNone(seen[0])
        self.assertIn("sessionid=abc123", seen[1])

    def test_bearer_token(self):
        seen = {}

        def handler(request):
            seen['authorization'] = request.headers.get('authorization')
            return httpx.Response(200, json=[])

        make_session(handler, token="abc").api_request("/api/orders")
        self.assertEqual(seen['authorization'], "Bearer abc")


class FetchResultTest(unittest.TestCase):

    def test_ok_variant(self):
        session = make_session(lambda request: httpx.Response(200, json=[1, 2]))
        self.assertEqual(session.fetch_result("/api/orders"), Ok([1, 2]))

    def test_error_variants_are_returned_not_raised(self):
        session = make_session(lambda request: httpx.Response(404, json={"detail": "Not found."}))
        result = session.fetch_result("/api/orders/99")
        self.assertIsInstance(result, HttpError)
        self.assertEqual(result.status, 404)

        session = make_session(lambda request: httpx.Response(403, json={"requiresApproval": True}))
        self.assertIsInstance(session.fetch_result("/api/orders/1/status", "PATCH", {}), ApprovalRequired)

    def test_non_json_success_is_an_error_variant(self):
        session = make_session(lambda request: httpx.Response(200, text="not json"))
        result = session.fetch_result("/api/orders")
        self.assertIsInstance(result, InvalidResponse)
        self.assertEqual(result.url, "/api/orders")


class ClientConfigTest(unittest.TestCase):

    def test_from_env(self):
        config = ClientConfig.from_env({
            "BACKOFFICE_API_URL": "https://backoffice.example.com/",
            "BACKOFFICE_API_TIMEOUT": "2.5",
        })
        self.assertEqual(config.base_url, "https://backoffice.example.com")
        self.assertEqual(config.timeout, 2.5)
        self.assertIsNone(config.token)

    def test_defaults(self):
        config = ClientConfig.from_env({})
        self.assertEqual(config.base_url, "http://localhost:8000")
        self.assertEqual(config.timeout, 10.0)
