"""
HTTP transport for the back-office API.

Every response is classified once, in ``fetch_result``, into one of these
outcomes:

    Ok(value)                  2xx; value is the parsed JSON or None
    HttpError(status, data)    any other status
    InvalidResponse(status)    2xx whose body is not JSON
    ApprovalRequired(payload)  403 whose JSON body carries ``requiresApproval``

``api_request`` unwraps that result: it returns the value of an ``Ok`` and
raises the error variants. Network failures never produce a result and are
raised as ``TransportError``.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from .config import ClientConfig

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """Base class for errors raised by the back-office client."""


class TransportError(ClientError):
    """The request never produced an HTTP response."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class HttpError(ClientError):
    """A non-2xx response."""

    def __init__(self, status: int, data: Any = None, text: str = "",
                 response: Optional[httpx.Response] = None, url: Optional[str] = None,
                 message: Optional[str] = None):
        self.status = status
        self.data = data
        self.text = text
        self.response = response
        self.url = url
        super().__init__(message or f"{status}: {text}")

    @property
    def message(self) -> str:
        return str(self)


class InvalidResponse(HttpError):
    """A 2xx response whose body is not valid JSON."""


class ApprovalRequired(HttpError):
    """
    The server refused to ship without partial-fulfillment approval.

    ``data`` is the server payload, e.g.
    ``{"requiresApproval": true, "orderId": 7, "unshippedItems": 1, "canApprove": false}``.
    """

    def __init__(self, payload: Dict[str, Any], response: Optional[httpx.Response] = None,
                 url: Optional[str] = None):
        super().__init__(
            403, payload, json.dumps(payload), response=response, url=url,
            message="Approval required",
        )

    @property
    def payload(self) -> Dict[str, Any]:
        return self.data

    @property
    def can_approve(self) -> bool:
        return bool(self.data.get("canApprove"))


@dataclass(frozen=True)
class Ok:
    value: Any = None


Result = Union[Ok, HttpError]


def _is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "")


def _error_from_response(response: httpx.Response, url: str) -> HttpError:
    data = None
    if _is_json(response):
        try:
            data = response.json()
        except ValueError:
            data = None

    if response.status_code == 403 and isinstance(data, dict) and data.get("requiresApproval"):
        logger.info(f"Approval required for {url}: {data}")
        return ApprovalRequired(data, response=response, url=url)

    if data is not None:
        text = json.dumps(data)
    else:
        text = response.text or response.reason_phrase
    return HttpError(response.status_code, data, text, response=response, url=url)


def classify_response(response: httpx.Response, url: Optional[str] = None) -> Result:
    """Turn a received response into ``Ok`` or one of the ``HttpError`` variants."""
    url = url or str(response.request.url)
    if not response.is_success:
        return _error_from_response(response, url)

    if response.status_code == 204 or not response.content:
        return Ok(None)
    try:
        return Ok(response.json())
    except ValueError as exc:
        logger.warning(f"Invalid JSON from {url}: {exc}")
        return InvalidResponse(
            response.status_code, None, response.text, response=response, url=url,
            message=f"{response.status_code}: Invalid JSON response: {exc}",
        )


class ApiSession:
    """
    A cookie-keeping connection to the back-office API.

    Cookies set by the server (e.g. the Django session) are sent back on
    every later request. A bearer token from the config is sent as well.
    """

    def __init__(self, config: Optional[ClientConfig] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self.config = config or ClientConfig.from_env()
        headers = {"Accept": "application/json"}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        self._client = httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def set_token(self, token: Optional[str]) -> None:
        if token:
            self._client.headers["Authorization"] = f"Bearer {token}"
        else:
            self._client.headers.pop("Authorization", None)

    def fetch_result(self, url: str, method: str = "GET", data: Any = None,
                     headers: Optional[Dict[str, str]] = None) -> Result:
        """
        Perform one request and classify the response.

        Raises:
            TransportError: If no response was received
        """
        method = method.upper()
        request_headers = dict(headers or {})
        kwargs = {"headers": request_headers}
        if data is not None:
            request_headers["Content-Type"] = "application/json"
            kwargs["content"] = json.dumps(data)

        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            raise TransportError(f"{method} {url} failed: {exc}", url=url) from exc

        return classify_response(response, url)

    def api_request(self, url: str, method: str = "GET", data: Any = None,
                    headers: Optional[Dict[str, str]] = None) -> Any:
        """
        Perform one request and return the parsed body.

        Returns None for 204 and empty responses.

        Raises:
            ApprovalRequired: On a 403 carrying ``requiresApproval``
            HttpError: On any other non-2xx response
            TransportError: If no response was received
        """
        result = self.fetch_result(url, method, data, headers)
        if isinstance(result, HttpError):
            raise result
        return result.value


_default_session: Optional[ApiSession] = None


def default_session() -> ApiSession:
    """Process-wide session configured from the environment."""
    global _default_session
    if _default_session is None:
        _default_session = ApiSession()
    return _default_session


def fetch_result(url: str, method: str = "GET", data: Any = None,
                 headers: Optional[Dict[str, str]] = None,
                 session: Optional[ApiSession] = None) -> Result:
    return (session or default_session()).fetch_result(url, method, data, headers)


def api_request(url: str, method: str = "GET", data: Any = None,
                headers: Optional[Dict[str, str]] = None,
                session: Optional[ApiSession] = None) -> Any:
    return (session or default_session()).api_request(url, method, data, headers)
