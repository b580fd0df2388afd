"""HTTP proxy gateway implementation.

Posts the conversation to a proxy endpoint that holds the model credentials.

Request body:  {"history": [{"role", "parts": [{"text"}]}], "systemInstruction": str}
Success (2xx): {"reply": str}
Failure:       {"error": str} with a non-2xx status
"""

from collections.abc import Sequence
from typing import Any

import httpx

from ...cancellation import CancellationToken
from ...conversation import Message
from ..base import ResponseGateway
from ..errors import UNKNOWN_SERVER_ERROR, GatewayError

DEFAULT_URL = "http://localhost:3000/api/gemini"
DEFAULT_TIMEOUT = 30.0


class HttpResponseGateway(ResponseGateway):
    """Gateway that forwards requests to a JSON proxy endpoint.

    Hidden design decisions:
    - httpx client setup and timeout
    - Wire payload construction
    - Mapping of status codes and transport failures to GatewayError
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
        **client_kwargs: Any
    ):
        """Initialize HTTP gateway.

        Args:
            url: Proxy endpoint receiving the POST
            timeout: Request timeout in seconds
            client: Pre-built client (used as-is, e.g. with a mock transport)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._url = url
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, **client_kwargs)

    @property
    def url(self) -> str:
        return self._url

    @property
    def backend_type(self) -> str:
        return "http"

    @staticmethod
    def build_payload(history: Sequence[Message], system_instruction: str) -> dict[str, Any]:
        """Build the JSON body sent to the proxy."""
        return {
            "history": [message.to_wire() for message in history],
            "systemInstruction": system_instruction,
        }

    async def generate(
        self,
        history: Sequence[Message],
        system_instruction: str,
        token: CancellationToken | None = None,
    ) -> str:
        payload = self.build_payload(history, system_instruction)
        self._debug("debug", f"POST {self._url} ({len(history)} turns)")

        if token is not None:
            response = await token.run(self._post(payload))
        else:
            response = await self._post(payload)

        return self._parse_response(response)

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        try:
            return await self._client.post(self._url, json=payload)
        except httpx.TimeoutException as e:
            self._debug("error", f"Request timed out after {self._timeout}s")
            raise GatewayError(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            self._debug("error", f"Transport failure: {e}")
            raise GatewayError(str(e) or UNKNOWN_SERVER_ERROR) from e

    def _parse_response(self, response: httpx.Response) -> str:
        if not response.is_success:
            message = self._extract_error(response)
            self._debug("error", f"HTTP {response.status_code}: {message}")
            raise GatewayError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError("Malformed response from server", response.status_code) from e

        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise GatewayError("Malformed response from server", response.status_code)

        self._debug("info", f"Received reply ({len(reply)} chars)")
        return reply

    @staticmethod
    def _extract_error(response: httpx.Response) -> str:
        """Pull the server's error text, falling back to a generic message."""
        try:
            data = response.json()
        except ValueError:
            return UNKNOWN_SERVER_ERROR
        if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
            return data["error"]
        return UNKNOWN_SERVER_ERROR

    async def close(self) -> None:
        """Close the underlying client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()
