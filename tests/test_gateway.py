"""Unit tests for the gateway module."""
import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest

from reelchat.cancellation import CancellationToken, OperationCancelled
from reelchat.conversation import ModelMessage, UserMessage
from reelchat.gateway import (
    GatewayError,
    HttpResponseGateway,
    ResponseGateway,
    create_response_gateway,
)
from reelchat.gateway.errors import UNKNOWN_SERVER_ERROR

URL = "http://gateway.test/api/gemini"

HISTORY = [ModelMessage(text="Hello!"), UserMessage(text="recommend a drama")]


def _gateway(handler) -> HttpResponseGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpResponseGateway(url=URL, client=client)


class TestResponseGatewayInterface:
    """Tests for the abstract ResponseGateway interface."""

    def test_gateway_is_abstract(self):
        """Test that ResponseGateway cannot be instantiated directly."""
        with pytest.raises(TypeError):
            ResponseGateway()  # type: ignore


class TestHttpResponseGateway:
    """Tests for HttpResponseGateway against a mock transport."""

    @pytest.mark.asyncio
    async def test_posts_history_and_instruction(self):
        """Test the exact request body and the parsed reply."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"reply": "Try Queen's Gambit."})

        gateway = _gateway(handler)
        reply = await gateway.generate(HISTORY, "SYSTEM")

        assert reply == "Try Queen's Gambit."
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == URL
        assert json.loads(request.content) == {
            "history": [
                {"role": "model", "parts": [{"text": "Hello!"}]},
                {"role": "user", "parts": [{"text": "recommend a drama"}]},
            ],
            "systemInstruction": "SYSTEM",
        }

    @pytest.mark.asyncio
    async def test_error_status_surfaces_server_message(self):
        gateway = _gateway(lambda request: httpx.Response(500, json={"error": "model overloaded"}))

        with pytest.raises(GatewayError) as exc_info:
            await gateway.generate(HISTORY, "SYSTEM")

        assert exc_info.value.message == "model overloaded"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_error_status_without_body_uses_fallback(self):
        gateway = _gateway(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))

        with pytest.raises(GatewayError) as exc_info:
            await gateway.generate(HISTORY, "SYSTEM")

        assert exc_info.value.message == UNKNOWN_SERVER_ERROR

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        gateway = _gateway(handler)

        with pytest.raises(GatewayError, match="connection refused") as exc_info:
            await gateway.generate(HISTORY, "SYSTEM")
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_timeout_is_a_gateway_error(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        gateway = _gateway(handler)

        with pytest.raises(GatewayError, match="timed out"):
            await gateway.generate(HISTORY, "SYSTEM")

    @pytest.mark.asyncio
    async def test_success_without_reply_is_malformed(self):
        gateway = _gateway(lambda request: httpx.Response(200, json={"text": "hi"}))

        with pytest.raises(GatewayError, match="Malformed"):
            await gateway.generate(HISTORY, "SYSTEM")

    @pytest.mark.asyncio
    async def test_single_attempt_only(self):
        """Test that failures are not retried."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503, json={"error": "unavailable"})

        gateway = _gateway(handler)
        with pytest.raises(GatewayError):
            await gateway.generate(HISTORY, "SYSTEM")

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_cancelled_token_abandons_request(self):
        """Test that cancelling the token interrupts an outstanding request."""
        started = asyncio.Event()

        async def handler(request):
            started.set()
            await asyncio.sleep(10)
            return httpx.Response(200, json={"reply": "late"})

        gateway = _gateway(handler)
        token = CancellationToken()
        call = asyncio.create_task(gateway.generate(HISTORY, "SYSTEM", token=token))
        await started.wait()
        token.cancel()

        with pytest.raises(OperationCancelled):
            await call

    @pytest.mark.asyncio
    async def test_debug_callback_receives_lines(self):
        lines = []
        gateway = _gateway(lambda request: httpx.Response(200, json={"reply": "ok"}))
        gateway.set_debug_callback(lambda level, component, message: lines.append((level, component)))

        await gateway.generate(HISTORY, "SYSTEM")

        assert ("debug", "Gateway") in lines
        assert ("info", "Gateway") in lines

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client_open(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        gateway = HttpResponseGateway(url=URL, client=client)

        async with gateway:
            pass

        assert not client.is_closed
        await client.aclose()


class TestGatewayFactory:
    """Tests for create_response_gateway."""

    @pytest.mark.asyncio
    async def test_create_http_gateway(self):
        gateway = create_response_gateway("http", url=URL, timeout=5.0)

        assert isinstance(gateway, HttpResponseGateway)
        assert gateway.url == URL
        assert gateway.backend_type == "http"
        await gateway.close()

    def test_create_gemini_gateway_requires_api_key(self):
        with pytest.raises(TypeError, match="api_key"):
            create_response_gateway("gemini")

    def test_create_gemini_gateway(self):
        from reelchat.gateway import GeminiResponseGateway

        gateway = create_response_gateway("gemini", api_key="fake-key", model="gemini-2.5-pro")

        assert isinstance(gateway, GeminiResponseGateway)
        assert gateway.model == "gemini-2.5-pro"

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unsupported gateway backend"):
            create_response_gateway("carrier-pigeon")


class TestGeminiHistoryConversion:
    """Tests for Gemini content conversion."""

    def test_convert_history_keeps_roles(self):
        from reelchat.gateway import GeminiResponseGateway

        contents = GeminiResponseGateway.convert_history(HISTORY)

        assert [c.role for c in contents] == ["model", "user"]
        assert contents[1].parts[0].text == "recommend a drama"


def _gemini_gateway(generate_content) -> "GeminiResponseGateway":
    from reelchat.gateway import GeminiResponseGateway

    gateway = GeminiResponseGateway(api_key="test-key")
    gateway._client = SimpleNamespace(
        aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content))
    )
    return gateway


class TestGeminiResponseGateway:
    """Tests for GeminiResponseGateway failure handling."""

    @pytest.mark.asyncio
    async def test_returns_candidate_text(self):
        async def generate_content(**kwargs):
            part = SimpleNamespace(text="Squid Game is rated 8.0.")
            return SimpleNamespace(
                candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))]
            )

        gateway = _gemini_gateway(generate_content)

        assert await gateway.generate(HISTORY, "be brief") == "Squid Game is rated 8.0."

    @pytest.mark.asyncio
    async def test_api_error_keeps_status_code(self):
        from google.genai import errors

        async def generate_content(**kwargs):
            raise errors.ClientError(
                429, {"error": {"message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}}
            )

        gateway = _gemini_gateway(generate_content)

        with pytest.raises(GatewayError) as exc_info:
            await gateway.generate(HISTORY, "be brief")
        assert exc_info.value.message == "Resource exhausted"
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_transport_failure_is_a_gateway_error(self):
        async def generate_content(**kwargs):
            raise httpx.ConnectError("connection refused")

        gateway = _gemini_gateway(generate_content)

        with pytest.raises(GatewayError, match="connection refused") as exc_info:
            await gateway.generate(HISTORY, "be brief")
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_timeout_is_a_gateway_error(self):
        async def generate_content(**kwargs):
            raise httpx.ReadTimeout("read timed out")

        gateway = _gemini_gateway(generate_content)

        with pytest.raises(GatewayError, match="Request timed out"):
            await gateway.generate(HISTORY, "be brief")

    @pytest.mark.asyncio
    async def test_empty_answer_is_a_gateway_error(self):
        async def generate_content(**kwargs):
            return SimpleNamespace(candidates=[], text="")

        gateway = _gemini_gateway(generate_content)

        with pytest.raises(GatewayError, match="Empty response from model"):
            await gateway.generate(HISTORY, "be brief")

    @pytest.mark.asyncio
    async def test_session_recovers_from_transport_failure(self):
        from reelchat.session import ChatSession, SessionState

        async def generate_content(**kwargs):
            raise httpx.ConnectError("connection refused")

        session = ChatSession(gateway=_gemini_gateway(generate_content))
        before = len(session.history)

        assert await session.submit("recommend a drama") is False

        assert session.state is SessionState.IDLE
        assert len(session.history) == before
        assert session.error == "connection refused"
