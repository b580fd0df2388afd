"""Google Gemini gateway implementation.

Uses the official Google GenAI SDK to call the model directly, for setups
without a proxy endpoint.
Reference: https://github.com/googleapis/python-genai
"""

from collections.abc import Sequence
from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from ...cancellation import CancellationToken, OperationCancelled
from ...conversation import Message
from ..base import ResponseGateway
from ..errors import UNKNOWN_SERVER_ERROR, GatewayError

DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiResponseGateway(ResponseGateway):
    """Gateway talking to Gemini through google-genai.

    Hidden design decisions:
    - Google GenAI client initialization
    - Message format conversion to types.Content
    - Mapping SDK failures and empty answers to GatewayError
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
        **client_kwargs: Any
    ):
        """Initialize Gemini gateway.

        Args:
            api_key: Google AI API key
            model: Model name (gemini-2.5-flash, gemini-2.5-pro, ...)
            temperature: Sampling temperature
            **client_kwargs: Additional kwargs for genai.Client
        """
        self._model = model
        self._temperature = temperature
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    @property
    def backend_type(self) -> str:
        return "gemini"

    @staticmethod
    def convert_history(history: Sequence[Message]) -> list[types.Content]:
        """Convert messages to Gemini contents, keeping the user/model roles."""
        return [
            types.Content(role=message.role, parts=[types.Part(text=message.text)])
            for message in history
        ]

    @staticmethod
    def _extract_content(response: Any) -> str:
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)
        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    async def generate(
        self,
        history: Sequence[Message],
        system_instruction: str,
        token: CancellationToken | None = None,
    ) -> str:
        config = types.GenerateContentConfig(
            temperature=self._temperature,
            system_instruction=system_instruction,
        )
        request = self._client.aio.models.generate_content(
            model=self._model,
            contents=self.convert_history(history),
            config=config,
        )
        self._debug("debug", f"generate_content {self._model} ({len(history)} turns)")

        try:
            if token is not None:
                response = await token.run(request)
            else:
                response = await request
        except OperationCancelled:
            raise
        except errors.APIError as e:
            self._debug("error", f"Gemini API error {e.code}: {e.message}")
            raise GatewayError(e.message or str(e), status_code=e.code) from e
        except httpx.TimeoutException as e:
            self._debug("error", f"Gemini request timed out: {e}")
            raise GatewayError(f"Request timed out: {e}") from e
        except Exception as e:
            # Transport and SDK failures other than API responses
            self._debug("error", f"Gemini request failed: {type(e).__name__}: {e}")
            raise GatewayError(str(e) or UNKNOWN_SERVER_ERROR) from e

        content = self._extract_content(response)
        if not content:
            raise GatewayError("Empty response from model")
        return content

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
