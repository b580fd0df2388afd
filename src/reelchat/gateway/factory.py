from typing import Any

from .base import ResponseGateway


def create_response_gateway(backend: str = "http", **config: Any) -> ResponseGateway:
    """Create a response gateway instance.

    This factory function hides the instantiation logic for different backends.

    Args:
        backend: Backend type ('http' or 'gemini')
        **config: Backend-specific configuration
            For HTTP:
                - url: str (default: 'http://localhost:3000/api/gemini')
                - timeout: float (default: 30.0)
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-2.5-flash')

    Returns:
        Initialized gateway instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> gateway = create_response_gateway(
        ...     "http",
        ...     url="https://example.org/api/gemini",
        ...     timeout=10.0
        ... )
    """
    backend_lower = backend.lower()

    if backend_lower == "http":
        from .providers.http import HttpResponseGateway
        return HttpResponseGateway(**config)

    if backend_lower == "gemini":
        if "api_key" not in config:
            raise TypeError("Gemini gateway requires 'api_key' in config")
        from .providers.gemini import GeminiResponseGateway
        return GeminiResponseGateway(**config)

    raise ValueError(
        f"Unsupported gateway backend: {backend}. "
        f"Supported backends: 'http', 'gemini'"
    )
