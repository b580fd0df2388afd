from .base import ResponseGateway
from .errors import GatewayError
from .factory import create_response_gateway
from .providers import GeminiResponseGateway, HttpResponseGateway

__all__ = [
    "GatewayError",
    "GeminiResponseGateway",
    "HttpResponseGateway",
    "ResponseGateway",
    "create_response_gateway",
]
