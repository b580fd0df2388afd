from .gemini import GeminiResponseGateway
from .http import HttpResponseGateway

__all__ = ["GeminiResponseGateway", "HttpResponseGateway"]
