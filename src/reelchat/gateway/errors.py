"""Gateway error types."""

UNKNOWN_SERVER_ERROR = "Unknown server error"


class GatewayError(Exception):
    """Remote completion call failed or returned a non-success response.

    Attributes:
        message: Error text reported by the server, or a generic fallback
        status_code: HTTP status when the server answered, None for transport failures
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
