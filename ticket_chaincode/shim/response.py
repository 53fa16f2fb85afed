"""Chaincode response envelope returned to the host."""

from pydantic import BaseModel

OK = 200
ERROR_THRESHOLD = 400
ERROR = 500


class Response(BaseModel):
    """Result of an init or invoke call.

    Fields:
        status: OK (200) on success, ERROR (500) on failure
        message: Error message, empty on success
        payload: Raw result bytes, empty when there is nothing to return
    """

    status: int
    message: str = ""
    payload: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status < ERROR_THRESHOLD


def success(payload: bytes | None = None) -> Response:
    """Build a successful response carrying ``payload``."""
    return Response(status=OK, payload=payload or b"")


def error(message: str) -> Response:
    """Build an error response carrying ``message``."""
    return Response(status=ERROR, message=message)
