from __future__ import annotations

from typing import Any


class RelayError(Exception):
    """
    Base class for failures that map onto a JSON error response.

    The handler boundary turns these into:

      { "error": <message>, "details": <details> }   (details only when set)
    """

    status_code: int = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class AuthenticationError(RelayError):
    status_code = 401


class InvalidEventError(RelayError):
    status_code = 400


class UnknownAgentError(InvalidEventError):
    pass


class MissingCredentialsError(InvalidEventError):
    pass


class UpstreamError(RelayError):
    status_code = 500
