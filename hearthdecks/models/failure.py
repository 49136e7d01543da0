"""
Tool Response Envelope: Unified Outcome Classification.

Every tool result leaves the system through this envelope, whether the call
succeeded or failed. Failures carry a success flag, a human-readable message,
a per-tool error code and a machine-readable failure kind.

INVARIANT: No core failure reaches a transport as an unstructured crash.

Response types:
- Success: Operation completed, `data` is present
- KnownFailure: The system knows why it failed (bad deck code, missing card)
- UnknownFailure: The system does not know why it failed
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"

    # Deck code failures
    MALFORMED_ENCODING = "malformed_encoding"
    TRUNCATED_INPUT = "truncated_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Unknown
    UNKNOWN = "unknown"


class ToolErrorCode(str, Enum):
    """Per-tool error codes surfaced to clients."""

    DECK_PARSE_ERROR = "DECK_PARSE_ERROR"
    CARD_SEARCH_ERROR = "CARD_SEARCH_ERROR"
    CARD_INFO_ERROR = "CARD_INFO_ERROR"


UNKNOWN_FAILURE_MESSAGE = (
    "I failed and I don't know why. Try simplifying the request or retrying."
)


class ToolResponse(BaseModel):
    """
    Universal response envelope for all tools.

    `data` is present only on success; `error`, `code` and `kind`
    are present only on failure.
    """

    success: bool = Field(
        ...,
        description="Whether the tool call succeeded",
    )
    data: Any | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    error: str | None = Field(
        default=None,
        description="Human-readable explanation of what went wrong",
    )
    code: ToolErrorCode | None = Field(
        default=None,
        description="Error code of the tool that failed",
    )
    kind: FailureKind | None = Field(
        default=None,
        description="Classification of the failure",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict, dropping empty failure fields."""
        return self.model_dump(mode="json", exclude_none=True)


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_response(self, code: ToolErrorCode) -> ToolResponse:
        """Convert to a failure ToolResponse for the given tool."""
        return create_known_failure(code, self.kind, self.message, self.detail)


def create_success(data: Any) -> ToolResponse:
    """Create a success response."""
    return ToolResponse(success=True, data=data)


def create_known_failure(
    code: ToolErrorCode,
    kind: FailureKind,
    message: str,
    detail: str | None = None,
) -> ToolResponse:
    """
    Create a known failure response.

    Args:
        code: Error code of the tool that failed
        kind: The classification of the failure
        message: Explanation of what went wrong
        detail: Optional technical detail

    Returns:
        A failure ToolResponse
    """
    return ToolResponse(
        success=False,
        error=message,
        code=code,
        kind=kind,
        detail=detail,
    )


def create_unknown_failure(code: ToolErrorCode, exception: Exception) -> ToolResponse:
    """
    Create an unknown failure response from an exception.

    The message is fixed. Only the exception type is reported as detail.
    """
    return ToolResponse(
        success=False,
        error=UNKNOWN_FAILURE_MESSAGE,
        code=code,
        kind=FailureKind.UNKNOWN,
        detail=type(exception).__name__,
    )
