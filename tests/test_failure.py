"""Tests for the tool response envelope."""

from hearthdecks.models.failure import (
    UNKNOWN_FAILURE_MESSAGE,
    FailureKind,
    KnownError,
    ToolErrorCode,
    create_known_failure,
    create_success,
    create_unknown_failure,
)
from hearthdecks.parsers.deck_code import DeckCodeError, MalformedEncoding


class TestToolResponse:
    def test_success_has_no_failure_fields(self) -> None:
        response = create_success({"cards": []})

        assert response.to_payload() == {"success": True, "data": {"cards": []}}

    def test_known_failure_payload(self) -> None:
        response = create_known_failure(
            ToolErrorCode.CARD_INFO_ERROR,
            FailureKind.NOT_FOUND,
            "Card with ID X not found",
        )

        assert response.to_payload() == {
            "success": False,
            "error": "Card with ID X not found",
            "code": "CARD_INFO_ERROR",
            "kind": "not_found",
        }

    def test_unknown_failure_uses_fixed_message(self) -> None:
        response = create_unknown_failure(ToolErrorCode.DECK_PARSE_ERROR, KeyError("secret"))

        assert response.error == UNKNOWN_FAILURE_MESSAGE
        assert response.kind == FailureKind.UNKNOWN
        assert response.detail == "KeyError"
        assert "secret" not in str(response.to_payload())


class TestKnownError:
    def test_to_response(self) -> None:
        error = KnownError(FailureKind.INVALID_INPUT, "limit must be an integer", detail="limit")

        response = error.to_response(ToolErrorCode.CARD_SEARCH_ERROR)

        assert response.success is False
        assert response.code == ToolErrorCode.CARD_SEARCH_ERROR
        assert response.kind == FailureKind.INVALID_INPUT
        assert response.detail == "limit"

    def test_deck_code_error_is_known(self) -> None:
        """Decoder failures map onto the envelope like any known error."""
        error = DeckCodeError(MalformedEncoding(reason="Incorrect padding"))

        response = error.to_response(ToolErrorCode.DECK_PARSE_ERROR)

        assert isinstance(error, KnownError)
        assert response.kind == FailureKind.MALFORMED_ENCODING
        assert "Incorrect padding" in response.error
