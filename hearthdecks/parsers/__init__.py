"""Deck code parsing: varint reader and binary deck layout decoder."""

from hearthdecks.parsers.deck_code import (
    DecodeFailure,
    DecodePhase,
    DeckCodeError,
    MalformedEncoding,
    TruncatedInput,
    decode_deck_bytes,
    decode_deck_code,
    parse_deck_code,
    strip_deck_code_prefix,
)
from hearthdecks.parsers.varint import (
    MAX_VARINT_BYTES,
    VarintTooLongError,
    VarintTruncatedError,
    read_varint,
)

__all__ = [
    "MAX_VARINT_BYTES",
    "DecodeFailure",
    "DecodePhase",
    "DeckCodeError",
    "MalformedEncoding",
    "TruncatedInput",
    "VarintTooLongError",
    "VarintTruncatedError",
    "decode_deck_bytes",
    "decode_deck_code",
    "parse_deck_code",
    "read_varint",
    "strip_deck_code_prefix",
]
