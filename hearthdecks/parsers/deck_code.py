"""
Deck Code Decoder.

THIS MODULE HANDLES STRUCTURE ONLY.

A deck code is base64 wrapping a fixed binary layout produced by the game
client:

    reserved byte | version byte | format byte
    varint N, then N hero dbf ids
    varint N, then N dbf ids of cards with 1 copy
    varint N, then N dbf ids of cards with 2 copies
    varint N, then N pairs of (dbf id, copies)

Every number after the header is an unsigned varint. The layout has no
length prefix and no checksum, so the decoder treats running out of bytes
as a failure of the section being read.

Decoding never partially succeeds. The result is either a complete
DecodedDeck or a failure value (MalformedEncoding / TruncatedInput).
"""

from __future__ import annotations

import base64
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from hearthdecks.models.deck import BucketKind, CardCount, DecodedDeck, DeckHeader
from hearthdecks.models.failure import FailureKind, KnownError
from hearthdecks.parsers.varint import VarintTruncatedError, read_varint

logger = logging.getLogger(__name__)

# Strips the common "AAE..." lead-in of pasted codes. Used for log previews
# only; decoding always runs on the string exactly as given.
_DECK_CODE_PREFIX_PATTERN = re.compile(r"^AAE[A-Z]*=*")

_PREVIEW_LENGTH = 20


# =============================================================================
# DECODE FAILURES
# =============================================================================


class DecodePhase(str, Enum):
    """Section of the layout being read when decoding stopped."""

    HEADER = "header"
    HEROES = "heroes"
    SINGLES = "singles"
    DOUBLES = "doubles"
    MULTIPLES = "multiples"


@dataclass(frozen=True, slots=True)
class MalformedEncoding:
    """The deck code is not valid base64."""

    kind: ClassVar[FailureKind] = FailureKind.MALFORMED_ENCODING

    reason: str

    @property
    def message(self) -> str:
        return f"Invalid deck code format: not valid base64 ({self.reason})"


@dataclass(frozen=True, slots=True)
class TruncatedInput:
    """
    A section of the layout could not be read to its end.

    Either the bytes ran out, or a varint ran on past MAX_VARINT_BYTES.
    """

    kind: ClassVar[FailureKind] = FailureKind.TRUNCATED_INPUT

    phase: DecodePhase
    offset: int
    length: int

    @property
    def message(self) -> str:
        return (
            f"Invalid deck code format: incomplete {self.phase.value} section "
            f"(offset {self.offset} of {self.length} bytes)"
        )


DecodeFailure = MalformedEncoding | TruncatedInput


class DeckCodeError(KnownError):
    """
    Raised at the pipeline boundary when a deck code cannot be decoded.

    Wraps the decoder's failure value so callers can still inspect it.
    """

    def __init__(self, failure: DecodeFailure) -> None:
        self.failure = failure
        detail = failure.phase.value if isinstance(failure, TruncatedInput) else None
        super().__init__(kind=failure.kind, message=failure.message, detail=detail)


# =============================================================================
# DECODER
# =============================================================================

# Card buckets in layout order
_CARD_BUCKETS: tuple[tuple[DecodePhase, BucketKind], ...] = (
    (DecodePhase.SINGLES, BucketKind.SINGLE),
    (DecodePhase.DOUBLES, BucketKind.DOUBLE),
    (DecodePhase.MULTIPLES, BucketKind.MULTIPLE),
)


class _DeckReader:
    """Cursor over the decoded bytes; every read advances one shared offset."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def read_byte(self) -> int:
        if self.offset >= len(self.data):
            raise VarintTruncatedError(self.offset, len(self.data))
        byte = self.data[self.offset]
        self.offset += 1
        return byte

    def read_varint(self) -> int:
        value, self.offset = read_varint(self.data, self.offset)
        return value

    def read_header(self) -> DeckHeader:
        reserved = self.read_byte()
        version = self.read_byte()
        format_code = self.read_byte()
        return DeckHeader(reserved=reserved, version=version, format_code=format_code)

    def read_heroes(self) -> list[int]:
        heroes: list[int] = []
        for _ in range(self.read_varint()):
            heroes.append(self.read_varint())
        return heroes

    def read_bucket(self, bucket: BucketKind) -> list[CardCount]:
        """Read one count-prefixed card bucket."""
        cards: list[CardCount] = []
        for _ in range(self.read_varint()):
            dbf_id = self.read_varint()
            count = bucket.fixed_count
            if count is None:
                count = self.read_varint()
            cards.append(CardCount(dbf_id=dbf_id, count=count))
        return cards


def strip_deck_code_prefix(deck_code: str) -> str:
    """
    Remove the "AAE..." lead-in and surrounding whitespace.

    The result is NOT a decodable deck code. It only serves as a short,
    readable preview in logs.
    """
    return _DECK_CODE_PREFIX_PATTERN.sub("", deck_code).strip()


def decode_base64(deck_code: str) -> bytes | MalformedEncoding:
    """
    Decode a deck code string to raw bytes.

    Uses the standard alphabet in strict mode. Missing trailing padding is
    restored first since copied codes often lose it.
    """
    padded = deck_code + "=" * (-len(deck_code) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except ValueError as e:
        return MalformedEncoding(reason=str(e))


def decode_deck_bytes(data: bytes) -> DecodedDeck | TruncatedInput:
    """
    Decode the binary deck layout.

    Bytes following the multiples section are ignored.

    Returns:
        The complete DecodedDeck, or TruncatedInput naming the section
        that ran out of data
    """
    reader = _DeckReader(data)
    phase = DecodePhase.HEADER

    try:
        header = reader.read_header()

        phase = DecodePhase.HEROES
        heroes = reader.read_heroes()

        cards: list[CardCount] = []
        for phase, bucket in _CARD_BUCKETS:
            cards.extend(reader.read_bucket(bucket))
    except VarintTruncatedError as e:
        return TruncatedInput(phase=phase, offset=e.offset, length=len(data))

    return DecodedDeck(header=header, heroes=tuple(heroes), cards=tuple(cards))


def decode_deck_code(deck_code: str) -> DecodedDeck | DecodeFailure:
    """
    Decode a deck code string.

    Args:
        deck_code: Base64 deck code as exported by the game client

    Returns:
        DecodedDeck on success, otherwise MalformedEncoding or TruncatedInput
    """
    logger.debug("Decoding deck code %s...", strip_deck_code_prefix(deck_code)[:_PREVIEW_LENGTH])

    data = decode_base64(deck_code)
    if isinstance(data, MalformedEncoding):
        return data

    return decode_deck_bytes(data)


def parse_deck_code(deck_code: str) -> DecodedDeck:
    """
    Decode a deck code, raising on failure.

    Raises:
        DeckCodeError: Carrying the MalformedEncoding / TruncatedInput value
    """
    result = decode_deck_code(deck_code)
    if isinstance(result, DecodedDeck):
        return result
    raise DeckCodeError(result)
