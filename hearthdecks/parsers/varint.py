"""
Variable-length integer reader.

Deck codes store every number as an unsigned varint: each byte contributes
its low 7 bits, least significant group first, and a set high bit means
another byte follows.

A varint is at most MAX_VARINT_BYTES long (64-bit values). A longer
continuation run is rejected without reading past the limit.
"""

_CONTINUATION_BIT = 0x80
_PAYLOAD_MASK = 0x7F

MAX_VARINT_BYTES = 10


class VarintTruncatedError(Exception):
    """Raised when the buffer ends before a varint's terminating byte."""

    def __init__(self, offset: int, length: int) -> None:
        self.offset = offset
        self.length = length
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"Varint at offset {self.offset} runs past end of {self.length}-byte buffer"


class VarintTooLongError(VarintTruncatedError):
    """Raised when no terminating byte occurs within MAX_VARINT_BYTES."""

    def _describe(self) -> str:
        return f"Varint at offset {self.offset} exceeds {MAX_VARINT_BYTES} bytes"


def read_varint(data: bytes, offset: int) -> tuple[int, int]:
    """
    Read one unsigned varint.

    Args:
        data: Buffer to read from
        offset: Index of the varint's first byte

    Returns:
        (value, offset of the byte following the varint)

    Raises:
        VarintTruncatedError: If no terminating byte exists before the end
        VarintTooLongError: If no terminating byte exists within MAX_VARINT_BYTES
    """
    value = 0
    shift = 0
    position = offset
    limit = min(len(data), offset + MAX_VARINT_BYTES)

    while position < limit:
        byte = data[position]
        value |= (byte & _PAYLOAD_MASK) << shift
        position += 1

        if not byte & _CONTINUATION_BIT:
            return value, position

        shift += 7

    if limit < len(data):
        raise VarintTooLongError(offset, len(data))
    raise VarintTruncatedError(offset, len(data))
