"""Value decoding and encoding for compact payload records.

Value bytes are stored least significant byte first: when decoding, the LAST
byte of the slice is the most significant one.

Supported codings:
    - Binary: unsigned integer, 1 to 4 bytes
    - BCD: two decimal digits per byte (high nibble = tens, low nibble = units)

BCD nibbles above 9 are not rejected; they contribute their nibble value as
a digit, exactly like a well-formed digit would.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..exceptions import ByteOverflowError

BYTE_MAXIMUM = 0xFF

BCD_DIGIT_BIT_MASK = 0x0F  # Low nibble: units digit
BCD_DIGIT_BIT_SHIFT = 4  # High nibble: tens digit


def _check_byte(byte: int) -> int:
    if not 0 <= byte <= BYTE_MAXIMUM:
        raise ByteOverflowError(byte)
    return byte


# =============================================================================
# Decoders
# =============================================================================


def decode_binary(data: Sequence[int]) -> int:
    """Decode an unsigned binary value.

    Args:
        data: Value bytes, least significant first

    Returns:
        Decoded unsigned integer

    Raises:
        ByteOverflowError: If an item is outside 0x00-0xFF
    """
    value = 0
    for byte in reversed(data):
        value = (value << 8) | _check_byte(byte)
    return value


def decode_bcd(data: Sequence[int]) -> int:
    """Decode a packed BCD value.

    Example: [0x34, 0x12] decodes to 1234.

    Args:
        data: Value bytes, least significant digit pair first

    Returns:
        Decoded integer

    Raises:
        ByteOverflowError: If an item is outside 0x00-0xFF
    """
    value = 0
    for byte in reversed(data):
        _check_byte(byte)
        value = value * 100 + (byte >> BCD_DIGIT_BIT_SHIFT) * 10 + (byte & BCD_DIGIT_BIT_MASK)
    return value


# =============================================================================
# Encoders
# =============================================================================


def encode_binary(value: int, length: int) -> bytes:
    """Encode an unsigned value into length bytes, least significant first.

    Bits that do not fit into length bytes are dropped.
    """
    return bytes((value >> (8 * position)) & BYTE_MAXIMUM for position in range(length))


def encode_bcd(value: int, length: int) -> bytes:
    """Encode a value as length bytes of BCD digit pairs, least significant first.

    Digits that do not fit into length bytes are dropped.
    """
    encoded = bytearray()
    for _ in range(length):
        encoded.append(((value // 10) % 10) << BCD_DIGIT_BIT_SHIFT | (value % 10))
        value //= 100
    return bytes(encoded)
