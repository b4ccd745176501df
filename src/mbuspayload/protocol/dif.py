"""DIF (Data Information Field) interpretation for compact payload records.

Each record starts with one DIF byte. Only the data field (bits 0-3) is
interpreted:

    bit 3     : BCD flag (value bytes hold packed decimal digit pairs)
    bits 0-2  : value length in bytes, 1 to 4 supported

Bits 4-7 (function, storage number, extension) are carried through but not
interpreted. A DIF with the extension bit set is NOT followed by DIFE bytes
in this format.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache

from ..exceptions import UnsupportedCodingError

# =============================================================================
# DIF Constants
# =============================================================================


DIF_BCD_BIT_MASK = 0b00001000  # Bit 3: value is BCD encoded
DIF_LENGTH_BIT_MASK = 0b00000111  # Bits 0-2: value length in bytes

DIF_MINIMUM_LENGTH = 1
DIF_MAXIMUM_LENGTH = 4


class DataCoding(IntEnum):
    """DIF codes produced by the encoder.

    Binary codes hold an unsigned integer, BCD codes hold two decimal digits
    per byte.
    """

    BIT_8 = 0x01
    BIT_16 = 0x02
    BIT_24 = 0x03
    BIT_32 = 0x04
    BCD_2 = 0x09
    BCD_4 = 0x0A
    BCD_6 = 0x0B
    BCD_8 = 0x0C


# =============================================================================
# DIF Class
# =============================================================================


@dataclass(frozen=True)
class DIF:
    """Parsed DIF byte.

    Attributes:
        field_code: The raw DIF byte value
        bcd: True if value bytes are packed BCD
        length: Number of value bytes following the VIF/VIFE chain (1-4)
    """

    field_code: int
    bcd: bool
    length: int

    @staticmethod
    @lru_cache(maxsize=256)
    def from_code(field_code: int) -> DIF:
        """Interpret a DIF byte.

        Args:
            field_code: The DIF byte value (0x00-0xFF)

        Returns:
            Parsed DIF

        Raises:
            UnsupportedCodingError: If the length bits are outside 1-4
        """
        length = field_code & DIF_LENGTH_BIT_MASK
        if not DIF_MINIMUM_LENGTH <= length <= DIF_MAXIMUM_LENGTH:
            raise UnsupportedCodingError(field_code)

        return DIF(
            field_code=field_code,
            bcd=field_code & DIF_BCD_BIT_MASK == DIF_BCD_BIT_MASK,
            length=length,
        )

    def to_bytes(self) -> bytes:
        """Single byte containing the DIF field code."""
        return bytes([self.field_code])
