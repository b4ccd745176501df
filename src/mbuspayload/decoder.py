"""M-Bus payload decoder.

Turns a payload made of consecutive data records into decoded fields. Each
record is laid out as:

    DIF (1 byte) + VIF/VIFE chain (1+ bytes) + value (1-4 bytes)

Decoding is all-or-nothing: the first record that cannot be parsed raises
and no fields are returned.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .exceptions import BufferOverflowError, UnsupportedVIFError
from .protocol.data import decode_bcd, decode_binary
from .protocol.dif import DIF
from .protocol.value import ValueCode
from .protocol.vif import find_definition, read_vif

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class DecodedField:
    """One decoded data record.

    Attributes:
        index: 1-based position in the payload
        vif: Resolved VIF (VIF/VIFE bytes folded into one integer)
        name: Quantity name (e.g. "energy")
        units: Display unit, empty for dimensionless quantities
        value: Raw value scaled by the VIF's power of ten
        code: Quantity code of the matched definition
        scalar: Decimal exponent applied to raw_value
        raw_value: Unscaled integer read from the value bytes
    """

    index: int
    vif: int
    name: str
    units: str
    value: float
    code: ValueCode
    scalar: int
    raw_value: int

    def as_dict(self) -> dict[str, Any]:
        """Plain mapping of the reported keys (index, vif, name, units, value)."""
        return {
            "index": self.index,
            "vif": self.vif,
            "name": self.name,
            "units": self.units,
            "value": self.value,
        }


def decode(payload: bytes | Sequence[int]) -> list[DecodedField]:
    """Decode every data record in a payload.

    Args:
        payload: Raw payload bytes (or a sequence of byte values)

    Returns:
        Decoded fields in payload order

    Raises:
        UnsupportedCodingError: If a DIF length is outside 1-4 bytes
        BufferOverflowError: If the payload ends inside a record
        UnsupportedVIFError: If a VIF has no definition
        ByteOverflowError: If a value byte is outside 0x00-0xFF
    """
    fields: list[DecodedField] = []
    position = 0

    while position < len(payload):
        dif = DIF.from_code(payload[position])
        position += 1

        vif, position = read_vif(payload, position)

        definition = find_definition(vif)
        if definition is None:
            raise UnsupportedVIFError(vif)

        if position + dif.length > len(payload):
            raise BufferOverflowError(
                f"Buffer overflow: VIF 0x{vif:02X} needs {dif.length} value bytes, "
                f"{len(payload) - position} left"
            )

        data = payload[position : position + dif.length]
        position += dif.length

        raw_value = decode_bcd(data) if dif.bcd else decode_binary(data)
        scalar = definition.scalar_for(vif)

        field = DecodedField(
            index=len(fields) + 1,
            vif=vif,
            name=definition.name,
            units=definition.units,
            value=raw_value * 10.0**scalar,
            code=definition.code,
            scalar=scalar,
            raw_value=raw_value,
        )
        logger.debug(
            "Decoded record %d: VIF 0x%02X raw %d scalar %d -> %s %s %s",
            field.index,
            vif,
            raw_value,
            scalar,
            field.name,
            field.value,
            field.units,
        )
        fields.append(field)

    return fields
