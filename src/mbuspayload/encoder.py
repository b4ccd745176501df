"""M-Bus payload encoder.

Builds payloads in the same record format the decoder reads:

    DIF (1 byte) + VIF/VIFE chain (1+ bytes) + value (1-4 bytes)

Readings can be added as raw (DIF, VIF, value) triples, as an integer at a
given decimal scale, or as a float for which the most compact representable
scale is chosen.
"""

from __future__ import annotations

import logging

from .exceptions import BufferOverflowError, NegativeValueError, UnsupportedRangeError
from .protocol.data import encode_bcd, encode_binary
from .protocol.dif import DIF, DIF_MAXIMUM_LENGTH
from .protocol.value import ValueCode
from .protocol.vif import find_vif, vif_to_bytes

logger = logging.getLogger(__name__)

MBUS_DEFAULT_BUFFER_SIZE = 32  # Default payload size limit in bytes

FIELD_VALUE_LIMIT = 1 << (8 * DIF_MAXIMUM_LENGTH)  # Values must fit the widest binary coding

FLOAT_DECIMALS = 8  # Significant decimals kept when encoding a fractional value
FLOAT_MINIMUM = 1e-6  # Values (and fractional parts) below this count as zero


def get_code_units(code: ValueCode) -> str:
    """Display unit for a quantity code, empty for dimensionless quantities."""
    return code.units


class MBusPayload:
    """Payload builder.

    Example:
        payload = MBusPayload()
        payload.add_value(ValueCode.VOLUME_M3, 0.057)
        payload.add_field(ValueCode.ENERGY_J, 5, 36)
        bytes(payload)  # b"\\x01\\x13\\x39\\x01\\x0d\\x24"
    """

    # Public attributes
    max_size: int

    # Private attributes
    _buffer: bytearray

    def __init__(self, max_size: int = MBUS_DEFAULT_BUFFER_SIZE) -> None:
        """Initialize an empty payload.

        Args:
            max_size: Maximum payload size in bytes (default 32)
        """
        self.max_size = max_size
        self._buffer = bytearray()

    def reset(self) -> None:
        """Discard all records added so far."""
        self._buffer.clear()

    @property
    def size(self) -> int:
        """Number of bytes written."""
        return len(self._buffer)

    @property
    def buffer(self) -> bytes:
        """Copy of the payload bytes written so far."""
        return bytes(self._buffer)

    def __len__(self) -> int:
        return self.size

    def __bytes__(self) -> bytes:
        return self.buffer

    def add_raw(self, dif: int, vif: int, value: int) -> int:
        """Append one record from a raw DIF, resolved VIF and unscaled value.

        Args:
            dif: DIF byte selecting coding and length (see DataCoding)
            vif: Resolved VIF, written most significant byte first
            value: Unsigned value, truncated to the coding's length

        Returns:
            Payload size after the record was added

        Raises:
            UnsupportedCodingError: If the DIF length is outside 1-4 bytes
            BufferOverflowError: If the record does not fit into max_size
        """
        parsed_dif = DIF.from_code(dif)
        vif_bytes = vif_to_bytes(vif)

        record_size = 1 + len(vif_bytes) + parsed_dif.length
        if self.size + record_size > self.max_size:
            raise BufferOverflowError(
                f"Buffer overflow: record needs {record_size} bytes, {self.max_size - self.size} left"
            )

        encode = encode_bcd if parsed_dif.bcd else encode_binary

        self._buffer += parsed_dif.to_bytes()
        self._buffer += vif_bytes
        self._buffer += encode(value, parsed_dif.length)

        logger.debug("Encoded record: DIF 0x%02X VIF 0x%02X value %d", dif, vif, value)
        return self.size

    def add_field(self, code: ValueCode, scalar: int, value: int) -> int:
        """Append a reading given as value * 10 ** scalar.

        The smallest binary coding that holds value is used.

        Raises:
            NegativeValueError: If value is negative
            UnsupportedRangeError: If no VIF encodes code at this scalar, or
                value does not fit into 4 bytes
            BufferOverflowError: If the record does not fit into max_size
        """
        if value < 0:
            raise NegativeValueError(f"Negative values are not supported: {value}")
        if value >= FIELD_VALUE_LIMIT:
            raise UnsupportedRangeError(f"Value {value} of {code.name} does not fit into {DIF_MAXIMUM_LENGTH} bytes")

        vif = find_vif(code, scalar)
        if vif is None:
            raise UnsupportedRangeError(f"No VIF for {code.name} at scalar {scalar}")

        length = 1
        remaining = value >> 8
        while remaining > 0:
            remaining >>= 8
            length += 1

        return self.add_raw(length, vif, value)

    def add_value(self, code: ValueCode, value: float) -> int:
        """Append a reading, choosing the most compact representable scale.

        Fractional values keep FLOAT_DECIMALS significant decimals, then
        trailing zeros are moved into the scalar while a VIF for the larger
        scalar exists.

        Raises:
            NegativeValueError: If value is negative
            UnsupportedRangeError: If no scale for code can represent value, or
                the scaled value does not fit into 4 bytes
            BufferOverflowError: If the record does not fit into max_size
        """
        if value < 0:
            raise NegativeValueError(f"Negative values are not supported: {value}")

        if value < FLOAT_MINIMUM:
            return self.add_field(code, 0, 0)

        int_size = 0
        integer_part = int(value)
        while integer_part > 10:
            integer_part //= 10
            int_size += 1

        scalar = 0
        if value - int(value) > FLOAT_MINIMUM:
            scalar = int_size - FLOAT_DECIMALS
            value *= 10**-scalar

        valid = find_vif(code, scalar) is not None

        scaled = int(value + 0.5)
        while scaled > 0 and scaled % 10 == 0:
            scalar += 1
            scaled //= 10
            if find_vif(code, scalar) is None:
                if valid:
                    scalar -= 1
                    scaled *= 10
                    break
            else:
                valid = True

        return self.add_field(code, scalar, scaled)
