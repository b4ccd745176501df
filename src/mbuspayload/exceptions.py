"""M-Bus payload exception classes."""

from __future__ import annotations

from enum import StrEnum


class MBusErrorKind(StrEnum):
    """Discriminator shared by all payload errors."""

    UNSUPPORTED_CODING = "unsupported_coding"
    BUFFER_OVERFLOW = "buffer_overflow"
    UNSUPPORTED_VIF = "unsupported_vif"
    BYTE_OVERFLOW = "byte_overflow"
    UNSUPPORTED_RANGE = "unsupported_range"
    NEGATIVE_VALUE = "negative_value"


class MBusPayloadError(Exception):
    """Base exception for all M-Bus payload errors."""

    kind: MBusErrorKind


class UnsupportedCodingError(MBusPayloadError):
    """DIF data length code outside the supported 1-4 byte range."""

    kind = MBusErrorKind.UNSUPPORTED_CODING

    def __init__(self, dif: int) -> None:
        self.dif = dif
        super().__init__(f"Unsupported coding: 0x{dif & 0x0F:02X} (DIF 0x{dif:02X})")


class BufferOverflowError(MBusPayloadError):
    """Payload ended early, or the encoder buffer is full."""

    kind = MBusErrorKind.BUFFER_OVERFLOW


class UnsupportedVIFError(MBusPayloadError):
    """Resolved VIF matches no entry in the definition table."""

    kind = MBusErrorKind.UNSUPPORTED_VIF

    def __init__(self, vif: int) -> None:
        self.vif = vif
        super().__init__(f"Unsupported VIF: 0x{vif:02X}")


class ByteOverflowError(MBusPayloadError):
    """Value byte outside 0x00-0xFF."""

    kind = MBusErrorKind.BYTE_OVERFLOW

    def __init__(self, byte: int) -> None:
        self.byte = byte
        super().__init__(f"Byte value overflow: {byte}")


class UnsupportedRangeError(MBusPayloadError):
    """Value code and scalar combination has no VIF."""

    kind = MBusErrorKind.UNSUPPORTED_RANGE


class NegativeValueError(MBusPayloadError):
    """Encoder was given a negative reading."""

    kind = MBusErrorKind.NEGATIVE_VALUE
