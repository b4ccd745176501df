"""
mbuspayload: Encoder and decoder for compact M-Bus data record payloads.

Payloads are sequences of M-Bus data records (DIF, VIF/VIFE chain, value)
as sent by low-power metering devices over LPWAN networks. The decoder
turns them into named, unit-tagged, scaled readings.
"""

from __future__ import annotations

from .adapters import network_decoder, pipeline_decoder
from .decoder import DecodedField, decode
from .encoder import MBusPayload, get_code_units
from .exceptions import (
    BufferOverflowError,
    ByteOverflowError,
    MBusErrorKind,
    MBusPayloadError,
    NegativeValueError,
    UnsupportedCodingError,
    UnsupportedRangeError,
    UnsupportedVIFError,
)
from .protocol import DataCoding, ValueCode

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Decoding
    "DecodedField",
    "decode",
    "network_decoder",
    "pipeline_decoder",
    # Encoding
    "DataCoding",
    "MBusPayload",
    "ValueCode",
    "get_code_units",
    # Errors
    "BufferOverflowError",
    "ByteOverflowError",
    "MBusErrorKind",
    "MBusPayloadError",
    "NegativeValueError",
    "UnsupportedCodingError",
    "UnsupportedRangeError",
    "UnsupportedVIFError",
]
