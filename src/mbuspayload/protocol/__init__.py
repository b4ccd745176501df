"""Protocol layer components for M-Bus payload record encoding/decoding.

This package contains the DIF, VIF and value handling used by the payload
decoder and encoder.
"""

from .dif import DIF, DataCoding
from .value import ValueCode, ValueUnit
from .vif import VIFDefinition, find_definition, find_vif

__all__ = [
    # DIF
    "DIF",
    "DataCoding",
    # Values
    "ValueCode",
    "ValueUnit",
    # VIF
    "VIFDefinition",
    "find_definition",
    "find_vif",
]
