"""VIF (Value Information Field) definition table and lookup logic.

A record's VIF/VIFE chain is folded into one integer: every byte read is
appended with ``vif = (vif << 8) | byte`` and the chain continues while the
byte just read has its extension bit (bit 7) set. Extension table VIFs
(0xFB, 0xFD) therefore end up in the high byte, e.g. 0xFD 0x17 -> 0xFD17.

The resolved integer is matched against _DefinitionTable. Each definition
covers the codes ``[base, base + size)`` and each step past ``base`` adds
one decimal order of magnitude to the definition's scalar:

    scaled = raw * 10 ** (scalar + (vif - base))

Lookups scan the table in declaration order and the first match wins. The
order is part of the format: 0xFD60 (reset counter) covers 0xFD61 as well,
so the cumulation counter entry is never reached when decoding.

Codes without an entry (date/time points, HCA, medium, parameter set,
software version, customer location, access codes, password, manufacturer
specific blocks) are not supported.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

from ..exceptions import BufferOverflowError
from .value import ValueCode

# ============================================================================
# VIF Constants
# ============================================================================


VIF_EXTENSION_BIT_MASK = 0b10000000  # Bit 7: extension bit (more VIFE bytes follow)


# =============================================================================
# VIF Definition
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class VIFDefinition:
    """One range of VIF codes mapped to a quantity and decimal scale.

    Attributes:
        code: Quantity of the values described by this range
        base: Lowest resolved VIF covered
        size: Number of consecutive VIFs covered
        scalar: Base-10 exponent applied when the VIF equals base
    """

    code: ValueCode
    base: int
    size: int
    scalar: int

    @property
    def name(self) -> str:
        """Quantity name reported for VIFs in this range."""
        return self.code.quantity

    @property
    def units(self) -> str:
        """Display unit reported for VIFs in this range."""
        return self.code.units

    def __contains__(self, vif: object) -> bool:
        return isinstance(vif, int) and self.base <= vif < self.base + self.size

    def scalar_for(self, vif: int) -> int:
        """Decimal exponent for a VIF inside this range."""
        return self.scalar + (vif - self.base)


# =============================================================================
# VIF Lookup Table
# =============================================================================


_DefinitionTable: tuple[VIFDefinition, ...] = (
    # ==========================================================================
    # Primary VIF (no extension)
    # ==========================================================================
    VIFDefinition(code=ValueCode.ENERGY_WH, base=0x00, size=8, scalar=-3),
    VIFDefinition(code=ValueCode.ENERGY_J, base=0x08, size=8, scalar=0),
    VIFDefinition(code=ValueCode.VOLUME_M3, base=0x10, size=8, scalar=-6),
    VIFDefinition(code=ValueCode.MASS_KG, base=0x18, size=8, scalar=-3),
    VIFDefinition(code=ValueCode.ON_TIME_S, base=0x20, size=1, scalar=0),
    VIFDefinition(code=ValueCode.ON_TIME_MIN, base=0x21, size=1, scalar=0),
    VIFDefinition(code=ValueCode.ON_TIME_H, base=0x22, size=1, scalar=0),
    VIFDefinition(code=ValueCode.ON_TIME_DAYS, base=0x23, size=1, scalar=0),
    VIFDefinition(code=ValueCode.OPERATING_TIME_S, base=0x24, size=1, scalar=0),
    VIFDefinition(code=ValueCode.OPERATING_TIME_MIN, base=0x25, size=1, scalar=0),
    VIFDefinition(code=ValueCode.OPERATING_TIME_H, base=0x26, size=1, scalar=0),
    VIFDefinition(code=ValueCode.OPERATING_TIME_DAYS, base=0x27, size=1, scalar=0),
    VIFDefinition(code=ValueCode.POWER_W, base=0x28, size=8, scalar=-3),
    VIFDefinition(code=ValueCode.POWER_J_H, base=0x30, size=8, scalar=0),
    VIFDefinition(code=ValueCode.VOLUME_FLOW_M3_H, base=0x38, size=8, scalar=-6),
    VIFDefinition(code=ValueCode.VOLUME_FLOW_M3_MIN, base=0x40, size=8, scalar=-7),
    VIFDefinition(code=ValueCode.VOLUME_FLOW_M3_S, base=0x48, size=8, scalar=-9),
    VIFDefinition(code=ValueCode.MASS_FLOW_KG_H, base=0x50, size=8, scalar=-3),
    VIFDefinition(code=ValueCode.FLOW_TEMPERATURE_C, base=0x58, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.RETURN_TEMPERATURE_C, base=0x5C, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.TEMPERATURE_DIFF_K, base=0x60, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.EXTERNAL_TEMPERATURE_C, base=0x64, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.PRESSURE_BAR, base=0x68, size=4, scalar=-3),
    # 0x6C: Date (type G) - not supported
    # 0x6D: Date and time (type F) - not supported
    # 0x6E: Units for HCA - not supported
    VIFDefinition(code=ValueCode.AVG_DURATION_S, base=0x70, size=1, scalar=0),
    VIFDefinition(code=ValueCode.AVG_DURATION_MIN, base=0x71, size=1, scalar=0),
    VIFDefinition(code=ValueCode.AVG_DURATION_H, base=0x72, size=1, scalar=0),
    VIFDefinition(code=ValueCode.AVG_DURATION_DAYS, base=0x73, size=1, scalar=0),
    VIFDefinition(code=ValueCode.ACTUAL_DURATION_S, base=0x74, size=1, scalar=0),
    VIFDefinition(code=ValueCode.ACTUAL_DURATION_MIN, base=0x75, size=1, scalar=0),
    VIFDefinition(code=ValueCode.ACTUAL_DURATION_H, base=0x76, size=1, scalar=0),
    VIFDefinition(code=ValueCode.ACTUAL_DURATION_DAYS, base=0x77, size=1, scalar=0),
    VIFDefinition(code=ValueCode.FABRICATION_NUMBER, base=0x78, size=1, scalar=0),
    VIFDefinition(code=ValueCode.BUS_ADDRESS, base=0x7A, size=1, scalar=0),
    # ==========================================================================
    # Extension table 0xFD
    # ==========================================================================
    VIFDefinition(code=ValueCode.CREDIT, base=0xFD00, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.DEBIT, base=0xFD04, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.ACCESS_NUMBER, base=0xFD08, size=1, scalar=0),
    # 0xFD09: Medium - not supported
    VIFDefinition(code=ValueCode.MANUFACTURER, base=0xFD0A, size=1, scalar=0),
    # 0xFD0B: Parameter set identification - not supported
    VIFDefinition(code=ValueCode.MODEL_VERSION, base=0xFD0C, size=1, scalar=0),
    VIFDefinition(code=ValueCode.HARDWARE_VERSION, base=0xFD0D, size=1, scalar=0),
    VIFDefinition(code=ValueCode.FIRMWARE_VERSION, base=0xFD0E, size=1, scalar=0),
    # 0xFD0F: Software version - not supported
    # 0xFD10: Customer location - not supported
    VIFDefinition(code=ValueCode.CUSTOMER, base=0xFD11, size=1, scalar=0),
    # 0xFD12-0xFD15: Access codes (user, operator, system operator, developer) - not supported
    # 0xFD16: Password - not supported
    VIFDefinition(code=ValueCode.ERROR_FLAGS, base=0xFD17, size=1, scalar=0),
    VIFDefinition(code=ValueCode.ERROR_MASK, base=0xFD18, size=1, scalar=0),
    VIFDefinition(code=ValueCode.DIGITAL_OUTPUT, base=0xFD1A, size=1, scalar=0),
    VIFDefinition(code=ValueCode.DIGITAL_INPUT, base=0xFD1B, size=1, scalar=0),
    VIFDefinition(code=ValueCode.BAUDRATE_BPS, base=0xFD1C, size=1, scalar=0),
    VIFDefinition(code=ValueCode.RESPONSE_DELAY_TIME, base=0xFD1D, size=1, scalar=0),
    VIFDefinition(code=ValueCode.RETRY, base=0xFD1E, size=1, scalar=0),
    VIFDefinition(code=ValueCode.GENERIC, base=0xFD3C, size=1, scalar=0),
    VIFDefinition(code=ValueCode.VOLTS, base=0xFD40, size=16, scalar=-9),
    VIFDefinition(code=ValueCode.AMPERES, base=0xFD50, size=16, scalar=-12),
    VIFDefinition(code=ValueCode.RESET_COUNTER, base=0xFD60, size=16, scalar=-12),
    VIFDefinition(code=ValueCode.CUMULATION_COUNTER, base=0xFD61, size=16, scalar=-12),
    # ==========================================================================
    # Extension table 0xFB
    # ==========================================================================
    VIFDefinition(code=ValueCode.ENERGY_WH, base=0xFB00, size=2, scalar=5),
    VIFDefinition(code=ValueCode.ENERGY_J, base=0xFB08, size=2, scalar=8),
    VIFDefinition(code=ValueCode.VOLUME_M3, base=0xFB10, size=2, scalar=2),
    VIFDefinition(code=ValueCode.MASS_KG, base=0xFB18, size=2, scalar=5),
    VIFDefinition(code=ValueCode.VOLUME_FT3, base=0xFB21, size=1, scalar=-1),
    VIFDefinition(code=ValueCode.VOLUME_GAL, base=0xFB22, size=2, scalar=-1),
    VIFDefinition(code=ValueCode.VOLUME_FLOW_GAL_M, base=0xFB24, size=1, scalar=-3),
    VIFDefinition(code=ValueCode.VOLUME_FLOW_GAL_M, base=0xFB25, size=1, scalar=0),
    VIFDefinition(code=ValueCode.VOLUME_FLOW_GAL_H, base=0xFB26, size=1, scalar=0),
    VIFDefinition(code=ValueCode.POWER_W, base=0xFB28, size=2, scalar=5),
    VIFDefinition(code=ValueCode.POWER_J_H, base=0xFB30, size=2, scalar=8),
    VIFDefinition(code=ValueCode.FLOW_TEMPERATURE_F, base=0xFB58, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.RETURN_TEMPERATURE_F, base=0xFB5C, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.TEMPERATURE_DIFF_F, base=0xFB60, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.EXTERNAL_TEMPERATURE_F, base=0xFB64, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.TEMPERATURE_LIMIT_F, base=0xFB70, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.TEMPERATURE_LIMIT_C, base=0xFB74, size=4, scalar=-3),
    VIFDefinition(code=ValueCode.MAX_POWER_W, base=0xFB78, size=8, scalar=-3),
)


# =============================================================================
# VIF Helper Functions
# =============================================================================


@lru_cache(maxsize=128)
def find_definition(vif: int) -> VIFDefinition | None:
    """Find the first definition whose range contains a resolved VIF.

    Args:
        vif: Resolved VIF (all VIF/VIFE bytes folded into one integer)

    Returns:
        The matching definition, or None if no range contains vif
    """
    for definition in _DefinitionTable:
        if vif in definition:
            return definition

    return None


@lru_cache(maxsize=128)
def find_vif(code: ValueCode, scalar: int) -> int | None:
    """Find the resolved VIF that encodes a quantity at a given decimal scale.

    Args:
        code: Quantity to encode
        scalar: Base-10 exponent the raw value is expressed in

    Returns:
        The resolved VIF, or None if the table has no code for this scale
    """
    for definition in _DefinitionTable:
        if definition.code is code and definition.scalar <= scalar < definition.scalar + definition.size:
            return definition.base + (scalar - definition.scalar)

    return None


def read_vif(data: Sequence[int], position: int) -> tuple[int, int]:
    """Read a VIF/VIFE chain and fold it into one integer.

    Args:
        data: Payload bytes
        position: Index of the first VIF byte

    Returns:
        Tuple of (resolved VIF, position after the chain)

    Raises:
        BufferOverflowError: If data ends before the chain is terminated
    """
    vif = 0
    while True:
        if position >= len(data):
            raise BufferOverflowError("Buffer overflow while reading VIF/VIFE chain")

        byte = data[position]
        position += 1
        vif = (vif << 8) | byte

        if byte & VIF_EXTENSION_BIT_MASK == 0:
            return vif, position


def vif_to_bytes(vif: int) -> bytes:
    """Convert a resolved VIF back to its VIF/VIFE bytes (most significant first).

    VIF 0x00 is written as a single byte.
    """
    return vif.to_bytes(max(1, (vif.bit_length() + 7) // 8), byteorder="big")
