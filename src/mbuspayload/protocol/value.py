"""Semantic quantities carried by M-Bus payload records.

Each VIF definition in the lookup table points to one ValueCode, which holds
the quantity name and display unit reported for decoded fields. The encoder
selects VIFs by ValueCode.
"""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import Any, Self


class ValueUnit(StrEnum):
    """Display units reported for decoded fields."""

    NONE = ""

    # Energy
    WH = "Wh"
    J = "J"

    # Volume and mass
    M3 = "m3"
    FEET3 = "ft3"
    GAL = "gal"
    KG = "kg"

    # Time
    SECONDS = "s"
    MINUTES = "min"
    HOURS = "h"
    DAYS = "days"

    # Power
    W = "W"
    J_H = "J/h"

    # Flow
    M3_H = "m3/h"
    M3_MIN = "m3/min"
    M3_S = "m3/s"
    GAL_MIN = "gal/min"
    GAL_H = "gal/h"
    KG_H = "kg/h"

    # Temperature
    CELSIUS = "C"
    FAHRENHEIT = "F"
    KELVIN = "K"

    # Other
    BAR = "bar"
    BPS = "bps"
    V = "V"
    A = "A"


class ValueCode(Enum):
    """Quantity codes supported by the payload format.

    Members are numbered in wire-format declaration order so the numeric
    value is stable. Each member carries the quantity name and unit.
    """

    def __new__(cls, value: int, *args: Any) -> Self:
        obj = object.__new__(cls)
        obj._value_ = value
        return obj

    def __init__(self, value: int, quantity: str, units: ValueUnit = ValueUnit.NONE) -> None:
        self._quantity = quantity
        self._units = units

    @property
    def quantity(self) -> str:
        """Quantity name reported for decoded fields (e.g. "energy")."""
        return self._quantity

    @property
    def units(self) -> str:
        """Display unit, empty for dimensionless quantities."""
        return str(self._units)

    # ==========================================================================
    # Primary VIF (no extension)
    # ==========================================================================
    ENERGY_WH = 0, "energy", ValueUnit.WH
    ENERGY_J = 1, "energy", ValueUnit.J
    VOLUME_M3 = 2, "volume", ValueUnit.M3
    MASS_KG = 3, "mass", ValueUnit.KG
    ON_TIME_S = 4, "on_time", ValueUnit.SECONDS
    ON_TIME_MIN = 5, "on_time", ValueUnit.MINUTES
    ON_TIME_H = 6, "on_time", ValueUnit.HOURS
    ON_TIME_DAYS = 7, "on_time", ValueUnit.DAYS
    OPERATING_TIME_S = 8, "operating_time", ValueUnit.SECONDS
    OPERATING_TIME_MIN = 9, "operating_time", ValueUnit.MINUTES
    OPERATING_TIME_H = 10, "operating_time", ValueUnit.HOURS
    OPERATING_TIME_DAYS = 11, "operating_time", ValueUnit.DAYS
    POWER_W = 12, "power", ValueUnit.W
    POWER_J_H = 13, "power", ValueUnit.J_H
    VOLUME_FLOW_M3_H = 14, "volume_flow", ValueUnit.M3_H
    VOLUME_FLOW_M3_MIN = 15, "volume_flow", ValueUnit.M3_MIN
    VOLUME_FLOW_M3_S = 16, "volume_flow", ValueUnit.M3_S
    MASS_FLOW_KG_H = 17, "mass_flow", ValueUnit.KG_H
    FLOW_TEMPERATURE_C = 18, "flow_temperature", ValueUnit.CELSIUS
    RETURN_TEMPERATURE_C = 19, "return_temperature", ValueUnit.CELSIUS
    TEMPERATURE_DIFF_K = 20, "temperature_difference", ValueUnit.KELVIN
    EXTERNAL_TEMPERATURE_C = 21, "external_temperature", ValueUnit.CELSIUS
    PRESSURE_BAR = 22, "pressure", ValueUnit.BAR
    AVG_DURATION_S = 23, "avg_duration", ValueUnit.SECONDS
    AVG_DURATION_MIN = 24, "avg_duration", ValueUnit.MINUTES
    AVG_DURATION_H = 25, "avg_duration", ValueUnit.HOURS
    AVG_DURATION_DAYS = 26, "avg_duration", ValueUnit.DAYS
    ACTUAL_DURATION_S = 27, "actual_duration", ValueUnit.SECONDS
    ACTUAL_DURATION_MIN = 28, "actual_duration", ValueUnit.MINUTES
    ACTUAL_DURATION_H = 29, "actual_duration", ValueUnit.HOURS
    ACTUAL_DURATION_DAYS = 30, "actual_duration", ValueUnit.DAYS
    FABRICATION_NUMBER = 31, "fabrication_number"
    BUS_ADDRESS = 32, "bus_address"

    # ==========================================================================
    # Extension 0xFD
    # ==========================================================================
    CREDIT = 33, "credit"
    DEBIT = 34, "debit"
    ACCESS_NUMBER = 35, "access_number"
    MANUFACTURER = 36, "manufacturer"
    MODEL_VERSION = 37, "model_version"
    HARDWARE_VERSION = 38, "hardware_version"
    FIRMWARE_VERSION = 39, "firmware_version"
    CUSTOMER = 40, "customer"
    ERROR_FLAGS = 41, "error_flags"
    ERROR_MASK = 42, "error_mask"
    DIGITAL_OUTPUT = 43, "digital_output"
    DIGITAL_INPUT = 44, "digital_input"
    BAUDRATE_BPS = 45, "baudrate", ValueUnit.BPS
    RESPONSE_DELAY_TIME = 46, "response_delay_time"
    RETRY = 47, "retry"
    GENERIC = 48, "generic"
    VOLTS = 49, "volts", ValueUnit.V
    AMPERES = 50, "amperes", ValueUnit.A
    RESET_COUNTER = 51, "reset_counter"
    CUMULATION_COUNTER = 52, "cumulation_counter"

    # ==========================================================================
    # Extension 0xFB
    # ==========================================================================
    VOLUME_FT3 = 53, "volume", ValueUnit.FEET3
    VOLUME_GAL = 54, "volume", ValueUnit.GAL
    VOLUME_FLOW_GAL_M = 55, "volume_flow", ValueUnit.GAL_MIN
    VOLUME_FLOW_GAL_H = 56, "volume_flow", ValueUnit.GAL_H
    FLOW_TEMPERATURE_F = 57, "flow_temperature", ValueUnit.FAHRENHEIT
    RETURN_TEMPERATURE_F = 58, "return_temperature", ValueUnit.FAHRENHEIT
    TEMPERATURE_DIFF_F = 59, "temperature_difference", ValueUnit.FAHRENHEIT
    EXTERNAL_TEMPERATURE_F = 60, "external_temperature", ValueUnit.FAHRENHEIT
    TEMPERATURE_LIMIT_F = 61, "temperature_limit", ValueUnit.FAHRENHEIT
    TEMPERATURE_LIMIT_C = 62, "temperature_limit", ValueUnit.CELSIUS
    MAX_POWER_W = 63, "max_power", ValueUnit.W
