"""Shared test fixtures for mbuspayload tests."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def sample_payloads() -> dict[str, bytes]:
    """Sample payloads with one or more records."""
    return {
        'energy_wh': bytes([0x04, 0x03, 0x2A, 0x00, 0x00, 0x00]),  # 42 Wh, 32 bit
        'energy_mwh': bytes([0x01, 0xFB, 0x01, 0xC8]),  # 200 MWh via extension table 0xFB
        'volume_litres': bytes([0x01, 0x13, 0x39]),  # 57 l
        'energy_kwh_16bit': bytes([0x02, 0x06, 0x78, 0x05]),  # 1400 kWh
        'power_zero': bytes([0x01, 0x2B, 0x00]),  # 0 W
        'bcd_2': bytes([0x09, 0x06, 0x14]),  # 14 kWh, 2 digit BCD
        'bcd_8': bytes([0x0C, 0x13, 0x13, 0x20, 0x00, 0x00]),  # 2013 l, 8 digit BCD
        'multi_field': bytes([
            0x01, 0x13, 0x39,  # 57 l
            0x01, 0x0D, 0x24,  # 3.6 MJ
        ]),
    }


@pytest.fixture
def pipeline_message() -> dict[str, Any]:
    """Message as received by a pipeline node."""
    return {
        'topic': 'meters/heat/1',
        'payload': [0x01, 0x13, 0x39, 0x01, 0x0D, 0x24],
    }


# Test markers for different test types
def pytest_configure(config: Any) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, no I/O)"
    )
