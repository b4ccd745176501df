"""Unit tests for the payload decoder."""

from __future__ import annotations

import logging

import pytest

from src.mbuspayload.decoder import DecodedField, decode
from src.mbuspayload.exceptions import (
    BufferOverflowError,
    ByteOverflowError,
    MBusErrorKind,
    MBusPayloadError,
    UnsupportedCodingError,
    UnsupportedVIFError,
)
from src.mbuspayload.protocol.value import ValueCode


@pytest.mark.unit
class TestDecodeSingleRecord:
    """Tests for decoding payloads with one record."""

    def test_energy_end_to_end(self, sample_payloads: dict[str, bytes]) -> None:
        """Test a 32 bit energy record at scalar 0."""
        fields = decode(sample_payloads['energy_wh'])

        assert fields == [
            DecodedField(
                index=1,
                vif=0x03,
                name="energy",
                units="Wh",
                value=42.0,
                code=ValueCode.ENERGY_WH,
                scalar=0,
                raw_value=42,
            )
        ]

    @pytest.mark.parametrize(
        ("payload_name", "expected_vif", "expected_name", "expected_units", "expected_value"),
        [
            ('energy_mwh', 0xFB01, "energy", "Wh", 200e6),
            ('volume_litres', 0x13, "volume", "m3", 0.057),
            ('energy_kwh_16bit', 0x06, "energy", "Wh", 1400e3),
            ('power_zero', 0x2B, "power", "W", 0.0),
            ('bcd_2', 0x06, "energy", "Wh", 14e3),
            ('bcd_8', 0x13, "volume", "m3", 2.013),
        ],
        ids=["extension_table", "negative_scalar", "16bit", "zero", "bcd2", "bcd8"],
    )
    def test_decode_known_records(
        self,
        sample_payloads: dict[str, bytes],
        payload_name: str,
        expected_vif: int,
        expected_name: str,
        expected_units: str,
        expected_value: float,
    ) -> None:
        """Test decoding of the reference records."""
        (field,) = decode(sample_payloads[payload_name])

        assert field.index == 1
        assert field.vif == expected_vif
        assert field.name == expected_name
        assert field.units == expected_units
        assert field.value == pytest.approx(expected_value)

    @pytest.mark.parametrize(
        ("vif", "expected_value"),
        [
            (0x00, 0.005),
            (0x02, 0.5),
            (0x07, 50000.0),
        ],
        ids=["base", "base_plus_2", "range_end"],
    )
    def test_scalar_grows_with_vif_offset(self, vif: int, expected_value: float) -> None:
        """Test that each VIF step past the range base multiplies by ten."""
        (field,) = decode(bytes([0x01, vif, 0x05]))
        assert field.value == pytest.approx(expected_value)

    def test_dimensionless_quantity_has_empty_units(self) -> None:
        """Test an extension table record without a unit."""
        (field,) = decode(bytes([0x01, 0xFD, 0x17, 0x03]))
        assert field.name == "error_flags"
        assert field.units == ""
        assert field.value == 3.0

    def test_overlapping_range_uses_first_declaration(self) -> None:
        """Test that 0xFD61 decodes as reset counter, not cumulation counter."""
        (field,) = decode(bytes([0x01, 0xFD, 0x61, 0x01]))
        assert field.name == "reset_counter"
        assert field.value == pytest.approx(1e-11)

    @pytest.mark.parametrize(
        ("payload_name", "expected_code", "expected_scalar", "expected_raw_value"),
        [
            ('energy_mwh', ValueCode.ENERGY_WH, 6, 200),
            ('volume_litres', ValueCode.VOLUME_M3, -3, 57),
            ('bcd_8', ValueCode.VOLUME_M3, -3, 2013),
        ],
        ids=["extension_table", "negative_scalar", "bcd8"],
    )
    def test_record_details(
        self,
        sample_payloads: dict[str, bytes],
        payload_name: str,
        expected_code: ValueCode,
        expected_scalar: int,
        expected_raw_value: int,
    ) -> None:
        """Test that the matched code, scalar and unscaled value are kept on the field."""
        (field,) = decode(sample_payloads[payload_name])

        assert field.code is expected_code
        assert field.scalar == expected_scalar
        assert field.raw_value == expected_raw_value

    def test_as_dict_reports_five_keys(self, sample_payloads: dict[str, bytes]) -> None:
        """Test that record details stay out of the plain mapping."""
        (field,) = decode(sample_payloads['volume_litres'])

        assert field.as_dict() == {"index": 1, "vif": 0x13, "name": "volume", "units": "m3", "value": field.value}

    def test_value_is_float(self) -> None:
        """Test that integer readings are returned as floats."""
        (field,) = decode(bytes([0x01, 0x20, 0x07]))
        assert isinstance(field.value, float)
        assert field.name == "on_time"
        assert field.units == "s"

    def test_accepts_int_sequence(self) -> None:
        """Test that a list of byte values decodes like bytes."""
        assert decode([0x04, 0x03, 0x2A, 0x00, 0x00, 0x00]) == decode(b"\x04\x03\x2a\x00\x00\x00")

    def test_upper_dif_bits_are_not_interpreted(self) -> None:
        """Test that DIF bits 4-7 do not change decoding."""
        assert decode(bytes([0xF1, 0x13, 0x39])) == decode(bytes([0x01, 0x13, 0x39]))


@pytest.mark.unit
class TestDecodeMultipleRecords:
    """Tests for payloads with several records."""

    def test_two_records(self, sample_payloads: dict[str, bytes]) -> None:
        """Test that records are indexed in payload order."""
        fields = decode(sample_payloads['multi_field'])

        assert [field.index for field in fields] == [1, 2]
        assert fields[0].name == "volume"
        assert fields[0].value == pytest.approx(0.057)
        assert fields[1].name == "energy"
        assert fields[1].units == "J"
        assert fields[1].value == pytest.approx(3.6e6)

    @pytest.mark.parametrize(
        ("first", "second"),
        [
            ('energy_wh', 'bcd_8'),
            ('energy_mwh', 'volume_litres'),
            ('bcd_2', 'power_zero'),
        ],
    )
    def test_concatenation_matches_separate_decodes(
        self, sample_payloads: dict[str, bytes], first: str, second: str
    ) -> None:
        """Test that a concatenated payload decodes like its parts."""
        fields = decode(sample_payloads[first] + sample_payloads[second])
        (first_field,) = decode(sample_payloads[first])
        (second_field,) = decode(sample_payloads[second])

        assert fields[0] == first_field
        assert fields[1].index == 2
        assert fields[1].vif == second_field.vif
        assert fields[1].name == second_field.name
        assert fields[1].units == second_field.units
        assert fields[1].value == second_field.value

    def test_empty_payload(self) -> None:
        """Test that an empty payload decodes to no fields."""
        assert decode(b"") == []


@pytest.mark.unit
class TestDecodeErrors:
    """Tests for error handling during decoding."""

    @pytest.mark.parametrize("dif", [0x00, 0x05, 0x06, 0x07, 0x08, 0x0D], ids=hex)
    def test_unsupported_coding(self, dif: int) -> None:
        """Test that DIF lengths outside 1-4 raise UnsupportedCodingError."""
        with pytest.raises(UnsupportedCodingError):
            decode(bytes([dif, 0x13, 0x39, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00]))

    @pytest.mark.parametrize(
        "payload",
        [
            b"\x01",
            b"\x01\xfd",
            b"\x01\xfb\x8c",
        ],
        ids=["no_vif", "missing_vife", "missing_second_vife"],
    )
    def test_unterminated_vif_chain(self, payload: bytes) -> None:
        """Test that a payload ending inside the VIF chain raises BufferOverflowError."""
        with pytest.raises(BufferOverflowError) as exc_info:
            decode(payload)
        assert exc_info.value.kind is MBusErrorKind.BUFFER_OVERFLOW

    @pytest.mark.parametrize(
        "payload",
        [
            b"\x04\x03\x2a\x00\x00",
            b"\x02\x06",
            b"\x01\x13\x39\x0c\x13\x13\x20",
        ],
        ids=["short_32bit", "no_value", "second_record_short"],
    )
    def test_truncated_value(self, payload: bytes) -> None:
        """Test that a payload ending inside a value raises BufferOverflowError."""
        with pytest.raises(BufferOverflowError, match="value bytes"):
            decode(payload)

    @pytest.mark.parametrize(
        "vif",
        [0x7B, 0x6C, 0x6D, 0x6E, 0x7F],
        ids=["gap", "date", "datetime", "hca", "manufacturer_specific"],
    )
    def test_unsupported_vif(self, vif: int) -> None:
        """Test that unmatched VIFs raise UnsupportedVIFError carrying the VIF."""
        with pytest.raises(UnsupportedVIFError, match="Unsupported VIF") as exc_info:
            decode(bytes([0x01, vif, 0x00]))
        assert exc_info.value.vif == vif
        assert exc_info.value.kind is MBusErrorKind.UNSUPPORTED_VIF

    def test_unsupported_vif_checked_before_length(self) -> None:
        """Test that an unknown VIF is reported even when the value is missing."""
        with pytest.raises(UnsupportedVIFError):
            decode(bytes([0x04, 0xFD, 0x16]))

    def test_three_byte_vif_chain_unsupported(self) -> None:
        """Test that a folded three byte chain is looked up as one VIF."""
        with pytest.raises(UnsupportedVIFError) as exc_info:
            decode(bytes([0x01, 0xFB, 0x8C, 0x74, 0x0E]))
        assert exc_info.value.vif == 0xFB8C74

    def test_byte_overflow(self) -> None:
        """Test that value items above 0xFF raise ByteOverflowError."""
        with pytest.raises(ByteOverflowError):
            decode([0x02, 0x13, 0x39, 0x100])

    def test_error_after_valid_record_returns_nothing(self) -> None:
        """Test that decoding is all-or-nothing."""
        with pytest.raises(MBusPayloadError):
            decode(bytes([0x01, 0x13, 0x39, 0x01, 0x7B, 0x00]))


@pytest.mark.unit
class TestDecodeLogging:
    """Tests for decoder logging."""

    def test_records_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that each decoded record is logged at DEBUG level."""
        with caplog.at_level(logging.DEBUG, logger="src.mbuspayload.decoder"):
            decode(bytes([0x01, 0x13, 0x39, 0x01, 0x0D, 0x24]))

        messages = [record.getMessage() for record in caplog.records]
        assert len(messages) == 2
        assert messages[0].startswith("Decoded record 1: VIF 0x13")
