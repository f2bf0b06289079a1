"""Unit tests for carrier check-digit algorithms."""

import pytest

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from tracking_extractor.validators.checksums import (
    gs1_mod10,
    gs1_mod10_check_digit,
    ups_1z,
    ups_char_value,
    fedex_mod11,
    dhl_mod7,
    s10_check_digit,
    upu_s10,
)


class TestGS1Mod10:
    """Tests for the GS1 modulo-10 check digit."""

    def test_check_digit_for_sscc_payload(self):
        assert gs1_mod10_check_digit("10614141234567890") == 8

    @pytest.mark.parametrize("number", [
        "106141412345678908",       # SSCC-18
        "041441760228964",          # FedEx Ground 15
        "9400111899223856123459",   # USPS IMpb 22
        "9400100000000000000006",
    ])
    def test_valid_numbers(self, number):
        assert gs1_mod10(number) is True

    @pytest.mark.parametrize("number", [
        "106141412345678909",
        "96110209876543210987",
        "9400111899223856123450",
    ])
    def test_invalid_numbers(self, number):
        assert gs1_mod10(number) is False

    @pytest.mark.parametrize("number", ["", "7", "10614141234567890X", "١٠٦١٤١٤١"])
    def test_malformed_input_is_false(self, number):
        assert gs1_mod10(number) is False


class TestUPS:
    """Tests for the UPS 1Z check digit."""

    @pytest.mark.parametrize("char,value", [
        ("7", 7),
        ("A", 2),
        ("H", 9),
        ("I", 0),
        ("Z", 7),
    ])
    def test_char_value(self, char, value):
        assert ups_char_value(char) == value

    @pytest.mark.parametrize("number", ["1Z999AA10123456784", "1Z12345E6605272234"])
    def test_valid(self, number):
        assert ups_1z(number) is True

    def test_lowercase_accepted(self):
        assert ups_1z("1z999aa10123456784") is True

    @pytest.mark.parametrize("number", [
        "1Z999AA10123456785",   # wrong check digit
        "1Z9999A10123456784",   # check digit should be 0
        "1Z999AA1012345678",    # too short
        "2Z999AA10123456784",   # wrong prefix
        "1Z999AA1012345678X",   # non-digit check
    ])
    def test_invalid(self, number):
        assert ups_1z(number) is False


class TestFedEx:
    """Tests for the FedEx Express mod-11 check digit."""

    def test_valid(self):
        assert fedex_mod11("986578788855") is True

    def test_invalid(self):
        assert fedex_mod11("986578788856") is False

    @pytest.mark.parametrize("number", ["98657878885", "9865787888555", "98657878885A"])
    def test_wrong_shape(self, number):
        assert fedex_mod11(number) is False


class TestDHL:
    """Tests for the DHL Express mod-7 check digit."""

    @pytest.mark.parametrize("number", ["1234567891", "1000000002", "0000000000"])
    def test_valid(self, number):
        assert dhl_mod7(number) is True

    def test_invalid(self):
        assert dhl_mod7("1234567890") is False

    def test_wrong_length(self):
        assert dhl_mod7("123456789") is False


class TestUPUS10:
    """Tests for the UPU S10 check digit."""

    def test_check_digit(self):
        assert s10_check_digit("12345678") == 5

    def test_check_digit_remainder_zero_maps_to_five(self):
        # Weighted sum 0 leaves remainder 0, so 11 - 0 = 11 -> 5
        assert s10_check_digit("00000000") == 5

    def test_check_digit_remainder_one_maps_to_zero(self):
        # Weighted sum 12 leaves remainder 1, so 11 - 1 = 10 -> 0
        assert s10_check_digit("02000000") == 0

    def test_valid(self):
        assert upu_s10("EE123456785US") is True

    def test_invalid_check(self):
        assert upu_s10("EE123456784US") is False

    @pytest.mark.parametrize("number", ["E1123456785US", "EE12345678US", "EE123456785U1"])
    def test_malformed(self, number):
        assert upu_s10(number) is False
