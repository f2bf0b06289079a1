"""Edge case tests for extraction from messy real-world input."""

import pytest

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from tracking_extractor.models.enums import Carrier, Confidence


class TestPunctuationAndWhitespace:
    """Numbers surrounded by label and clipboard noise."""

    @pytest.mark.parametrize("text", [
        "#1Z999AA10123456784,",
        "(1Z999AA10123456784)",
        "\t1Z999AA10123456784\r\n",
        "Tracking:1Z999AA10123456784.",
        "“1Z999AA10123456784”",
    ])
    def test_delimited_ups(self, extractor, text):
        results = extractor.extract(text)
        assert [r.tracking_number for r in results] == ["1Z999AA10123456784"]

    def test_ups_with_triple_space_is_not_joined(self, extractor):
        # Only single separators are bridged between characters
        results = extractor.extract("1Z999AA1   0123456784")
        assert all(r.carrier is not Carrier.UPS for r in results)

    def test_number_inside_word_not_split(self, extractor):
        # Letters glued to a valid DHL waybill make one unknown token
        results = extractor.extract("REF1234567891X")

        assert len(results) == 1
        assert results[0].carrier is Carrier.UNKNOWN
        assert results[0].tracking_number == "REF1234567891X"


class TestUnicodeInput:
    """Non-ASCII text around or instead of tracking numbers."""

    def test_fullwidth_digits_ignored(self, extractor):
        assert extractor.extract("１２３４５６７８９１") == []

    def test_arabic_indic_digits_ignored(self, extractor):
        assert extractor.extract("١٢٣٤٥٦٧٨٩١") == []

    def test_non_latin_context(self, extractor):
        results = extractor.extract("운송장번호: 1234567891 입니다")

        assert [r.tracking_number for r in results] == ["1234567891"]
        assert results[0].carrier is Carrier.DHL

    def test_emoji_separated(self, extractor):
        results = extractor.extract("📦TBA123456789012📦")
        assert [r.tracking_number for r in results] == ["TBA123456789012"]


class TestAmbiguousNumerics:
    """Digit runs that several formats could claim."""

    def test_eighteen_digits_prefers_sscc(self, extractor):
        results = extractor.extract("106141412345678908")
        assert results[0].carrier is Carrier.GS1_SSCC

    def test_eighteen_digits_failing_sscc_stays_medium(self, extractor):
        results = extractor.extract("106141412345678909")

        assert len(results) == 1
        assert results[0].carrier is Carrier.GS1_SSCC
        assert results[0].confidence is Confidence.MEDIUM

    def test_ten_digits_failing_dhl_stays_medium(self, extractor):
        results = extractor.extract("1234567890")

        assert results[0].carrier is Carrier.DHL
        assert results[0].confidence is Confidence.MEDIUM

    def test_twelve_digits_failing_fedex_stays_medium(self, extractor):
        results = extractor.extract("986578788856")

        assert results[0].carrier is Carrier.FEDEX
        assert results[0].confidence is Confidence.MEDIUM

    def test_phone_numbers_and_dates_ignored(self, extractor):
        assert extractor.extract("Call 555-0100 before 2024-01-15") == []


class TestGroupedNumbersNearOtherDigits:
    """Printed digit groups followed by dates, weights or ZIP codes."""

    @pytest.mark.parametrize("text", [
        "TRK# 9865 7878 8855 2024-01-05",
        "9865 7878 8855 12 LBS",
        "9865 7878 8855 10001",
        "9865-7878-8855-2024",
    ])
    def test_fedex_not_joined_to_trailing_group(self, extractor, text):
        results = extractor.extract(text)

        assert [r.tracking_number for r in results] == ["986578788855"]
        assert results[0].carrier is Carrier.FEDEX
        assert results[0].confidence is Confidence.HIGH

    def test_raw_covers_only_the_number(self, extractor):
        results = extractor.extract("TRK# 9865 7878 8855 2024-01-05")
        assert results[0].raw == "9865 7878 8855"

    def test_medium_grouped_number_kept(self, extractor):
        results = extractor.extract("Waybill 1234 5678 90 2024-01-05")

        assert [r.tracking_number for r in results] == ["1234567890"]
        assert results[0].carrier is Carrier.DHL
        assert results[0].confidence is Confidence.MEDIUM

    def test_longest_layout_preferred(self, extractor):
        results = extractor.extract("9400 1118 9922 3856 1234 59 2024-01-05")

        assert [r.tracking_number for r in results] == ["9400111899223856123459"]
        assert results[0].carrier is Carrier.USPS


class TestLargeInput:
    """Bulk paste behaviour."""

    def test_many_numbers_in_order(self, extractor):
        waybills = [f"{n:09d}{n % 7}" for n in range(100, 160)]
        results = extractor.extract(" ".join(waybills))

        assert [r.tracking_number for r in results] == waybills
        assert all(r.confidence is Confidence.HIGH for r in results)

    def test_long_noise_is_bounded(self, extractor):
        text = ("lorem ipsum " * 5000) + "1Z999AA10123456784"
        results = extractor.extract(text)
        assert [r.tracking_number for r in results] == ["1Z999AA10123456784"]
