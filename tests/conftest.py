"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tracking_extractor.batch import InMemoryReceivingService, ReceivingBatch
from tracking_extractor.config import ExtractorSettings, reset_settings
from tracking_extractor.extractor import TrackingNumberExtractor


# Check digits below were verified against each carrier's published algorithm
UPS_VALID = "1Z999AA10123456784"
UPS_BAD_CHECK = "1Z999AA10123456785"
UPS_VALID_2 = "1Z12345E6605272234"
SSCC_VALID = "106141412345678908"
FEDEX_EXPRESS_VALID = "986578788855"
FEDEX_GROUND_VALID = "041441760228964"
FEDEX_96_BAD_CHECK = "96110209876543210987"
USPS_IMPB_VALID = "9400111899223856123459"
USPS_S10_VALID = "EE123456785US"
DHL_VALID = "1234567891"
DHL_VALID_2 = "1000000002"
AMAZON_VALID = "TBA123456789012"


@pytest.fixture(autouse=True)
def _reset_settings():
    """Keep the global settings singleton isolated between tests."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    """Default extractor settings."""
    return ExtractorSettings()


@pytest.fixture
def extractor(settings):
    """Extractor with default settings and carrier rules."""
    return TrackingNumberExtractor(settings=settings)


@pytest.fixture
def manifest_text():
    """A pasted shipment manifest with three tracking numbers."""
    return (
        "Shipment Manifest\n"
        f"Tracking: {UPS_VALID}\n"
        f"Alt Ref: {AMAZON_VALID}\n"
        f"Secondary: {FEDEX_96_BAD_CHECK}\n"
    )


@pytest.fixture
def batch():
    """Empty receiving batch for mailbox MB-101."""
    return ReceivingBatch(recipient_id="MB-101")


@pytest.fixture
def receiving_service():
    """In-memory service that knows mailbox MB-101."""
    return InMemoryReceivingService(["MB-101"])


@pytest.fixture
def manifest_file(tmp_path, manifest_text):
    """Manifest written to a text file."""
    path = tmp_path / "manifest.txt"
    path.write_text(manifest_text, encoding="utf-8")
    return path
