"""Carrier format rules in fixed priority order.

Each carrier format is a plain data record (pattern, optional checksum,
strictness) rather than a class. The extractor walks the registry in order
and the first rule whose pattern fully matches a token wins.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..models.enums import Carrier, Confidence
from ..validators.checksums import (
    gs1_mod10,
    ups_1z,
    fedex_mod11,
    dhl_mod7,
    upu_s10,
)


@dataclass(frozen=True)
class RuleMatch:
    """A token (or part of one) that satisfied a carrier rule."""

    rule_name: str
    carrier: Carrier
    tracking_number: str
    confidence: Confidence
    start: int  # offset within the token
    end: int


@dataclass(frozen=True)
class CarrierRule:
    """
    One carrier tracking-number format.

    Attributes:
        name: Unique rule identifier.
        carrier: Carrier assigned on match.
        pattern: Regex that must match the whole uppercase token. A named
            group ``number`` marks the embedded tracking number when the
            token carries extra routing digits.
        checksum: Check-digit validator applied to the tracking number.
        strict: Fixed prefix/length format; only used when no checksum.
        require_checksum: Treat a failing checksum as no match at all.
        length: Fixed token length, used for concatenation windowing.
    """

    name: str
    carrier: Carrier
    pattern: str
    checksum: Optional[Callable[[str], bool]] = None
    strict: bool = True
    require_checksum: bool = False
    length: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "_compiled", re.compile(self.pattern, re.ASCII))

    def match(self, token: str) -> Optional[RuleMatch]:
        """
        Match an uppercase alphanumeric token against this rule.

        Returns:
            RuleMatch with derived confidence, or None.
        """
        m = self._compiled.fullmatch(token)
        if m is None:
            return None

        if "number" in self._compiled.groupindex:
            number = m.group("number")
            start, end = m.span("number")
        else:
            number = token
            start, end = 0, len(token)

        checksum_passed = self.checksum(number) if self.checksum else None
        if self.require_checksum and not checksum_passed:
            return None

        return RuleMatch(
            rule_name=self.name,
            carrier=self.carrier,
            tracking_number=number,
            confidence=Confidence.derive(checksum_passed, self.strict),
            start=start,
            end=end,
        )


class RuleRegistry:
    """
    Ordered registry of carrier rules.

    Registration order is match priority: most distinctive formats first,
    most generic last.

    Usage:
        registry = RuleRegistry()
        registry.register(CarrierRule("ups", Carrier.UPS, r"1Z[0-9A-Z]{16}", ups_1z))
    """

    def __init__(self):
        self._rules: Dict[str, CarrierRule] = {}

    def register(self, rule: CarrierRule) -> "RuleRegistry":
        """
        Append a rule at the lowest priority.

        Raises:
            ValueError: If a rule with the same name exists.
        """
        if rule.name in self._rules:
            raise ValueError(f"Rule already registered: {rule.name}")
        self._rules[rule.name] = rule
        return self

    def unregister(self, name: str) -> bool:
        """Remove a rule from the registry."""
        if name in self._rules:
            del self._rules[name]
            return True
        return False

    def get(self, name: str) -> Optional[CarrierRule]:
        """Get rule by name."""
        return self._rules.get(name)

    def names(self) -> List[str]:
        """Rule names in priority order."""
        return list(self._rules)

    def fixed_lengths(self) -> List[int]:
        """Distinct fixed token lengths, longest first."""
        lengths = {rule.length for rule in self._rules.values() if rule.length}
        return sorted(lengths, reverse=True)

    def match(self, token: str) -> Optional[RuleMatch]:
        """Return the first rule match for a token, in priority order."""
        for rule in self._rules.values():
            result = rule.match(token)
            if result is not None:
                return result
        return None

    def __iter__(self):
        return iter(list(self._rules.values()))

    def __contains__(self, name: str) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)


def create_default_registry() -> RuleRegistry:
    """Create registry with the default carrier rules."""
    registry = RuleRegistry()

    # GS1 SSCC: 18 digits, optionally behind the (00) application identifier
    registry.register(CarrierRule(
        "gs1_sscc", Carrier.GS1_SSCC, r"\d{18}", gs1_mod10, length=18,
    ))
    registry.register(CarrierRule(
        "gs1_sscc_ai", Carrier.GS1_SSCC, r"00(?P<number>\d{18})", gs1_mod10,
        require_checksum=True,
    ))

    # UPS
    registry.register(CarrierRule(
        "ups", Carrier.UPS, r"1Z[0-9A-Z]{16}", ups_1z, length=18,
    ))

    # FedEx
    registry.register(CarrierRule(
        "fedex_express", Carrier.FEDEX, r"\d{12}", fedex_mod11, length=12,
    ))
    registry.register(CarrierRule(
        "fedex_ground", Carrier.FEDEX, r"\d{15}", gs1_mod10, length=15,
    ))
    registry.register(CarrierRule(
        "fedex_ground_96", Carrier.FEDEX, r"96\d{18}", gs1_mod10, length=20,
    ))
    # Long label barcodes carry the package id in the trailing 20 digits
    registry.register(CarrierRule(
        "fedex_barcode", Carrier.FEDEX, r"(?!420)\d{3,14}(?P<number>\d{20})", gs1_mod10,
    ))

    # USPS
    registry.register(CarrierRule(
        "usps_impb", Carrier.USPS, r"9[1-5](?:\d{18}|\d{20})", gs1_mod10, length=22,
    ))
    registry.register(CarrierRule(
        "usps_routed", Carrier.USPS, r"420(?:\d{5}|\d{9})(?P<number>\d{22})", gs1_mod10,
    ))
    registry.register(CarrierRule(
        "usps_numeric", Carrier.USPS, r"\d{20,22}", strict=False,
    ))
    registry.register(CarrierRule(
        "usps_s10", Carrier.USPS, r"[A-Z]{2}\d{9}US", upu_s10, length=13,
    ))

    # DHL
    registry.register(CarrierRule(
        "dhl_express", Carrier.DHL, r"\d{10}", dhl_mod7, length=10,
    ))
    registry.register(CarrierRule(
        "dhl_express_11", Carrier.DHL, r"\d{11}", strict=False,
    ))
    registry.register(CarrierRule(
        "dhl_ecommerce", Carrier.DHL, r"JD\d{18}", length=20,
    ))

    # Amazon Logistics
    registry.register(CarrierRule(
        "amazon_tba", Carrier.AMAZON_LOGISTICS, r"TBA\d{12}", length=15,
    ))
    registry.register(CarrierRule(
        "amazon_tba_long", Carrier.AMAZON_LOGISTICS, r"TBA\d{13,15}", strict=False,
    ))

    return registry


# Global default registry
_default_registry = create_default_registry()


def get_default_registry() -> RuleRegistry:
    """Get the global default rule registry."""
    return _default_registry
