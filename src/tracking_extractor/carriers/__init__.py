"""Carrier format rules and their priority registry."""

from .rules import (
    CarrierRule,
    RuleMatch,
    RuleRegistry,
    create_default_registry,
    get_default_registry,
)

__all__ = [
    "CarrierRule",
    "RuleMatch",
    "RuleRegistry",
    "create_default_registry",
    "get_default_registry",
]
