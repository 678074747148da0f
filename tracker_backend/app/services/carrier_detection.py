"""
Carrier detection service.

Maps a tracking number to a carrier label using an ordered rule table.
The same table drives text extraction, so the two never disagree about
what looks like a tracking number.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from tracker_backend.app.core.config import Settings, settings

UNKNOWN_CARRIER = "Unknown"


@dataclass(frozen=True)
class CarrierRule:
    """
    One carrier-identifying pattern.

    `classify` matches a whole (upper-cased) tracking number; `extract`
    finds the same shape inside running text. `required_suffix` narrows
    classification only, e.g. postal numbers for one destination country.
    """
    name: str
    label: str
    classify: re.Pattern
    extract: re.Pattern
    required_suffix: Optional[str] = None

    def matches(self, tracking_number: str) -> bool:
        if not self.classify.fullmatch(tracking_number):
            return False
        if self.required_suffix:
            return tracking_number.endswith(self.required_suffix)
        return True


def _rule(name: str, label: str, pattern: str, case_sensitive_extract: bool = False,
          required_suffix: Optional[str] = None) -> CarrierRule:
    extract_flags = 0 if case_sensitive_extract else re.IGNORECASE
    return CarrierRule(
        name=name,
        label=label,
        classify=re.compile(pattern),
        extract=re.compile(rf"\b({pattern})\b", extract_flags),
        required_suffix=required_suffix,
    )


def build_carrier_rules(config: Settings = settings) -> Tuple[CarrierRule, ...]:
    """
    Build the rule table in precedence order.

    Order is part of the contract: the first matching rule wins.
    """
    return (
        _rule("amazon", "Amazon Logistics", r"TBA[A-Z0-9]+|AMZN[A-Z0-9]+"),
        _rule("ups", "UPS", r"1Z[A-Z0-9]+"),
        _rule(
            "postal",
            config.postal_carrier_label,
            r"[A-Z]{2}\d{9}[A-Z]{2}",
            case_sensitive_extract=True,
            required_suffix=config.postal_country_code.upper(),
        ),
        _rule("numeric", config.numeric_carrier_label, r"\d{10,14}"),
    )


CARRIER_RULES = build_carrier_rules()


def classify_carrier(tracking_number: str, rules: Tuple[CarrierRule, ...] = CARRIER_RULES) -> str:
    """
    Detect the carrier for a tracking number.
    
    Matching is case-insensitive and ignores surrounding whitespace.
    Blank input is "Unknown" without consulting any rule.
    
    Returns:
        Carrier label, or "Unknown" if no rule matches
    """
    normalized = (tracking_number or "").strip().upper()
    if not normalized:
        return UNKNOWN_CARRIER
    
    for rule in rules:
        if rule.matches(normalized):
            return rule.label
    
    return UNKNOWN_CARRIER


def suggest_carrier(tracking_number: str, override: Optional[str] = None,
                    rules: Tuple[CarrierRule, ...] = CARRIER_RULES) -> str:
    """A non-blank user-typed carrier always wins over detection."""
    if override and override.strip():
        return override.strip()
    return classify_carrier(tracking_number, rules)
