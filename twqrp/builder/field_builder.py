"""
Field Builder - Validates and formats individual TWQRP fields

Supports:
- Scheme field numbers (FieldKey)
- Per-field validation rules with precompiled patterns
- Value formatting (minor units, zero padding, expiry timestamps)
- Custom rules for fields the scheme adds later
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Tuple, Type
import logging
import re

from twqrp.errors import (
    TWQRPError,
    InvalidAccount,
    InvalidAmount,
    InvalidBankCode,
    InvalidCountryCode,
    InvalidCurrencyCode,
    InvalidNote,
    InvalidQRDueTime,
)

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = 158  # Taiwan
TWD_CURRENCY = "901"  # New Taiwan dollar

COUNTRY_MIN = 1
COUNTRY_MAX = 999
AMOUNT_MIN = 1
AMOUNT_MAX = 99999
NOTE_MAX_BYTES = 19
ACCOUNT_WIDTH = 16

THREE_DIGITS = re.compile(r"[0-9]{3}")
ACCOUNT_DIGITS = re.compile(r"[0-9]{1,16}")


class FieldKey(IntEnum):
    """Field numbers defined by the TWQRP scheme"""

    AMOUNT = 1
    BANK_CODE = 5
    ACCOUNT = 6
    NOTE = 9
    CURRENCY = 10
    QR_DUE = 12


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _matches(pattern: re.Pattern, value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def _valid_country(code: Any) -> bool:
    return _is_int(code) and COUNTRY_MIN <= code <= COUNTRY_MAX


def _valid_amount(amount: Any) -> bool:
    return _is_int(amount) and AMOUNT_MIN <= amount <= AMOUNT_MAX


def _valid_note(note: Any) -> bool:
    # The limit counts encoded bytes, so a CJK character uses three
    if not isinstance(note, str):
        return False
    return len(note.encode("utf-8", "surrogatepass")) <= NOTE_MAX_BYTES


def _is_zero_time(due: datetime) -> bool:
    # Aware values are compared as an instant, 0001-01-01 00:00 UTC
    wall = due.replace(tzinfo=None)
    offset = due.utcoffset()
    if offset is None:
        return wall == datetime.min
    try:
        return wall - offset == datetime.min
    except OverflowError:
        return False


def _valid_due(due: Any) -> bool:
    return isinstance(due, datetime) and not _is_zero_time(due)


def _format_amount(amount: int) -> str:
    # Stored in minor units
    return str(amount * 100)


def _format_account(account: str) -> str:
    return account.rjust(ACCOUNT_WIDTH, "0")


def _format_due(due: datetime) -> str:
    # Keeps whatever zone the caller's datetime carries
    return (
        f"{due.year:04d}{due.month:02d}{due.day:02d}"
        f"{due.hour:02d}{due.minute:02d}{due.second:02d}"
    )


@dataclass(frozen=True)
class FieldRule:
    """Validation and formatting for one typed field"""

    key: int
    error: Type[TWQRPError]
    check: Callable[[Any], bool]
    format: Callable[[Any], str] = str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "key": int(self.key),
            "error": self.error.__name__,
        }


FIELD_RULES: Dict[str, FieldRule] = {
    "amount": FieldRule(FieldKey.AMOUNT, InvalidAmount, _valid_amount, _format_amount),
    "bank_code": FieldRule(FieldKey.BANK_CODE, InvalidBankCode, lambda v: _matches(THREE_DIGITS, v)),
    "account": FieldRule(FieldKey.ACCOUNT, InvalidAccount, lambda v: _matches(ACCOUNT_DIGITS, v), _format_account),
    "note": FieldRule(FieldKey.NOTE, InvalidNote, _valid_note),
    "currency": FieldRule(FieldKey.CURRENCY, InvalidCurrencyCode, lambda v: _matches(THREE_DIGITS, v)),
    "qr_due": FieldRule(FieldKey.QR_DUE, InvalidQRDueTime, _valid_due, _format_due),
}


class FieldBuilder:
    """Builds individual fields for TWQRP payloads"""

    def __init__(self, rules: Optional[Dict[str, FieldRule]] = None):
        """
        Initialize FieldBuilder

        Args:
            rules: Field rules by name, defaults to FIELD_RULES
        """
        self.rules = dict(FIELD_RULES if rules is None else rules)

    def build_field(self, name: str, value: Any) -> Tuple[int, str]:
        """
        Validate and format a single typed field

        Args:
            name: Rule name (e.g., "amount", "note")
            value: Raw caller value

        Returns:
            Tuple of (field_key, rendered_value)

        Raises:
            TWQRPError: The rule's error type when value is rejected
        """
        rule = self.rules[name]

        if not rule.check(value):
            logger.warning(f"Rejected {name}: {value!r}")
            raise rule.error(value)

        return int(rule.key), rule.format(value)

    def check_country(self, code: Any) -> Optional[InvalidCountryCode]:
        """Return an error for an out of range country code, None otherwise"""
        if _valid_country(code):
            return None

        logger.warning(f"Rejected country: {code!r}")
        return InvalidCountryCode(code)

    def add_rule(self, name: str, rule: FieldRule) -> None:
        """Register a rule for a field the defaults don't cover"""
        self.rules[name] = rule
