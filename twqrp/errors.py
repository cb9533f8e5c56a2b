"""Validation errors raised or returned by the payload builder."""
from typing import Any


class TWQRPError(ValueError):
    """Base class for every TWQRP input rejection."""

    message = "twqrp: invalid input"

    def __init__(self, value: Any = None):
        """
        Initialize error

        Args:
            value: The rejected input, kept for callers that want to report it
        """
        super().__init__(self.message)
        self.value = value

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "value": self.value,
        }


class InvalidBankCode(TWQRPError):
    message = "twqrp: invalid bank code"


class InvalidAccount(TWQRPError):
    message = "twqrp: invalid account"


class InvalidCountryCode(TWQRPError):
    message = "twqrp: invalid country code"


class InvalidAmount(TWQRPError):
    message = "twqrp: invalid amount"


class InvalidNote(TWQRPError):
    message = "twqrp: invalid note"


class InvalidCurrencyCode(TWQRPError):
    message = "twqrp: invalid currency code"


class InvalidQRDueTime(TWQRPError):
    message = "twqrp: invalid qrcode due time"
