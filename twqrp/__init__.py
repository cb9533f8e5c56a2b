"""TWQRP (Taiwan QR Payment) payload generator."""

from .builder import (
    PayloadBuilder,
    FieldBuilder,
    FieldKey,
    build_transfer_payload,
    TRANSFER,
    DEFAULT_COUNTRY,
    TWD_CURRENCY,
)
from .errors import (
    TWQRPError,
    InvalidAccount,
    InvalidAmount,
    InvalidBankCode,
    InvalidCountryCode,
    InvalidCurrencyCode,
    InvalidNote,
    InvalidQRDueTime,
)

__version__ = "0.1.0"

__all__ = [
    "PayloadBuilder",
    "FieldBuilder",
    "FieldKey",
    "build_transfer_payload",
    "TRANSFER",
    "DEFAULT_COUNTRY",
    "TWD_CURRENCY",
    "TWQRPError",
    "InvalidAccount",
    "InvalidAmount",
    "InvalidBankCode",
    "InvalidCountryCode",
    "InvalidCurrencyCode",
    "InvalidNote",
    "InvalidQRDueTime",
]
