"""
Payload Builder Module

Builds TWQRP payload strings with:
- Scheme field keys and validation rules
- Empty and bank transfer constructors
- Fallible and raising typed setters
- Sorted (reproducible) and unsorted renders
"""

from .payload_builder import PayloadBuilder, build_transfer_payload, TRANSFER
from .field_builder import FieldBuilder, FieldKey, FieldRule, DEFAULT_COUNTRY, TWD_CURRENCY

__all__ = [
    "PayloadBuilder",
    "FieldBuilder",
    "FieldKey",
    "FieldRule",
    "build_transfer_payload",
    "TRANSFER",
    "DEFAULT_COUNTRY",
    "TWD_CURRENCY",
]
