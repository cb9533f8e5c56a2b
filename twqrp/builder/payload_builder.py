"""
Payload Builder - Assembles TWQRP payload strings

Integrates:
- FieldBuilder: Field-level validation and formatting
- Constructors for empty and bank transfer payloads
- Fallible (try_*) and raising setters
- Sorted and unsorted renders

Rendered form:
    TWQRP://{name}/{country:03d}/{type:02d}/V1?{prefix}{key}={value}&...

Values and the service name are written as-is. A value containing "&" or "="
corrupts the payload.
"""

import logging
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from twqrp.errors import TWQRPError
from .field_builder import DEFAULT_COUNTRY, FieldBuilder

logger = logging.getLogger(__name__)

SCHEME = "TWQRP"
VERSION = "V1"

TRANSFER = 2


class PayloadBuilder:
    """
    Builds a TWQRP payload from keyed fields

    Usage:
    ```python
    builder = PayloadBuilder.new_transfer("978", "089478")
    builder.name = "test"
    builder.amount(100)

    builder.sorted_string()
    # Returns: "TWQRP://test/158/02/V1?D1=10000&D5=978&D6=0000000000089478"
    ```

    Not safe for concurrent mutation. Renders only read state.
    """

    def __init__(
        self,
        transaction_type: int,
        name: str = "",
        mutable: bool = False,
        field_builder: Optional[FieldBuilder] = None,
    ):
        """
        Initialize PayloadBuilder without any validation

        Args:
            transaction_type: Scheme transaction type (e.g., 2 for transfer)
            name: Service name chosen by the merchant
            mutable: Whether the payer may edit the fields
            field_builder: Field rules, defaults to the scheme's rules
        """
        self.name = name
        self.mutable = mutable
        self.field_builder = field_builder or FieldBuilder()
        self._country = DEFAULT_COUNTRY
        self._transaction_type = transaction_type
        self._fields: Dict[int, str] = {}

    @classmethod
    def new_empty(cls, transaction_type: int) -> "PayloadBuilder":
        """
        Return an empty builder

        Every field must be set through set_field(); nothing is checked.
        """
        return cls(transaction_type)

    @classmethod
    def new_transfer(cls, bank_code: str, account: str) -> "PayloadBuilder":
        """
        Return a builder for a bank transfer payload

        Checks:
        - bank_code is exactly 3 digits
        - account is 1 to 16 digits

        Both are checked; when both fail, InvalidAccount is raised.

        Raises:
            InvalidBankCode: bank_code is not 3 digits
            InvalidAccount: account is not 1 to 16 digits
        """
        builder = cls(TRANSFER)
        err = builder._try_field("bank_code", bank_code)
        err = builder._try_field("account", account) or err
        if err is not None:
            raise err

        logger.info(f"Created transfer payload for bank {bank_code}")
        return builder

    @classmethod
    def from_config(cls, config: Any, transaction_type: int) -> "PayloadBuilder":
        """Return an empty builder carrying configured defaults"""
        builder = cls(transaction_type, name=config.service_name, mutable=config.mutable)
        return builder.country(config.country)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def transaction_type(self) -> int:
        return self._transaction_type

    @property
    def fields(self) -> Mapping[int, str]:
        """Read-only view of the current fields"""
        return MappingProxyType(self._fields)

    @property
    def prefix(self) -> str:
        return "M" if self.mutable else "D"

    def set_field(self, key: int, value: str) -> "PayloadBuilder":
        """Store value under key without any validation"""
        self._fields[int(key)] = value
        logger.debug(f"Set field {int(key)}={value}")
        return self

    def get_field(self, key: int, default: Optional[str] = None) -> Optional[str]:
        return self._fields.get(int(key), default)

    def remove_field(self, key: int) -> None:
        self._fields.pop(int(key), None)

    def _try_field(self, name: str, value: Any) -> Optional[TWQRPError]:
        try:
            key, text = self.field_builder.build_field(name, value)
        except TWQRPError as e:
            return e

        self.set_field(key, text)
        return None

    def _must(self, err: Optional[TWQRPError]) -> "PayloadBuilder":
        if err is not None:
            raise err
        return self

    # ------------------------------------------------------------------
    # Typed setters
    # ------------------------------------------------------------------

    @property
    def country_code(self) -> int:
        return self._country

    def try_country(self, code: int) -> Optional[TWQRPError]:
        """Set the country code, which must be in [1, 999]"""
        err = self.field_builder.check_country(code)
        if err is None:
            self._country = code
        return err

    def country(self, code: int) -> "PayloadBuilder":
        """Set the country code, raising on error"""
        return self._must(self.try_country(code))

    def try_amount(self, amount: int) -> Optional[TWQRPError]:
        """Set the amount, a positive integer of at most five digits"""
        return self._try_field("amount", amount)

    def amount(self, amount: int) -> "PayloadBuilder":
        """Set the amount, raising on error"""
        return self._must(self.try_amount(amount))

    def try_note(self, note: str) -> Optional[TWQRPError]:
        """Set the note, at most 19 bytes once UTF-8 encoded"""
        return self._try_field("note", note)

    def note(self, note: str) -> "PayloadBuilder":
        """Set the note, raising on error"""
        return self._must(self.try_note(note))

    def try_currency(self, code: str) -> Optional[TWQRPError]:
        """Set the currency, three digits (901 for TWD)"""
        return self._try_field("currency", code)

    def currency(self, code: str) -> "PayloadBuilder":
        """Set the currency, raising on error"""
        return self._must(self.try_currency(code))

    def try_qr_due(self, due: datetime) -> Optional[TWQRPError]:
        """
        Set the QR code expiry

        The timestamp is written in due's own zone, convert it first if
        the scheme expects local time.
        """
        return self._try_field("qr_due", due)

    def qr_due(self, due: datetime) -> "PayloadBuilder":
        """Set the QR code expiry, raising on error"""
        return self._must(self.try_qr_due(due))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _header(self) -> str:
        return f"{SCHEME}://{self.name}/{self._country:03d}/{self._transaction_type:02d}/{VERSION}?"

    def _token(self, key: int, value: str) -> str:
        return f"{self.prefix}{key}={value}"

    def tokens(self) -> List[str]:
        """Rendered field tokens in sorted order"""
        return [self._token(k, self._fields[k]) for k in sorted(self._fields, key=str)]

    def sorted_string(self) -> str:
        """
        Render the payload with a fixed field order

        Keys are compared as decimal text, so field 10 comes before field 2.
        Use this wherever output has to be reproducible.
        """
        return self._header() + "&".join(self.tokens())

    def unsorted_string(self) -> str:
        """
        Render the payload in the field map's iteration order

        The order is unspecified. Don't compare, sign or hash the result.
        """
        return self._header() + "&".join(self._token(k, v) for k, v in self._fields.items())

    def __str__(self) -> str:
        return self.unsorted_string()

    def __repr__(self) -> str:
        return f"PayloadBuilder({self.sorted_string()!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "name": self.name,
            "country": self._country,
            "transaction_type": self._transaction_type,
            "mutable": self.mutable,
            "fields": {str(k): v for k, v in sorted(self._fields.items(), key=lambda kv: str(kv[0]))},
            "payload": self.sorted_string(),
        }


# ============================================================================
# Builder convenience functions
# ============================================================================


def build_transfer_payload(
    bank_code: str,
    account: str,
    name: str = "",
    amount: Optional[int] = None,
    note: Optional[str] = None,
    mutable: bool = False,
) -> str:
    """Build a sorted transfer payload in one call"""
    builder = PayloadBuilder.new_transfer(bank_code, account)
    builder.name = name
    builder.mutable = mutable

    if amount is not None:
        builder.amount(amount)
    if note is not None:
        builder.note(note)

    return builder.sorted_string()
