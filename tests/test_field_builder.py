"""Tests for FieldBuilder."""
import pytest

from twqrp.builder.field_builder import (
    FieldBuilder,
    FieldKey,
    FieldRule,
    FIELD_RULES,
)
from twqrp.errors import TWQRPError, InvalidAmount, InvalidCountryCode, InvalidNote


class TestFieldBuilder:
    """Test field validation and formatting."""

    def test_build_amount(self):
        """Test amount field key and minor units."""
        assert FieldBuilder().build_field("amount", 250) == (1, "25000")

    def test_build_account(self):
        """Test account field is zero padded."""
        assert FieldBuilder().build_field("account", "42") == (6, "0000000000000042")

    def test_build_field_returns_plain_int_key(self):
        """Test keys come back as int, not FieldKey."""
        key, _ = FieldBuilder().build_field("note", "hi")

        assert type(key) is int
        assert key == FieldKey.NOTE

    def test_build_field_raises_rule_error(self):
        """Test rejected values raise the rule's error."""
        with pytest.raises(InvalidNote) as exc:
            FieldBuilder().build_field("note", "x" * 20)

        assert isinstance(exc.value, TWQRPError)
        assert isinstance(exc.value, ValueError)

    def test_unknown_rule(self):
        """Test unknown rule names are a KeyError."""
        with pytest.raises(KeyError):
            FieldBuilder().build_field("tip", 10)

    def test_add_rule(self):
        """Test registering a rule for an extra field."""
        builder = FieldBuilder()
        builder.add_rule("tip", FieldRule(20, InvalidAmount, lambda v: isinstance(v, int) and v > 0))

        assert builder.build_field("tip", 5) == (20, "5")
        with pytest.raises(InvalidAmount):
            builder.build_field("tip", 0)

    def test_add_rule_does_not_leak(self):
        """Test custom rules stay on their own builder."""
        FieldBuilder().add_rule("tip", FieldRule(20, InvalidAmount, bool))

        assert "tip" not in FIELD_RULES
        assert "tip" not in FieldBuilder().rules

    def test_check_country(self):
        """Test country check returns errors instead of raising."""
        builder = FieldBuilder()

        assert builder.check_country(158) is None
        assert isinstance(builder.check_country(1000), InvalidCountryCode)

    @pytest.mark.parametrize("code, ok", [(1, True), (999, True), (0, False), (1000, False), (False, False)])
    def test_country_range(self, code, ok):
        """Test country range."""
        assert (FieldBuilder().check_country(code) is None) is ok

    def test_rule_to_dict(self):
        """Test rule dictionary."""
        assert FIELD_RULES["currency"].to_dict() == {"key": 10, "error": "InvalidCurrencyCode"}

    def test_error_to_dict(self):
        """Test error dictionary."""
        err = InvalidAmount(0)

        assert err.to_dict() == {
            "error": "InvalidAmount",
            "message": "twqrp: invalid amount",
            "value": 0,
        }
