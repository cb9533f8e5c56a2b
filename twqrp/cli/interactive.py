"""Interactive CLI for building TWQRP payloads."""
from datetime import datetime
from typing import Any, Callable, Optional

import click
from colorama import Fore, Style

from config import PayloadDefaults
from twqrp.builder.payload_builder import PayloadBuilder
from twqrp.errors import TWQRPError

DUE_FORMAT = "%Y%m%d%H%M%S"


class InteractiveCLI:
    """Interactive CLI interface."""

    def __init__(self, defaults: PayloadDefaults):
        """Initialize CLI."""
        self.defaults = defaults
        self.builder: Optional[PayloadBuilder] = None

    def print_header(self, title: str):
        """Print a section header."""
        click.echo(f"\n{Fore.CYAN}{'━' * 45}")
        click.echo(f"{Fore.CYAN}{title}")
        click.echo(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n")

    def run(self) -> PayloadBuilder:
        """Run interactive CLI."""
        self.print_header("Step 1: Transfer Account")
        self.builder = self._prompt_transfer()

        err = self.builder.try_country(self.defaults.country)
        if err is not None:
            click.echo(f"{Fore.RED}Error: {err}", err=True)
            raise SystemExit(1)

        self.builder.name = click.prompt("Service name", default=self.defaults.service_name)
        self.builder.mutable = click.confirm("Let the payer edit fields?", default=self.defaults.mutable)

        self.print_header("Step 2: Optional Fields")
        self._prompt_optional("Amount (TWD, blank to skip)", self.builder.try_amount, int)
        self._prompt_optional("Note (blank to skip)", self.builder.try_note)
        self._prompt_optional("Currency code (blank to skip)", self.builder.try_currency)
        self._prompt_optional(
            "QR due time YYYYMMDDHHMMSS (blank to skip)",
            self.builder.try_qr_due,
            lambda s: datetime.strptime(s, DUE_FORMAT),
        )

        self.print_header("Payload")
        click.echo(f"{Fore.GREEN}{self.builder.sorted_string()}")
        return self.builder

    def _prompt_transfer(self) -> PayloadBuilder:
        """Ask for bank code and account until both are valid."""
        while True:
            bank_code = click.prompt("Bank code (3 digits)")
            account = click.prompt("Account (1-16 digits)")

            try:
                return PayloadBuilder.new_transfer(bank_code, account)
            except TWQRPError as e:
                click.echo(f"{Fore.RED}Error: {e}")

    def _prompt_optional(
        self,
        label: str,
        apply: Callable[[Any], Optional[TWQRPError]],
        convert: Callable[[str], Any] = str,
    ) -> None:
        """Ask for a field until it is accepted or left blank."""
        while True:
            raw = click.prompt(label, default="", show_default=False)
            if not raw:
                return

            try:
                value = convert(raw)
            except ValueError:
                click.echo(f"{Fore.RED}Could not read {raw!r}")
                continue

            err = apply(value)
            if err is None:
                return
            click.echo(f"{Fore.RED}Error: {err}")
