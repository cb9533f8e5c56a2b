#!/usr/bin/env python3
"""TWQRP Payload Generator - Entry point."""
import json
import logging
from datetime import datetime

import click
from colorama import Fore, Style, init

from config import app_config
from twqrp import __version__
from twqrp.builder.payload_builder import PayloadBuilder
from twqrp.cli.interactive import DUE_FORMAT, InteractiveCLI
from twqrp.errors import TWQRPError

# Initialize colorama
init(autoreset=True)

logger = logging.getLogger(__name__)


def print_banner():
    """Print application banner."""
    click.echo(f"{Fore.CYAN}{'=' * 44}")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}TWQRP Payload Generator{Fore.CYAN}              ║")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}Taiwan QR Payment content builder{Fore.CYAN}    ║")
    click.echo(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    click.echo()


def fail(err: TWQRPError):
    """Report a rejected input and exit with status 1."""
    click.echo(f"{Fore.RED}Error: {err}", err=True)
    raise SystemExit(1)


def emit(builder: PayloadBuilder, sorted_output: bool, as_json: bool = False):
    """Print the rendered payload."""
    logger.debug(f"Rendering {len(builder.fields)} fields")
    if as_json:
        click.echo(json.dumps(builder.to_dict(), indent=2, ensure_ascii=False))
        return

    if sorted_output:
        click.echo(builder.sorted_string())
    else:
        click.echo(builder.unsorted_string())


def parse_due(ctx, param, value):
    """Click callback turning YYYYMMDDHHMMSS into a datetime."""
    if value is None:
        return None
    try:
        return datetime.strptime(value, DUE_FORMAT)
    except ValueError:
        raise click.BadParameter(f"expected YYYYMMDDHHMMSS, got {value!r}")


def parse_fields(ctx, param, value):
    """Click callback turning KEY=VALUE pairs into (int, str) tuples."""
    fields = []
    for item in value:
        key, sep, text = item.partition("=")
        if not sep or not key.isdigit():
            raise click.BadParameter(f"expected KEY=VALUE with a numeric key, got {item!r}")
        fields.append((int(key), text))
    return fields


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default=app_config.log_level,
    show_default=True,
    help="Logging level (DEBUG, INFO, WARNING, ...)",
)
def cli(log_level):
    """TWQRP Payload Generator - Build Taiwan QR Payment payloads."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@cli.command()
@click.argument("bank_code")
@click.argument("account")
@click.option("--name", default=app_config.payload.service_name, help="Service name")
@click.option("--amount", type=int, help="Amount in TWD (1-99999)")
@click.option("--note", help="Note, at most 19 bytes")
@click.option("--currency", help="Currency code, 3 digits (901 for TWD)")
@click.option("--due", callback=parse_due, help="QR due time as YYYYMMDDHHMMSS")
@click.option("--mutable/--fixed", default=app_config.payload.mutable, help="Let the payer edit fields")
@click.option("--sorted/--unsorted", "sorted_output", default=app_config.payload.sorted_output,
              help="Render fields in fixed order")
@click.option("--json", "as_json", is_flag=True, help="Print the builder state as JSON")
def transfer(bank_code, account, name, amount, note, currency, due, mutable, sorted_output, as_json):
    """Build a bank transfer payload."""
    try:
        builder = PayloadBuilder.new_transfer(bank_code, account)
        builder.country(app_config.payload.country)
        if amount is not None:
            builder.amount(amount)
        if note is not None:
            builder.note(note)
        if currency is not None:
            builder.currency(currency)
        if due is not None:
            builder.qr_due(due)
    except TWQRPError as e:
        fail(e)

    builder.name = name
    builder.mutable = mutable
    emit(builder, sorted_output, as_json)


@cli.command()
@click.argument("transaction_type", type=int)
@click.option("--field", "fields", multiple=True, callback=parse_fields, help="Raw field as KEY=VALUE")
@click.option("--name", default=app_config.payload.service_name, help="Service name")
@click.option("--country", type=int, default=app_config.payload.country, show_default=True,
              help="Country code (1-999)")
@click.option("--mutable/--fixed", default=app_config.payload.mutable, help="Let the payer edit fields")
@click.option("--sorted/--unsorted", "sorted_output", default=app_config.payload.sorted_output,
              help="Render fields in fixed order")
def raw(transaction_type, fields, name, country, mutable, sorted_output):
    """Build a payload from unchecked raw fields."""
    builder = PayloadBuilder.new_empty(transaction_type)
    err = builder.try_country(country)
    if err is not None:
        fail(err)

    for key, value in fields:
        builder.set_field(key, value)

    builder.name = name
    builder.mutable = mutable
    emit(builder, sorted_output)


@cli.command()
def interactive():
    """Build a transfer payload step by step."""
    print_banner()

    cli_tool = InteractiveCLI(app_config.payload)
    cli_tool.run()


if __name__ == "__main__":
    cli()
