"""
Command-line interface for phone_book.

Provides CLI commands for creating a book file and adding, updating,
deleting and searching contacts in it.

Usage:
    # Show help
    phone-book --help

    # Create the book file
    phone-book init

    # Manage contacts
    phone-book add Jane Doe 5551234567 "1 Main St, Springfield, IL, 62701, USA"
    phone-book update 5551234567 -f Janet
    phone-book delete 5551234567

    # Search
    phone-book search phone 5551234567
    phone-book search name -l Doe
    phone-book search city Springfield
"""

import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from phone_book import __version__
from phone_book.book.contact import Address, Contact, parse_address
from phone_book.book.errors import (
    ContactNotFoundError,
    DuplicateContactError,
    InvalidAddressFormatError,
    InvalidPhoneNumberError,
    PersistenceError,
    PhoneBookError,
)
from phone_book.book.search import (
    DEFAULT_FUZZY_LIMIT,
    DEFAULT_FUZZY_THRESHOLD,
    find_by_prefix,
    fuzzy_search,
)
from phone_book.book.store import ContactStore
from phone_book.cli.formatters import (
    NOT_FOUND_MESSAGE,
    format_contact,
    show_contacts,
    show_search_hits,
)
from phone_book.config.generator import save_config_file
from phone_book.config.loader import DEFAULT_CONFIG_FILE, ConfigError, ConfigLoader
from phone_book.storage.json_file import PhoneBookFile
from phone_book.utils import resolve_book_file, resolve_config_dir
from phone_book.utils.logging import cleanup_old_logs, get_logger, setup_logging

# Exit statuses
EXIT_OK = 0
EXIT_NO_SEARCH_TERM = 1
EXIT_CONFIG_ERROR = 1
EXIT_USAGE = 2  # click's own status for bad arguments
EXIT_INVALID_PHONE = 3
EXIT_DUPLICATE = 4
EXIT_NOT_FOUND = 5
EXIT_PERSISTENCE = 6
EXIT_ERROR = 1

# Error type -> exit status; the first match along the error's MRO wins
EXIT_CODES: dict[type[PhoneBookError], int] = {
    InvalidAddressFormatError: EXIT_USAGE,
    InvalidPhoneNumberError: EXIT_INVALID_PHONE,
    DuplicateContactError: EXIT_DUPLICATE,
    ContactNotFoundError: EXIT_NOT_FOUND,
    PersistenceError: EXIT_PERSISTENCE,
}


def exit_code_for(error: PhoneBookError) -> int:
    """Look up the exit status for an error."""
    for error_type in type(error).__mro__:
        if error_type in EXIT_CODES:
            return EXIT_CODES[error_type]
    return EXIT_ERROR


def fail(error: PhoneBookError) -> NoReturn:
    """Report an error to the user and exit with its status."""
    get_logger(__name__).error(str(error))
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(exit_code_for(error))


def validate_address(
    ctx: click.Context, _param: click.Parameter, value: Optional[str]
) -> Optional[Address]:
    """Parse an address argument or option for Click."""
    if value is None:
        return value
    try:
        return parse_address(value)
    except InvalidAddressFormatError as e:
        raise click.BadParameter(str(e)) from e


def get_config_dir(config_dir: Optional[str]) -> Path:
    """Get the configuration directory path."""
    return resolve_config_dir(config_dir)


def get_config_file(config_file: Optional[str], config_dir: Path) -> Path:
    """Get the configuration file path."""
    if config_file:
        return Path(config_file).expanduser()
    return config_dir / DEFAULT_CONFIG_FILE


def _load_book(ctx: click.Context) -> tuple[PhoneBookFile, ContactStore]:
    """Load the book file named in the context, exiting on failure."""
    book = PhoneBookFile(ctx.obj["book_file"])
    try:
        return book, book.load()
    except PersistenceError as e:
        fail(e)


@click.group()
@click.version_option(version=__version__, prog_name="phone-book")
@click.option(
    "--verbose", "-v", is_flag=True, help="Enable verbose output with detailed logging."
)
@click.option(
    "--config-dir",
    "-c",
    type=click.Path(exists=False, file_okay=False, dir_okay=True),
    envvar="PHONE_BOOK_CONFIG_DIR",
    help="Configuration directory path (default: ~/.phone-book).",
)
@click.option(
    "--config-file",
    type=click.Path(exists=False, file_okay=True, dir_okay=False),
    envvar="PHONE_BOOK_CONFIG_FILE",
    help="Configuration file path (default: <config dir>/config.yaml).",
)
@click.option(
    "--file",
    "-f",
    "book_file",
    type=click.Path(exists=False, file_okay=True, dir_okay=False),
    envvar="PHONE_BOOK_FILE",
    help="Book file to load and save (default: phone_book.json).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_dir: Optional[str],
    config_file: Optional[str],
    book_file: Optional[str],
) -> None:
    """
    Simple phone book manager.

    Keeps contacts (name, phone number and an optional address) in a JSON
    file. Run 'phone-book init' once to create the file.
    """
    ctx.ensure_object(dict)

    resolved_config_dir = get_config_dir(config_dir)
    resolved_config_file = get_config_file(config_file, resolved_config_dir)

    ctx.obj["config_dir"] = resolved_config_dir
    ctx.obj["config_file"] = resolved_config_file

    config = {}
    try:
        config = ConfigLoader(resolved_config_file).load_and_validate()
    except ConfigError as e:
        # Keep going with defaults; the config file is optional
        click.echo(
            click.style(f"Warning: Configuration error: {e}", fg="yellow"), err=True
        )
        config = {}

    ctx.obj["config"] = config
    ctx.obj["book_file"] = resolve_book_file(book_file, config.get("phone_book_file"))

    effective_verbose = verbose or config.get("verbose", False)
    ctx.obj["verbose"] = effective_verbose

    log_dir = Path(config["log_dir"]).expanduser() if config.get("log_dir") else None
    setup_logging(verbose=effective_verbose, log_dir=log_dir)

    log_retention = config.get("log_retention_count", 10)
    if log_retention > 0:
        cleanup_old_logs(log_dir=log_dir, keep_count=log_retention)


# =============================================================================
# Init Command
# =============================================================================


@cli.command("init")
@click.option(
    "--force", is_flag=True, help="Overwrite the book file if it already exists."
)
@click.pass_context
def init_command(ctx: click.Context, force: bool) -> None:
    """
    Create an empty book file.

    The book file has to exist before any other command can be run.

    Examples:

        # Create phone_book.json in the current directory
        phone-book init

        # Start over with an empty book
        phone-book -f contacts.json init --force
    """
    logger = get_logger(__name__)
    book = PhoneBookFile(ctx.obj["book_file"])

    try:
        book.create(overwrite=force)
    except PersistenceError as e:
        fail(e)

    logger.info(f"Initialized book file {book.path}")
    click.echo("File created")


# =============================================================================
# Contact Commands
# =============================================================================


@cli.command("add")
@click.argument("first")
@click.argument("last")
@click.argument("phone_number")
@click.argument("address", required=False, callback=validate_address)
@click.pass_context
def add_command(
    ctx: click.Context,
    first: str,
    last: str,
    phone_number: str,
    address: Optional[Address],
) -> None:
    """
    Add a new contact.

    PHONE_NUMBER must be exactly ten characters. ADDRESS is optional and
    given as "street address, city, state, postcode, country".

    Example:

        phone-book add Jane Doe 5551234567 "1 Main St, Springfield, IL, 62701, USA"
    """
    logger = get_logger(__name__)
    book, store = _load_book(ctx)

    contact = Contact(
        first_name=first,
        last_name=last,
        phone_number=phone_number,
        address=address,
    )

    try:
        store.insert(contact)
        book.save(store)
    except PhoneBookError as e:
        fail(e)

    logger.info(f"Added contact {phone_number}")
    click.echo("Contact saved")


@cli.command("update")
@click.argument("phone_number")
@click.option("--first", "-f", help="New first name.")
@click.option("--last", "-l", help="New last name.")
@click.option(
    "--address",
    "-a",
    callback=validate_address,
    help='New address as "street address, city, state, postcode, country".',
)
@click.pass_context
def update_command(
    ctx: click.Context,
    phone_number: str,
    first: Optional[str],
    last: Optional[str],
    address: Optional[Address],
) -> None:
    """
    Modify an existing contact.

    Only the supplied fields change; the others keep their values.

    Example:

        phone-book update 5551234567 -f Janet
    """
    logger = get_logger(__name__)
    book, store = _load_book(ctx)

    try:
        existing = store.find_by_phone(phone_number)
        store.replace(
            existing.with_changes(first_name=first, last_name=last, address=address)
        )
        book.save(store)
    except PhoneBookError as e:
        fail(e)

    logger.info(f"Updated contact {phone_number}")
    click.echo("Contact updated")


@cli.command("delete")
@click.argument("phone_number")
@click.pass_context
def delete_command(ctx: click.Context, phone_number: str) -> None:
    """
    Delete a contact.

    Example:

        phone-book delete 5551234567
    """
    logger = get_logger(__name__)
    book, store = _load_book(ctx)

    try:
        store.delete(phone_number)
        book.save(store)
    except PhoneBookError as e:
        fail(e)

    logger.info(f"Deleted contact {phone_number}")
    click.echo("Contact deleted")


# =============================================================================
# Search Commands
# =============================================================================


@cli.group("search")
@click.pass_context
def search_group(ctx: click.Context) -> None:
    """
    Search the book.

    Finding nothing is not an error: the command prints a message and
    exits with status 0.
    """
    pass


@search_group.command("phone")
@click.argument("phone_number")
@click.pass_context
def search_phone_command(ctx: click.Context, phone_number: str) -> None:
    """Search for a contact using its phone number."""
    _book, store = _load_book(ctx)

    try:
        contact = store.find_by_phone(phone_number)
    except ContactNotFoundError:
        click.echo(NOT_FOUND_MESSAGE)
        return
    except PhoneBookError as e:
        fail(e)

    click.echo(format_contact(contact))


@search_group.command("name")
@click.option("--first", "-f", help="First name.")
@click.option("--last", "-l", help="Last name.")
@click.pass_context
def search_name_command(
    ctx: click.Context, first: Optional[str], last: Optional[str]
) -> None:
    """
    Search for contacts using first and last names.

    A contact matches when its first name OR its last name is equal to the
    one given.
    """
    if first is None and last is None:
        click.echo("must provide at least one search value", err=True)
        sys.exit(EXIT_NO_SEARCH_TERM)

    _book, store = _load_book(ctx)
    show_contacts(store.find_by_name(first, last))


@search_group.command("city")
@click.argument("city")
@click.pass_context
def search_city_command(ctx: click.Context, city: str) -> None:
    """Search for contacts living in CITY (exact, case-sensitive)."""
    _book, store = _load_book(ctx)
    show_contacts(store.find_by_city(city))


@search_group.command("fuzzy")
@click.argument("search")
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=1),
    help=f"Maximum number of results (default: {DEFAULT_FUZZY_LIMIT}).",
)
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0.0, 1.0),
    help=f"Minimum similarity from 0 to 1 (default: {DEFAULT_FUZZY_THRESHOLD}).",
)
@click.pass_context
def search_fuzzy_command(
    ctx: click.Context,
    search: str,
    limit: Optional[int],
    threshold: Optional[float],
) -> None:
    """
    Search for contacts whose name or city resembles SEARCH.

    Example:

        phone-book search fuzzy "jon do"
    """
    config = ctx.obj["config"]
    if limit is None:
        limit = config.get("fuzzy_limit", DEFAULT_FUZZY_LIMIT)
    if threshold is None:
        threshold = config.get("fuzzy_threshold", DEFAULT_FUZZY_THRESHOLD)

    _book, store = _load_book(ctx)
    show_search_hits(fuzzy_search(store, search, threshold=threshold, limit=limit))


@search_group.command("prefix")
@click.argument("search")
@click.pass_context
def search_prefix_command(ctx: click.Context, search: str) -> None:
    """Search for contacts whose phone number starts with SEARCH."""
    _book, store = _load_book(ctx)
    show_contacts(find_by_prefix(store, search))


# =============================================================================
# Init-Config Command
# =============================================================================


@cli.command("init-config")
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite existing configuration file if it exists.",
)
@click.pass_context
def init_config_command(ctx: click.Context, force: bool) -> None:
    """
    Generate a default configuration file.

    Creates a configuration file with all available options documented
    and commented out.

    Examples:

        # Create config file (fails if already exists)
        phone-book init-config

        # Overwrite existing config file
        phone-book init-config --force
    """
    logger = get_logger(__name__)
    config_file = ctx.obj["config_file"]

    click.echo(f"Creating configuration file: {config_file}")

    success, error = save_config_file(config_file, overwrite=force)

    if success:
        click.echo(click.style("Configuration file created successfully!", fg="green"))
        click.echo(f"\nLocation: {config_file}")
    else:
        click.echo(click.style(f"Error: {error}", fg="red"), err=True)
        logger.error(f"Failed to create configuration file: {error}")
        sys.exit(EXIT_CONFIG_ERROR)
