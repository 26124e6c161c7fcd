"""CLI output formatting functions.

This module contains functions for rendering contacts and search results
on the command line.
"""

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from phone_book.book.contact import Contact
    from phone_book.book.search import SearchHit

# Printed when a search finds nothing
NOT_FOUND_MESSAGE = "didn't find anything"


def format_contact(contact: "Contact") -> str:
    """
    Render a contact on one line.

    Example:
        Jane Doe <5551234567> - 1 Main St, Springfield, IL, 62701, USA
    """
    name = contact.full_name or "(no name)"
    line = f"{name} <{contact.phone_number}>"
    if contact.address is not None:
        line = f"{line} - {contact.address}"
    return line


def show_contacts(contacts: list["Contact"]) -> None:
    """Print each contact on its own line, or the not-found message."""
    if not contacts:
        click.echo(NOT_FOUND_MESSAGE)
        return

    for contact in contacts:
        click.echo(format_contact(contact))


def show_search_hits(hits: list["SearchHit"]) -> None:
    """Print fuzzy search hits with their score and the field that matched."""
    if not hits:
        click.echo(NOT_FOUND_MESSAGE)
        return

    for hit in hits:
        score = click.style(f"{hit.score:.0%}", fg="cyan")
        click.echo(f"{format_contact(hit.contact)} ({score} on {hit.matched_on})")
