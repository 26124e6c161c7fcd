"""
Entry point for running phone_book as a module.

Usage:
    python -m phone_book --help
    python -m phone_book init
    python -m phone_book add Jane Doe 5551234567
"""

from phone_book.cli import cli

if __name__ == "__main__":
    cli()
