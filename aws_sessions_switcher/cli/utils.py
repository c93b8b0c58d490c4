"""Utility functions for CLI commands."""

import sys
import click
from functools import wraps
from loguru import logger
from ..services.formatting import red_text


def configure_logging(debug: bool = False) -> None:
    """Send log records to stderr, at DEBUG level when debug is set."""
    logger.remove()
    logger.add(sys.stderr, level='DEBUG' if debug else 'INFO', format='<level>{level}</level>: {message}')


def handle_errors(func):
    """Decorator to handle common CLI errors with consistent messaging."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValueError as e:
            # SwitcherError subclasses ValueError
            click.echo(red_text(f"ERROR: {str(e)}"), err=True)
            raise click.exceptions.Exit(1)
        except (click.exceptions.Exit, click.Abort, click.ClickException):
            raise
        except Exception as e:
            click.echo(red_text(f"ERROR: Unexpected error: {str(e)}"), err=True)
            raise click.exceptions.Exit(1)
    return wrapper
