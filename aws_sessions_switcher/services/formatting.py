"""Coloured text and tables for terminal output."""

from typing import List, Sequence
import click
from rich.console import Console
from rich.table import Table


def green_text(text: str) -> str:
    return click.style(text, fg='green')


def yellow_text(text: str) -> str:
    return click.style(text, fg='yellow')


def red_text(text: str) -> str:
    return click.style(text, fg='red')


def build_table(headers: Sequence[str], rows: List[Sequence[str]]) -> Table:
    table = Table(show_header=True)
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*[str(cell) for cell in row])
    return table


def print_table(headers: Sequence[str], rows: List[Sequence[str]]) -> None:
    Console().print(build_table(headers, rows))
