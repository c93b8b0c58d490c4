"""Interactive prompts and input validators."""

import re
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Union
import click

Validator = Callable[[str], Union[bool, str]]


def generic_text_validator(value: str) -> Union[bool, str]:
    if not value or not value.strip():
        return 'This field cannot be empty'
    return True


def not_empty(value: str) -> Union[bool, str]:
    return generic_text_validator(value)


def section_name_validator(value: str) -> Union[bool, str]:
    """Text that ends up in a ``[section]`` header of the store file."""
    result = generic_text_validator(value)
    if result is not True:
        return result
    if any(char in value for char in '[]=#'):
        return "This field cannot contain '[', ']', '=' or '#'"
    return True


def numbers_only(value: str) -> Union[bool, str]:
    if not value or not value.strip():
        return 'This field cannot be empty'
    if not re.fullmatch(r'\d+', value):
        return 'This field should only contain numeric characters'
    return True


class Prompter(ABC):
    """Asks the user for input."""

    @abstractmethod
    def ask_text(self, prompt: str, validator: Optional[Validator] = None, default: Optional[str] = None) -> str:
        ...

    @abstractmethod
    def ask_confirm(self, prompt: str, default: bool = False) -> bool:
        ...

    @abstractmethod
    def ask_select(self, prompt: str, choices: Sequence[str]) -> Optional[str]:
        ...


class ClickPrompter(Prompter):
    """Prompter backed by click's terminal prompts."""

    def ask_text(self, prompt: str, validator: Optional[Validator] = None, default: Optional[str] = None) -> str:
        """
        Prompt until the validator accepts the answer.

        Args:
            prompt: Question shown to the user
            validator: Returns True or an error message
            default: Value used when the user just presses enter
        """
        while True:
            value = click.prompt(prompt, default=default if default is not None else '', show_default=default is not None)
            result = validator(value) if validator else True
            if result is True:
                return value
            click.echo(click.style(str(result), fg='red'), err=True)

    def ask_confirm(self, prompt: str, default: bool = False) -> bool:
        return click.confirm(prompt, default=default)

    def ask_select(self, prompt: str, choices: Sequence[str]) -> Optional[str]:
        """
        Show a numbered menu and return the chosen entry.

        Returns:
            Optional[str]: Selected choice, or None when there is nothing to choose
        """
        options: List[str] = list(choices)
        if not options:
            return None

        click.echo(prompt)
        for i, option in enumerate(options, 1):
            click.echo(f"{i:2d}. {option}")

        index = click.prompt(f"Select (1-{len(options)})", type=click.IntRange(1, len(options)))
        return options[index - 1]
