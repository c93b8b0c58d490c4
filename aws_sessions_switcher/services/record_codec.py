"""Codec for the INI-like record format shared by the store and credentials files.

The text is a sequence of blocks::

    [section]
    key = value

separated by blank lines. Values are raw strings: no quoting, list
splitting or interpolation is applied in either direction. A `#` starts
a comment, so values containing `#` or a newline cannot be stored.
"""

from typing import Dict, Mapping, Optional
from configobj import ConfigObj, ConfigObjError
from .errors import MalformedStoreError

Sections = Dict[str, Dict[str, str]]


def _new_config(infile=None) -> ConfigObj:
    return ConfigObj(
        infile,
        list_values=False,
        interpolation=False,
        write_empty_values=True,
        indent_type='',
    )


def decode(text: Optional[str]) -> Sections:
    """
    Parse record text into a mapping of section name to fields.

    Args:
        text: File content (None or blank yields an empty mapping)

    Returns:
        Sections: Section name -> field name -> value

    Raises:
        MalformedStoreError: On a key outside any section, duplicate keys or
            sections, nested sections or any other parse failure
    """
    if not text or not text.strip():
        return {}

    try:
        config = _new_config(text.splitlines())
    except ConfigObjError as e:
        raise MalformedStoreError(f"Could not parse records: {e}") from e

    if config.scalars:
        raise MalformedStoreError(f"Key '{config.scalars[0]}' appears before any [section] header")

    sections: Sections = {}
    for name in config.sections:
        section = config[name]
        if section.sections:
            raise MalformedStoreError(f"Nested section found under [{name}]")
        sections[name] = {key: section[key] for key in section.scalars}
    return sections


def encode(sections: Mapping[str, Mapping[str, str]]) -> str:
    """
    Serialize a mapping of sections back to record text.

    Sections are written in mapping iteration order with a blank line
    between them. The generated text is decoded again before it is
    returned, so nothing that would make the file unreadable is written.

    Raises:
        ValueError: If a section name, key or value cannot be read back
            unchanged (newlines, '#', brackets in names, triple quotes...)
    """
    expected: Sections = {}
    config = _new_config()
    for index, (name, fields) in enumerate(sections.items()):
        for key, value in fields.items():
            if '\n' in str(value) or '#' in str(value):
                raise ValueError(f"Value of '{key}' in [{name}] contains a newline or '#'")
        expected[name] = {key: str(value) for key, value in fields.items()}
        config[name] = dict(expected[name])
        if index:
            config.comments[name] = ['']

    try:
        lines = config.write()
    except ConfigObjError as e:
        raise ValueError(f"Records cannot be written: {e}") from e
    if not lines:
        return ''

    text = '\n'.join(lines) + '\n'
    _check_readable(text, expected)
    return text


def _check_readable(text: str, expected: Sections) -> None:
    try:
        decoded = decode(text)
    except MalformedStoreError as e:
        raise ValueError(f"Records would not be readable once written: {e}") from e

    if list(decoded.items()) != list(expected.items()):
        name = next((name for name in expected if decoded.get(name) != expected[name]), None)
        where = f"section [{name}]" if name is not None else "the section list"
        raise ValueError(f"Records would not read back unchanged: check {where}")
