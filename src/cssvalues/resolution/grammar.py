"""Grammar of ``@value`` statement parameters.

Two statement forms are recognized, import first::

    <aliases> from <"path" | 'path' | name>
    <name>[:] <expression>

``aliases`` is ``name``, ``name as alias`` or a comma separated list of
those, optionally parenthesized (the parenthesized form may span lines).
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from cssvalues.errors import MalformedAliasError
from .symbol_table import Definition


KEYWORD = "@value"

_NAME_AT_END = re.compile(r"[\w-]+$")
_FROM = re.compile(r"\s+from\s+$")
_ALIAS_SEPARATOR = re.compile(r"\s*,\s*")
_ALIAS_ENTRY = re.compile(r"([\w-]+)(?:\s+as\s+([\w-]+))?")
_DEFINITION = re.compile(r"([\w-]+)(\s*:\s*|\s+)(\S.*?)(\s*)", re.DOTALL)
_QUOTED = re.compile(r"\"[^\"]*\"|'[^']*'")


@dataclass(frozen=True)
class ImportStatement:
    """``<aliases> from <source>``."""

    aliases: str
    source: str
    quoted: bool
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class DefinitionStatement:
    """Plain definitions found in one statement."""

    params: str
    definitions: Tuple[Definition, ...] = ()
    invalid: bool = False
    line: int = 0
    column: int = 0


Statement = Union[ImportStatement, DefinitionStatement]


def unquote(text: str) -> Optional[str]:
    """Return the content of a single or double quoted string, else None."""
    text = text.strip()
    if _QUOTED.fullmatch(text):
        return text[1:-1]
    return None


def parse_aliases(text: str) -> List[Tuple[str, str]]:
    """Parse an alias list into ``(remote_name, local_name)`` pairs.

    Raises:
        MalformedAliasError: An entry is not ``name`` or ``name as alias``
    """
    text = text.strip()
    if text.startswith("(") and text.endswith(")"):
        text = text[1:-1].strip()

    pairs = []
    for entry in _ALIAS_SEPARATOR.split(text):
        match = _ALIAS_ENTRY.fullmatch(entry.strip())
        if not match:
            raise MalformedAliasError(entry)
        remote, local = match.groups()
        pairs.append((remote, local or remote))
    return pairs


def parse_import(params: str, line: int = 0, column: int = 0) -> Optional[ImportStatement]:
    """Match the import form, scanning the source operand from the end."""
    text = params.strip()
    if not text:
        return None

    quote = text[-1]
    if quote in "\"'":
        start = text.rfind(quote, 0, len(text) - 1)
        if start < 0:
            return None
        quoted = True
    else:
        match = _NAME_AT_END.search(text)
        if not match:
            return None
        start = match.start()
        quoted = False

    head = text[:start]
    match = _FROM.search(head)
    if not match:
        return None

    aliases = head[:match.start()]
    if not aliases:
        return None
    if "\n" in aliases and not (aliases.startswith("(") and aliases.endswith(")")):
        return None

    return ImportStatement(
        aliases=aliases,
        source=text[start:],
        quoted=quoted,
        line=line,
        column=column,
    )


def parse_definition(text: str, line: int = 0, column: int = 0) -> Optional[Definition]:
    """Match ``name[:] expression``; the expression may span lines."""
    match = _DEFINITION.fullmatch(text.lstrip())
    if not match:
        return None
    name, separator, expression, trailing = match.groups()
    return Definition(
        name=name,
        expression=expression,
        separator=separator,
        trailing=trailing,
        line=line,
        column=column,
    )


def extract_statement(params: str, line: int = 0, column: int = 0) -> Statement:
    """Classify the parameters of one ``@value`` at-rule.

    A statement that still contains the keyword swallowed the statement
    after it (missing semicolon). It is marked invalid and every segment
    between keywords is read as a definition of its own.
    """
    statement = parse_import(params, line, column)
    if statement is not None:
        return statement

    invalid = KEYWORD in params
    segments = params.split(KEYWORD) if invalid else [params]
    definitions = []
    for segment in segments:
        definition = parse_definition(segment, line, column)
        if definition is not None:
            definitions.append(definition)

    return DefinitionStatement(
        params=params,
        definitions=tuple(definitions),
        invalid=invalid,
        line=line,
        column=column,
    )
