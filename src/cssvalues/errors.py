"""Errors and warnings raised while resolving values."""

from pathlib import Path
from typing import Optional, Sequence, Union


class CssValuesError(Exception):
    """Base class for fatal resolution errors."""


class MalformedAliasError(CssValuesError):
    """An import alias list entry does not match ``name [as alias]``."""

    def __init__(self, entry: str) -> None:
        super().__init__(f'@value statement "{entry}" is invalid!')
        self.entry = entry


class UnresolvableImportError(CssValuesError):
    """An import specifier could not be resolved to a file."""

    def __init__(self, request: str, context: Union[str, Path]) -> None:
        super().__init__(f"Can't resolve '{request}' in '{context}'")
        self.request = request
        self.context = str(context)


class CyclicImportError(CssValuesError):
    """A stylesheet imports itself, directly or through other files."""

    def __init__(self, cycle: Sequence[str]) -> None:
        super().__init__("Cyclic @value import: " + " -> ".join(cycle))
        self.cycle = list(cycle)


class CssValuesWarning(UserWarning):
    """Non-fatal problem collected on the processing result."""

    def __init__(
        self,
        text: str,
        source: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        plugin: str = "cssvalues"
    ) -> None:
        super().__init__(text)
        self.text = text
        self.source = source
        self.line = line
        self.column = column
        self.plugin = plugin

    def __str__(self) -> str:
        location = self.source or "<input>"
        if self.line:
            location = f"{location}:{self.line}:{self.column}"
        return f"{location}: {self.text}"


class InvalidDefinitionWarning(CssValuesWarning):
    """A ``@value`` statement still contains the ``@value`` keyword."""

    def __init__(self, statement: str, **kwargs) -> None:
        super().__init__(f"Invalid value definition: {statement}", **kwargs)
        self.statement = statement
