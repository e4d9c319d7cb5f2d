"""Symbol tables for ``@value`` resolution."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple


@dataclass
class Symbol:
    """A named value bound in a stylesheet scope."""

    name: str
    value: str
    source: str = "declared"  # declared, imported
    file: Optional[str] = None
    line: Optional[int] = None


@dataclass(frozen=True)
class Definition:
    """A plain ``name: expression`` statement."""

    name: str
    expression: str
    separator: str = ": "
    trailing: str = ""
    line: int = 0
    column: int = 0

    def rewrite(self, resolved: str) -> str:
        """Statement parameters with the expression swapped for ``resolved``."""
        return f"{self.name}{self.separator}{resolved}{self.trailing}"


@dataclass(frozen=True)
class ImportBinding:
    """One entry of an import alias list."""

    remote_name: str
    local_name: str
    module_path: str
    source_dir: str


@dataclass(frozen=True)
class RequiredSet:
    """Names an importer wants from a file, keyed by their name in that file."""

    bindings: Tuple[ImportBinding, ...] = ()

    def __iter__(self) -> Iterator[ImportBinding]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)


class Scope:
    """Ordered symbol table built while walking one stylesheet."""

    def __init__(self, file: Optional[Path] = None) -> None:
        self.file = str(file) if file is not None else None
        self.symbols: Dict[str, Symbol] = {}

    def bind(self, symbol: Symbol) -> None:
        """Bind a symbol, shadowing any earlier binding of the same name."""
        self.symbols.pop(symbol.name, None)
        self.symbols[symbol.name] = symbol

    def define(self, definition: Definition, value: str) -> None:
        self.bind(Symbol(
            name=definition.name,
            value=value,
            source="declared",
            file=self.file,
            line=definition.line,
        ))

    def unbind(self, name: str) -> None:
        self.symbols.pop(name, None)

    def resolve(self, name: str) -> Optional[str]:
        """Resolve a symbol name to its value."""
        symbol = self.symbols.get(name)
        return symbol.value if symbol is not None else None

    def values(self) -> Dict[str, str]:
        """Name to value mapping, in binding order."""
        return {name: symbol.value for name, symbol in self.symbols.items()}

    def export(self, required: RequiredSet) -> Dict[str, Optional[str]]:
        """Values an importer asked for, keyed by the importer's aliases.

        Names this scope does not bind map to None.
        """
        return {
            binding.local_name: self.resolve(binding.remote_name)
            for binding in required
        }

    def __contains__(self, name: object) -> bool:
        return name in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)
