"""Resolution module initialization."""

from .symbol_table import Definition, ImportBinding, RequiredSet, Scope, Symbol
from .grammar import (
    DefinitionStatement, ImportStatement, extract_statement, parse_aliases, parse_definition,
    parse_import, unquote,
)
from .graph import ImportGraph
from .module_resolver import ModuleResolver, to_module_request
from .walker import DefinitionWalker, WalkResult
from .loader import DocumentCache, FileLoader, read_text

__all__ = [
    "Definition", "ImportBinding", "RequiredSet", "Scope", "Symbol",
    "DefinitionStatement", "ImportStatement", "extract_statement", "parse_aliases",
    "parse_definition", "parse_import", "unquote",
    "ImportGraph", "ModuleResolver", "to_module_request",
    "DefinitionWalker", "WalkResult", "DocumentCache", "FileLoader", "read_text",
]
