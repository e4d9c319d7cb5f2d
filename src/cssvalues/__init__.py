"""Resolution and substitution of CSS Modules ``@value`` symbols."""

__version__ = "0.1.0"

from cssvalues.config import ResolveConfig, ValuesConfig, load_config
from cssvalues.errors import (
    CssValuesError, CssValuesWarning, CyclicImportError, InvalidDefinitionWarning,
    MalformedAliasError, UnresolvableImportError,
)
from cssvalues.stylesheet import Root, parse
from cssvalues.processor import Processor, ProcessResult
from cssvalues.plugins import BasePlugin, ValuesReplacePlugin
from cssvalues.resolution import DocumentCache, ModuleResolver

__all__ = [
    "__version__",
    "ResolveConfig", "ValuesConfig", "load_config",
    "CssValuesError", "CssValuesWarning", "CyclicImportError", "InvalidDefinitionWarning",
    "MalformedAliasError", "UnresolvableImportError",
    "Root", "parse", "Processor", "ProcessResult", "BasePlugin", "ValuesReplacePlugin",
    "DocumentCache", "ModuleResolver",
]
