"""Plugins module initialization."""

from .base import BasePlugin
from .values_replace import ValuesReplacePlugin

__all__ = ["BasePlugin", "ValuesReplacePlugin"]
