"""Stylesheet module initialization."""

from .nodes import AtRule, ChildNode, Comment, Container, Declaration, Node, Raw, Root, Rule
from .parser import parse
from .values import SourceText, replace_value_symbols

__all__ = [
    "AtRule", "ChildNode", "Comment", "Container", "Declaration", "Node", "Raw", "Root", "Rule",
    "parse", "replace_value_symbols", "SourceText",
]
