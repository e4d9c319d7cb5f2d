"""Stylesheet tree nodes.

Nodes are immutable. Every node keeps the raw text around it (``before``,
``between``, ``after``) so that serializing an unmodified tree reproduces
its source exactly. Transformations build new nodes with
:func:`dataclasses.replace`.
"""

from dataclasses import dataclass, field, replace
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Node:
    """Base class for every stylesheet node."""

    before: str = ""
    line: int = 0
    column: int = 0

    def serialize(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Comment(Node):
    """A ``/* ... */`` comment."""

    text: str = ""

    def serialize(self) -> str:
        return f"{self.before}/*{self.text}*/"


@dataclass(frozen=True)
class Declaration(Node):
    """A ``prop: value`` declaration."""

    prop: str = ""
    between: str = ":"  # colon and the whitespace around it
    value: str = ""
    important: str = ""  # raw " !important" suffix, if any
    after: str = ""  # whitespace before the semicolon
    semicolon: bool = False

    def serialize(self) -> str:
        text = f"{self.before}{self.prop}{self.between}{self.value}{self.important}{self.after}"
        return text + ";" if self.semicolon else text


@dataclass(frozen=True)
class Raw(Node):
    """A statement the parser could not classify, kept verbatim."""

    text: str = ""
    semicolon: bool = False

    def serialize(self) -> str:
        text = f"{self.before}{self.text}"
        return text + ";" if self.semicolon else text


@dataclass(frozen=True)
class Container(Node):
    """A node that may hold child nodes."""

    nodes: Optional[Tuple["ChildNode", ...]] = None
    after: str = ""  # whitespace before the closing brace

    def _serialize_block(self) -> str:
        inner = "".join(child.serialize() for child in self.nodes or ())
        return "{" + inner + self.after + "}"

    def walk(self) -> Iterator["ChildNode"]:
        """Yield every descendant in document order."""
        for child in self.nodes or ():
            yield child
            if isinstance(child, Container):
                yield from child.walk()

    def walk_at_rules(self, name: str) -> Iterator["AtRule"]:
        """Yield every descendant at-rule called ``name``."""
        lowered = name.lower()
        for child in self.walk():
            if isinstance(child, AtRule) and child.name.lower() == lowered:
                yield child

    def with_nodes(self, nodes) -> "Container":
        return replace(self, nodes=tuple(nodes))


@dataclass(frozen=True)
class AtRule(Container):
    """An ``@name params;`` statement or ``@name params { ... }`` block."""

    name: str = ""
    after_name: str = ""
    params: str = ""
    between: str = ""
    semicolon: bool = False

    def serialize(self) -> str:
        text = f"{self.before}@{self.name}{self.after_name}{self.params}{self.between}"
        if self.nodes is not None:
            return text + self._serialize_block()
        return text + ";" if self.semicolon else text


@dataclass(frozen=True)
class Rule(Container):
    """A qualified rule: ``selector { ... }``."""

    selector: str = ""
    between: str = ""
    nodes: Optional[Tuple["ChildNode", ...]] = field(default_factory=tuple)

    def serialize(self) -> str:
        return f"{self.before}{self.selector}{self.between}{self._serialize_block()}"


@dataclass(frozen=True)
class Root(Container):
    """A parsed stylesheet."""

    source: Optional[str] = None
    nodes: Optional[Tuple["ChildNode", ...]] = field(default_factory=tuple)

    def serialize(self) -> str:
        return "".join(child.serialize() for child in self.nodes or ()) + self.after

    def __str__(self) -> str:
        return self.serialize()


ChildNode = Union[AtRule, Rule, Declaration, Comment, Raw]
