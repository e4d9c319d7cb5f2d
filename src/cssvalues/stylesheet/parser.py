"""Stylesheet parser.

Builds a :class:`~cssvalues.stylesheet.nodes.Root` from CSS text on top of
the tinycss2 tokenizer. The parser is lenient: anything it cannot classify
becomes a :class:`~cssvalues.stylesheet.nodes.Raw` node, so the output of
:meth:`Root.serialize` always matches the input.
"""

import re
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .nodes import AtRule, ChildNode, Comment, Declaration, Raw, Root, Rule
from .values import SourceText


_IMPORTANT = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


def parse(css: str, source: Optional[Union[str, Path]] = None) -> Root:
    """Parse ``css`` into a tree.

    Args:
        css: Stylesheet text
        source: Path the text was read from, if any

    Returns:
        The root node
    """
    text = SourceText(css)
    nodes, after = _parse_nodes(text.tokens, text)
    return Root(
        nodes=tuple(nodes),
        after=after,
        source=str(source) if source is not None else None,
    )


def _parse_nodes(tokens: Sequence, text: SourceText) -> Tuple[List[ChildNode], str]:
    nodes: List[ChildNode] = []
    index = 0
    count = len(tokens)

    while True:
        before, index = _consume_before(tokens, index, text)
        if index >= count:
            return nodes, before

        token = tokens[index]
        if token.type == "comment":
            raw = text.slice([token])
            nodes.append(Comment(
                before=before,
                line=token.source_line,
                column=token.source_column,
                text=raw[2:-2] if raw.endswith("*/") and len(raw) >= 4 else raw[2:],
            ))
            index += 1
            continue

        start = index
        while index < count and not _is_terminator(tokens[index]):
            index += 1
        segment = list(tokens[start:index])

        if index < count:
            terminator = tokens[index]
            index += 1
            nodes.append(_build_node(segment, terminator, before, text))
            continue

        # Last statement of the block: trailing whitespace belongs to the container
        segment, trailing = _split_trailing(segment, text)
        nodes.append(_build_node(segment, None, before, text))
        return nodes, trailing


def _consume_before(tokens: Sequence, index: int, text: SourceText) -> Tuple[str, int]:
    """Collect whitespace and stray semicolons preceding a node."""
    start = index
    while index < len(tokens):
        token = tokens[index]
        if token.type == "whitespace" or (token.type == "literal" and token.value == ";"):
            index += 1
        else:
            break
    return text.slice(tokens[start:index]), index


def _is_terminator(token) -> bool:
    return token.type == "{} block" or (token.type == "literal" and token.value == ";")


def _split_leading(tokens: Sequence, text: SourceText) -> Tuple[str, List]:
    index = 0
    while index < len(tokens) and tokens[index].type == "whitespace":
        index += 1
    return text.slice(tokens[:index]), list(tokens[index:])


def _split_trailing(tokens: Sequence, text: SourceText) -> Tuple[List, str]:
    index = len(tokens)
    while index > 0 and tokens[index - 1].type == "whitespace":
        index -= 1
    return list(tokens[:index]), text.slice(tokens[index:])


def _build_node(segment: List, terminator, before: str, text: SourceText) -> ChildNode:
    first = segment[0] if segment else terminator
    line, column = first.source_line, first.source_column
    is_block = terminator is not None and terminator.type == "{} block"
    has_semicolon = terminator is not None and not is_block

    if segment and segment[0].type == "at-keyword":
        after_name, prelude = _split_leading(segment[1:], text)
        params, between = _split_trailing(prelude, text)
        nodes, after = _parse_nodes(terminator.content, text) if is_block else (None, "")
        return AtRule(
            before=before,
            line=line,
            column=column,
            nodes=tuple(nodes) if nodes is not None else None,
            after=after,
            name=text.slice(segment[:1])[1:],
            after_name=after_name,
            params=text.slice(params),
            between=between,
            semicolon=has_semicolon,
        )

    if is_block:
        selector, between = _split_trailing(segment, text)
        nodes, after = _parse_nodes(terminator.content, text)
        return Rule(
            before=before,
            line=line,
            column=column,
            nodes=tuple(nodes),
            after=after,
            selector=text.slice(selector),
            between=between,
        )

    declaration = _build_declaration(segment, before, line, column, has_semicolon, text)
    if declaration is not None:
        return declaration

    return Raw(
        before=before,
        line=line,
        column=column,
        text=text.slice(segment),
        semicolon=has_semicolon,
    )


def _build_declaration(
    segment: List,
    before: str,
    line: int,
    column: int,
    semicolon: bool,
    text: SourceText
) -> Optional[Declaration]:
    """Build a declaration from ``ident [ws] : value``, or return None."""
    if not segment or segment[0].type != "ident":
        return None

    index = 1
    while index < len(segment) and segment[index].type == "whitespace":
        index += 1
    if index >= len(segment) or segment[index].type != "literal" or segment[index].value != ":":
        return None
    index += 1
    while index < len(segment) and segment[index].type == "whitespace":
        index += 1

    value_tokens, after = _split_trailing(segment[index:], text)
    value = text.slice(value_tokens)
    important = ""
    match = _IMPORTANT.search(value)
    if match:
        important = match.group(0)
        value = value[:match.start()]

    return Declaration(
        before=before,
        line=line,
        column=column,
        prop=text.slice(segment[:1]),
        between=text.slice(segment[1:index]),
        value=value,
        important=important,
        after=after,
        semicolon=semicolon,
    )
