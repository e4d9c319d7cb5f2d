"""Value expression tokenizing and symbol substitution."""

from typing import Dict, Iterator, List, Mapping, Optional, Sequence

import tinycss2


_CLOSING = {
    "function": ")",
    "() block": ")",
    "[] block": "]",
    "{} block": "}",
}


def _children(token) -> Sequence:
    if token.type == "function":
        return token.arguments
    if token.type in _CLOSING:
        return token.content
    return ()


class SourceText:
    """CSS text together with its tinycss2 component values.

    tinycss2 only records where a token starts, and its ``serialize()``
    normalizes quotes, escapes and bad urls. Every token is therefore
    mapped back to its span of the original text, so unchanged parts of a
    stylesheet are always written as they appeared.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens: List = tinycss2.parse_component_value_list(text, skip_comments=False)

        # Token positions count lines after \r\n, \r and \f became \n
        normalized = text.replace("\r\n", "\n")
        self._line_starts = [0]
        self._line_starts.extend(
            index + 1 for index, char in enumerate(normalized) if char in "\n\r\f"
        )
        self._offsets: Optional[List[int]] = None
        if "\r\n" in text:
            offsets = []
            index = 0
            while index < len(text):
                offsets.append(index)
                index += 2 if text.startswith("\r\n", index) else 1
            offsets.append(len(text))
            self._offsets = offsets

        self._ends: Dict[int, int] = {}
        self._record(self.tokens, len(text))

    def _record(self, tokens: Sequence, end: int) -> None:
        for index, token in enumerate(tokens):
            stop = self.start(tokens[index + 1]) if index + 1 < len(tokens) else end
            self._ends[id(token)] = stop

            children = _children(token)
            if children:
                closed = self.text[stop - 1:stop] == _CLOSING[token.type]
                self._record(children, stop - 1 if closed else stop)

    def start(self, token) -> int:
        """Offset of the first character of ``token``."""
        offset = self._line_starts[token.source_line - 1] + token.source_column - 1
        if self._offsets is not None:
            offset = self._offsets[offset]
        return offset

    def end(self, token) -> int:
        """Offset just past the last character of ``token``."""
        return self._ends[id(token)]

    def slice(self, tokens: Sequence) -> str:
        """Source text of a run of sibling tokens."""
        if not tokens:
            return ""
        return self.text[self.start(tokens[0]):self.end(tokens[-1])]

    def identifiers(self) -> Iterator:
        """Every identifier token, in document order."""
        return _walk_identifiers(self.tokens)

    def substitute(self, replacements: Mapping[str, Optional[str]]) -> str:
        """The text with every identifier found in ``replacements`` swapped.

        Functions and blocks are searched recursively. Everything else,
        strings, urls and numbers included, is copied from the source.
        """
        chunks = []
        position = 0
        for token in self.identifiers():
            replacement = replacements.get(token.value)
            if replacement is None:
                continue
            chunks.append(self.text[position:self.start(token)])
            chunks.append(replacement)
            position = self.end(token)
        chunks.append(self.text[position:])
        return "".join(chunks)


def _walk_identifiers(tokens: Sequence) -> Iterator:
    for token in tokens:
        if token.type == "ident":
            yield token
        else:
            yield from _walk_identifiers(_children(token))


def replace_value_symbols(value: str, replacements: Mapping[str, Optional[str]]) -> str:
    """Replace every bare identifier of ``value`` that names a known symbol.

    >>> replace_value_symbols("calc(base * 2)", {"base": "10px"})
    'calc(10px * 2)'
    >>> replace_value_symbols("url(base.png)", {"base": "10px"})
    'url(base.png)'
    """
    if not value or not replacements:
        return value
    if not any(name in value for name in replacements):
        return value
    return SourceText(value).substitute(replacements)
