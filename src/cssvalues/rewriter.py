"""Application of resolved values to a stylesheet tree."""

from dataclasses import replace
from typing import Iterable, Mapping, Optional

from cssvalues.stylesheet import AtRule, ChildNode, Container, Declaration, Rule, replace_value_symbols


class ValueRewriter:
    """Builds a new tree with every symbol reference replaced by its value.

    Declaration values are always rewritten. At-rule parameters are
    rewritten for the at-rules named in ``at_rules`` and rule selectors
    only when ``replace_in_selectors`` is set. Unchanged subtrees are
    shared with the input tree.
    """

    def __init__(
        self,
        values: Mapping[str, str],
        at_rules: Iterable[str] = ("media",),
        replace_in_selectors: bool = False,
        remove_exports: bool = False,
        patches: Optional[Mapping[AtRule, str]] = None
    ) -> None:
        self.values = values
        self.at_rules = {name.lower() for name in at_rules}
        self.replace_in_selectors = replace_in_selectors
        self.remove_exports = remove_exports
        self.patches = patches or {}

    def rewrite(self, container: Container) -> Container:
        """Rewrite ``container`` and everything below it."""
        if container.nodes is None:
            return container

        nodes = []
        changed = False
        for node in container.nodes:
            rewritten = self._rewrite_node(node)
            if rewritten is not node:
                changed = True
            if rewritten is not None:
                nodes.append(rewritten)

        return container.with_nodes(nodes) if changed else container

    def _rewrite_node(self, node: ChildNode) -> Optional[ChildNode]:
        if isinstance(node, Declaration):
            value = self._replace(node.value)
            return replace(node, value=value) if value != node.value else node

        if isinstance(node, AtRule):
            name = node.name.lower()
            if name == "value":
                if self.remove_exports:
                    return None
                params = self.patches.get(node)
                if params is not None:
                    node = replace(node, params=params)
            elif name in self.at_rules:
                params = self._replace(node.params)
                if params != node.params:
                    node = replace(node, params=params)
            return self.rewrite(node)

        if isinstance(node, Rule):
            if self.replace_in_selectors:
                selector = self._replace(node.selector)
                if selector != node.selector:
                    node = replace(node, selector=selector)
            return self.rewrite(node)

        return node

    def _replace(self, text: str) -> str:
        return replace_value_symbols(text, self.values)
