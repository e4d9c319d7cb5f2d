"""Plugin replacing ``@value`` symbols with their resolved values."""

import logging
from typing import Optional

from cssvalues.config import ValuesConfig
from cssvalues.processor import ProcessResult
from cssvalues.resolution import DefinitionWalker, DocumentCache, FileLoader, ModuleResolver
from cssvalues.resolution.loader import FileReader
from cssvalues.rewriter import ValueRewriter
from cssvalues.stylesheet import Root
from .base import BasePlugin


logger = logging.getLogger(__name__)


class ValuesReplacePlugin(BasePlugin):
    """Resolves ``@value`` definitions and imports and substitutes them.

    Options may be given as a :class:`ValuesConfig` or as keyword
    arguments, in either snake_case or the camelCase of the PostCSS plugin::

        ValuesReplacePlugin(noEmitExports=True, atRules=["media", "container"])

    By default every run starts with an empty document cache. Pass
    ``cache`` (or set ``cache_scope="process"``) to reuse resolved files
    across runs.
    """

    name = "cssvalues"

    def __init__(
        self,
        config: Optional[ValuesConfig] = None,
        *,
        resolver: Optional[ModuleResolver] = None,
        cache: Optional[DocumentCache] = None,
        read_file: Optional[FileReader] = None,
        **options
    ) -> None:
        if config is not None and options:
            raise TypeError("Pass either a ValuesConfig or keyword options, not both")
        self.config = config or ValuesConfig(**options)
        self.resolver = resolver or ModuleResolver(self.config.resolve)
        self.read_file = read_file
        if cache is None and self.config.cache_scope == "process":
            cache = DocumentCache()
        self.cache = cache

    async def run(self, root: Root, result: ProcessResult) -> Root:
        cache = self.cache if self.cache is not None else DocumentCache()

        def add_dependency(path: str, parent: str) -> None:
            result.messages.append({
                "plugin": self.name,
                "type": "dependency",
                "file": path,
                "parent": parent,
            })

        loader = FileLoader(
            self.resolver,
            cache,
            imports_as_module_requests=self.config.imports_as_module_requests,
            read_file=self.read_file,
            preprocess=self._make_preprocessor(result),
            warn=result.warn,
            on_dependency=add_dependency,
        )
        walker = DefinitionWalker(loader.load, result.warn)
        walked = await walker.walk(root, collect_patches=True)

        values = walked.scope.values()
        logger.debug("Resolved %d values for %s", len(values), root.source or "<input>")
        result.messages.append({
            "plugin": self.name,
            "type": "values",
            "values": values,
        })

        rewriter = ValueRewriter(
            values,
            at_rules=self.config.at_rules,
            replace_in_selectors=self.config.replace_in_selectors,
            remove_exports=self.config.no_emit_exports,
            patches=walked.patches,
        )
        return rewriter.rewrite(root)

    def _make_preprocessor(self, result: ProcessResult):
        """Run the plugins placed before this one over imported files."""
        if not self.config.preprocess_values or result.processor is None:
            return None

        plugins = result.processor.plugins
        upstream = plugins[:plugins.index(self)] if self in plugins else []
        if not upstream:
            return None

        async def preprocess(root: Root) -> Root:
            inner = ProcessResult(root=root, processor=result.processor, source=root.source)
            for plugin in upstream:
                inner.root = await plugin.run(inner.root, inner)
            for warning in inner.warnings:
                result.warn(warning)
            return inner.root

        return preprocess
