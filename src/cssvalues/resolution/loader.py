"""Loading and caching of imported stylesheets."""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional

from cssvalues.stylesheet import Root, parse
from .graph import ImportGraph
from .module_resolver import ModuleResolver, to_module_request
from .symbol_table import RequiredSet, Scope
from .walker import DefinitionWalker, WarningSink


logger = logging.getLogger(__name__)

FileReader = Callable[[Path], str]
Preprocessor = Callable[[Root], Awaitable[Root]]
DependencySink = Callable[[str, str], None]


def read_text(path: Path) -> str:
    """Read a stylesheet from disk."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class DocumentCache:
    """Resolved scopes keyed by absolute stylesheet path.

    Loads still in flight are kept as tasks, so concurrent importers of the
    same file wait for a single parse. Completed entries are never
    invalidated; failed loads are forgotten.
    """

    def __init__(self) -> None:
        self.scopes: Dict[str, Scope] = {}
        self.graph = ImportGraph()
        self._pending: Dict[str, "asyncio.Task[Scope]"] = {}
        self.loads = 0
        self.hits = 0

    async def get_or_load(self, path: str, load: Callable[[], Awaitable[Scope]]) -> Scope:
        """Return the scope of ``path``, loading it at most once."""
        scope = self.scopes.get(path)
        if scope is not None:
            self.hits += 1
            logger.debug("Cache hit for %s", path)
            return scope

        task = self._pending.get(path)
        if task is None:
            self.loads += 1
            task = asyncio.ensure_future(self._load(path, load))
            self._pending[path] = task
        else:
            self.hits += 1
            logger.debug("Waiting for in-flight load of %s", path)

        return await task

    async def _load(self, path: str, load: Callable[[], Awaitable[Scope]]) -> Scope:
        try:
            scope = await load()
        finally:
            self._pending.pop(path, None)
        self.scopes[path] = scope
        return scope

    def __contains__(self, path: object) -> bool:
        return path in self.scopes

    def __len__(self) -> int:
        return len(self.scopes)


class FileLoader:
    """Resolves, reads and walks imported stylesheets."""

    def __init__(
        self,
        resolver: ModuleResolver,
        cache: DocumentCache,
        imports_as_module_requests: bool = False,
        read_file: Optional[FileReader] = None,
        preprocess: Optional[Preprocessor] = None,
        warn: Optional[WarningSink] = None,
        on_dependency: Optional[DependencySink] = None
    ) -> None:
        self.resolver = resolver
        self.cache = cache
        self.imports_as_module_requests = imports_as_module_requests
        self.read_file = read_file or read_text
        self.preprocess = preprocess
        self.warn = warn
        self.on_dependency = on_dependency

    @property
    def graph(self) -> ImportGraph:
        return self.cache.graph

    async def load(
        self,
        path: str,
        source_dir: Path,
        required: RequiredSet,
        importer: str
    ) -> Dict[str, Optional[str]]:
        """Values ``required`` from the stylesheet ``path`` names.

        Raises:
            UnresolvableImportError: ``path`` does not resolve to a file
            CyclicImportError: The file already depends on ``importer``
        """
        request = to_module_request(path) if self.imports_as_module_requests else path
        resolved = self.resolver.resolve(request, source_dir)
        key = str(resolved)

        self.graph.add_import(importer, key)
        if self.on_dependency is not None:
            self.on_dependency(key, importer)

        scope = await self.cache.get_or_load(key, lambda: self._load_file(resolved))
        return scope.export(required)

    async def _load_file(self, path: Path) -> Scope:
        logger.info("Loading values from %s", path)
        content = await asyncio.to_thread(self.read_file, path)

        root = parse(content, source=path)
        if self.preprocess is not None:
            root = await self.preprocess(root)

        walker = DefinitionWalker(self.load, self.warn)
        walked = await walker.walk(root)
        return walked.scope
