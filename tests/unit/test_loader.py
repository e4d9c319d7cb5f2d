"""
Unit tests for loading imported stylesheets and the document cache.
"""

import asyncio
from collections import Counter

import pytest

from cssvalues.errors import CyclicImportError, UnresolvableImportError
from cssvalues.resolution import DefinitionWalker, DocumentCache, FileLoader, ModuleResolver
from cssvalues.resolution.symbol_table import Scope
from cssvalues.stylesheet import parse


class CountingReader:
    """File reader that records how often each file is read."""

    def __init__(self):
        self.reads = Counter()

    def __call__(self, path):
        self.reads[path.name] += 1
        return path.read_text(encoding="utf-8")


def _loader(cache=None, reader=None):
    return FileLoader(ModuleResolver(), cache or DocumentCache(), read_file=reader)


async def _walk(css, source, loader):
    walker = DefinitionWalker(loader.load)
    result = await walker.walk(parse(css, source=source))
    return result.scope.values()


@pytest.fixture
def diamond(tmp_path):
    """main imports left and right, which both import shared."""
    (tmp_path / "shared.css").write_text("@value base: 4px;")
    (tmp_path / "left.css").write_text('@value base from "./shared.css";\n@value left: calc(base * 2);')
    (tmp_path / "right.css").write_text('@value base from "./shared.css";\n@value right: calc(base * 3);')
    return tmp_path


class TestDocumentCache:
    """Test load memoization."""

    @pytest.mark.asyncio
    async def test_concurrent_loads_share_one_task(self):
        cache = DocumentCache()
        calls = []

        async def load():
            calls.append(1)
            await asyncio.sleep(0)
            return Scope()

        first, second = await asyncio.gather(
            cache.get_or_load("/a.css", load),
            cache.get_or_load("/a.css", load),
        )
        assert first is second
        assert len(calls) == 1
        assert cache.loads == 1
        assert cache.hits == 1
        assert "/a.css" in cache

    @pytest.mark.asyncio
    async def test_failed_loads_are_not_cached(self):
        cache = DocumentCache()

        async def fail():
            raise OSError("boom")

        with pytest.raises(OSError):
            await cache.get_or_load("/a.css", fail)
        assert "/a.css" not in cache

        async def load():
            return Scope()

        await cache.get_or_load("/a.css", load)
        assert cache.loads == 2
        assert len(cache) == 1


class TestFileLoader:
    """Test import loading through the walker."""

    @pytest.mark.asyncio
    async def test_diamond_reads_shared_file_once(self, diamond):
        reader = CountingReader()
        loader = _loader(reader=reader)
        css = (
            '@value left from "./left.css";\n'
            '@value right from "./right.css";\n'
        )
        values = await _walk(css, diamond / "main.css", loader)

        assert values == {"left": "calc(4px * 2)", "right": "calc(4px * 3)"}
        assert reader.reads["shared.css"] == 1
        assert loader.cache.loads == 3
        main = str((diamond / "main.css").resolve())
        assert loader.graph.get_transitive_imports(main) == {
            str((diamond / name).resolve()) for name in ("left.css", "right.css", "shared.css")
        }

    @pytest.mark.asyncio
    async def test_diamond_importers_get_their_own_aliases(self, tmp_path):
        (tmp_path / "shared.css").write_text("@value base: 4px;")
        (tmp_path / "left.css").write_text('@value base as l from "./shared.css";\n@value left: l;')
        (tmp_path / "right.css").write_text('@value base as r from "./shared.css";\n@value right: r;')
        reader = CountingReader()
        loader = _loader(reader=reader)
        css = '@value left from "./left.css";\n@value right from "./right.css";'
        values = await _walk(css, tmp_path / "main.css", loader)

        assert values == {"left": "4px", "right": "4px"}
        assert reader.reads["shared.css"] == 1
        assert loader.cache.hits == 1

        left = loader.cache.scopes[str((tmp_path / "left.css").resolve())]
        right = loader.cache.scopes[str((tmp_path / "right.css").resolve())]
        assert left.values() == {"l": "4px", "left": "4px"}
        assert right.values() == {"r": "4px", "right": "4px"}

    @pytest.mark.asyncio
    async def test_concurrent_walks_share_loads(self, diamond):
        reader = CountingReader()
        cache = DocumentCache()
        loader = _loader(cache=cache, reader=reader)

        await asyncio.gather(
            _walk('@value left from "./left.css";', diamond / "one.css", loader),
            _walk('@value left from "./left.css";', diamond / "two.css", loader),
        )
        assert reader.reads["left.css"] == 1
        assert reader.reads["shared.css"] == 1

    @pytest.mark.asyncio
    async def test_dependency_callback(self, diamond):
        seen = []
        loader = FileLoader(ModuleResolver(), DocumentCache(), on_dependency=lambda path, parent: seen.append(path))
        await _walk('@value left from "./left.css";', diamond / "main.css", loader)
        assert [path.rsplit("/", 1)[-1] for path in seen] == ["left.css", "shared.css"]

    @pytest.mark.asyncio
    async def test_module_requests(self, diamond):
        loader = FileLoader(ModuleResolver(), DocumentCache(), imports_as_module_requests=True)
        values = await _walk('@value base from "shared.css";', diamond / "main.css", loader)
        assert values == {"base": "4px"}

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        loader = _loader()
        with pytest.raises(UnresolvableImportError):
            await _walk('@value a from "./missing.css";', tmp_path / "main.css", loader)

    @pytest.mark.asyncio
    async def test_mutual_import_is_a_cycle(self, tmp_path):
        (tmp_path / "a.css").write_text('@value b from "./b.css";\n@value a: 1px;')
        (tmp_path / "b.css").write_text('@value a from "./a.css";\n@value b: 2px;')
        loader = _loader()
        with pytest.raises(CyclicImportError) as exc_info:
            await _walk('@value a from "./a.css";', tmp_path / "main.css", loader)
        assert [path.rsplit("/", 1)[-1] for path in exc_info.value.cycle] == ["b.css", "a.css", "b.css"]

    @pytest.mark.asyncio
    async def test_self_import_is_a_cycle(self, tmp_path):
        (tmp_path / "self.css").write_text('@value x from "./self.css";')
        loader = _loader()
        with pytest.raises(CyclicImportError):
            await _walk('@value x from "./self.css";', tmp_path / "main.css", loader)
