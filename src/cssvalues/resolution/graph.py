"""Import graph between stylesheets."""

from typing import Dict, Set

import networkx as nx

from cssvalues.errors import CyclicImportError


class ImportGraph:
    """Directed graph of ``importer -> imported`` stylesheet edges."""

    def __init__(self) -> None:
        self.graph = nx.DiGraph()

    def add_import(self, importer: str, imported: str) -> None:
        """Record an import edge.

        Raises:
            CyclicImportError: ``imported`` already depends on ``importer``
        """
        if imported == importer or (
            imported in self.graph
            and importer in self.graph
            and nx.has_path(self.graph, imported, importer)
        ):
            cycle = (
                [importer, imported]
                if imported == importer
                else [importer, *nx.shortest_path(self.graph, imported, importer)]
            )
            raise CyclicImportError(cycle)

        self.graph.add_edge(importer, imported)

    def get_transitive_imports(self, path: str) -> Set[str]:
        """Every file ``path`` depends on."""
        if path not in self.graph:
            return set()
        return set(nx.descendants(self.graph, path))

    def get_stats(self) -> Dict[str, int]:
        return {
            "total_files": self.graph.number_of_nodes(),
            "total_imports": self.graph.number_of_edges(),
        }
