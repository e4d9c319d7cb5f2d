"""Base plugin interface."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from cssvalues.stylesheet import Root

if TYPE_CHECKING:
    from cssvalues.processor import ProcessResult


class BasePlugin(ABC):
    """Abstract base class for all processor plugins."""

    name: str = "plugin"

    @abstractmethod
    async def run(self, root: Root, result: "ProcessResult") -> Root:
        """Transform a stylesheet.

        Args:
            root: Tree produced by the previous plugin
            result: Run state, for warnings and messages

        Returns:
            The tree handed to the next plugin
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
