"""Plugin pipeline for stylesheets."""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

from cssvalues.errors import CssValuesWarning
from cssvalues.stylesheet import Root, parse

if TYPE_CHECKING:
    from cssvalues.plugins.base import BasePlugin


logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Output of a processor run."""

    root: Root
    processor: Optional["Processor"] = None
    source: Optional[str] = None
    messages: List[Dict[str, Any]] = field(default_factory=list)
    warnings: List[CssValuesWarning] = field(default_factory=list)

    @property
    def css(self) -> str:
        return self.root.serialize()

    def warn(self, warning: CssValuesWarning) -> None:
        """Record a non-fatal problem."""
        self.warnings.append(warning)
        logger.warning("%s", warning)

    def get_messages(self, message_type: str) -> List[Dict[str, Any]]:
        return [message for message in self.messages if message.get("type") == message_type]


class Processor:
    """Runs a chain of plugins over a stylesheet."""

    def __init__(self, plugins: Optional[Sequence["BasePlugin"]] = None) -> None:
        self.plugins: List["BasePlugin"] = list(plugins or [])

    async def process(self, css: str, source: Optional[Union[str, Path]] = None) -> ProcessResult:
        """Parse ``css`` and pass it through every plugin in order.

        Args:
            css: Stylesheet text
            source: Path of the stylesheet, used to resolve relative imports
        """
        root = parse(css, source=source)
        result = ProcessResult(root=root, processor=self, source=root.source)

        for plugin in self.plugins:
            result.root = await plugin.run(result.root, result)

        return result

    async def process_file(self, path: Union[str, Path]) -> ProcessResult:
        """Read and process a stylesheet file."""
        path = Path(path)
        css = await asyncio.to_thread(path.read_text, encoding="utf-8")
        return await self.process(css, source=path)

    def process_sync(self, css: str, source: Optional[Union[str, Path]] = None) -> ProcessResult:
        """Blocking variant of :meth:`process`."""
        return asyncio.run(self.process(css, source=source))
