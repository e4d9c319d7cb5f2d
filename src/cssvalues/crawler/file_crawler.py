"""File crawler for stylesheet discovery."""

from pathlib import Path
from typing import Iterator, List, Optional
import fnmatch
from dataclasses import dataclass


DEFAULT_EXTENSIONS = [".css", ".pcss"]


@dataclass
class CrawledFile:
    """Information about a crawled stylesheet."""

    path: Path
    relative_path: Path


class FileCrawler:
    """Crawls a directory tree for stylesheets."""

    def __init__(
        self,
        root_path: Path,
        extensions: Optional[List[str]] = None,
        ignore_patterns: Optional[List[str]] = None
    ) -> None:
        """Initialize the file crawler.

        Args:
            root_path: Directory to crawl
            extensions: Stylesheet file extensions to collect
            ignore_patterns: List of glob patterns to ignore
        """
        self.root_path = Path(root_path)
        self.extensions = extensions or list(DEFAULT_EXTENSIONS)
        self.ignore_patterns = ignore_patterns or []

        # Add common ignore patterns if not specified
        if not self.ignore_patterns:
            self.ignore_patterns = [
                "**/node_modules/**",
                "**/.git/**",
                "**/dist/**",
                "**/build/**",
            ]

    def _should_ignore(self, file_path: Path) -> bool:
        """Check if file should be ignored based on patterns."""
        if file_path.suffix not in self.extensions:
            return True

        path_str = file_path.relative_to(self.root_path).as_posix()

        for pattern in self.ignore_patterns:
            # Normalize pattern
            if not pattern.startswith("**/"):
                pattern = f"**/{pattern}"

            # "**/x/**" should also match paths starting with "x/"
            if fnmatch.fnmatch(path_str, pattern) or fnmatch.fnmatch(path_str, pattern[3:]):
                return True

        return False

    def crawl(self) -> Iterator[CrawledFile]:
        """Crawl the directory and yield stylesheets in path order."""
        if not self.root_path.exists():
            raise ValueError(f"Path does not exist: {self.root_path}")

        if not self.root_path.is_dir():
            raise ValueError(f"Path is not a directory: {self.root_path}")

        for file_path in sorted(self.root_path.rglob("*")):
            if not file_path.is_file():
                continue

            if self._should_ignore(file_path):
                continue

            yield CrawledFile(
                path=file_path,
                relative_path=file_path.relative_to(self.root_path)
            )

    def get_all_files(self) -> List[CrawledFile]:
        """Get list of all stylesheets."""
        return list(self.crawl())

