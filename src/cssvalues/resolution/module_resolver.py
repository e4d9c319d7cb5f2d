"""Import specifier resolution.

Maps the path operand of an import statement to a stylesheet on disk,
following the conventions of JavaScript bundlers: relative and absolute
paths, bare package requests looked up in ``node_modules`` directories
(scoped packages included), package ``style``/``main`` fields and
``index`` files.
"""

import json
import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from cssvalues.config import ResolveConfig
from cssvalues.errors import UnresolvableImportError


logger = logging.getLogger(__name__)

_WINDOWS_ABSOLUTE = re.compile(r"^[a-zA-Z]:[\\/]")
_MODULE_REQUEST = re.compile(r"^[^?]*~")


def to_module_request(url: str) -> str:
    """Convert a stylesheet url into a module request.

    ``~pkg/file.css`` becomes the package request ``pkg/file.css``; any
    other url that is not already relative or absolute is made relative
    (``file.css`` becomes ``./file.css``).
    """
    if not url:
        return url
    if _WINDOWS_ABSOLUTE.match(url) or url.startswith(("./", "../", "/")):
        request = url
    else:
        request = f"./{url}"
    if _MODULE_REQUEST.match(request):
        request = _MODULE_REQUEST.sub("", request, count=1)
    return request


class ModuleResolver:
    """Resolves import specifiers to absolute stylesheet paths."""

    def __init__(self, config: Optional[ResolveConfig] = None) -> None:
        self.config = config or ResolveConfig()

    def resolve(self, request: str, context_dir: Union[str, Path]) -> Path:
        """Resolve ``request`` as seen from ``context_dir``.

        Raises:
            UnresolvableImportError: No file matches the request
        """
        context_dir = Path(context_dir).absolute()
        aliased = self._apply_alias(request)

        if self._is_path(aliased):
            candidate = Path(aliased)
            if not candidate.is_absolute():
                candidate = context_dir / candidate
            resolved = self._resolve_as_file(candidate) or self._resolve_as_directory(candidate)
        else:
            resolved = self._resolve_as_module(aliased, context_dir)

        if resolved is None:
            raise UnresolvableImportError(request, context_dir)

        resolved = resolved.resolve()
        logger.debug("Resolved %r from %s to %s", request, context_dir, resolved)
        return resolved

    def _apply_alias(self, request: str) -> str:
        for prefix, target in self.config.alias.items():
            if request == prefix or request.startswith(prefix.rstrip("/") + "/"):
                return target + request[len(prefix):]
        return request

    def _is_path(self, request: str) -> bool:
        return (
            request.startswith(("./", "../", "/"))
            or request in (".", "..")
            or bool(_WINDOWS_ABSOLUTE.match(request))
        )

    def _resolve_as_file(self, path: Path) -> Optional[Path]:
        if path.is_file():
            return path
        if not path.name:
            return None
        for extension in self.config.extensions:
            candidate = path.with_name(path.name + extension)
            if candidate.is_file():
                return candidate
        return None

    def _resolve_as_directory(self, path: Path) -> Optional[Path]:
        if not path.is_dir():
            return None

        package_json = path / "package.json"
        if package_json.is_file():
            for entry in self._package_entries(package_json):
                target = path / entry
                resolved = self._resolve_as_file(target) or self._resolve_index(target)
                if resolved is not None:
                    return resolved

        return self._resolve_index(path)

    def _resolve_index(self, path: Path) -> Optional[Path]:
        if not path.is_dir():
            return None
        for name in self.config.main_files:
            resolved = self._resolve_as_file(path / name)
            if resolved is not None:
                return resolved
        return None

    def _package_entries(self, package_json: Path) -> List[str]:
        """Entry points named by a package manifest, in field priority order."""
        try:
            with open(package_json, "r", encoding="utf-8") as f:
                manifest = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable package manifest %s: %s", package_json, e)
            return []

        entries = []
        for field in self.config.main_fields:
            value = manifest.get(field)
            if isinstance(value, str) and value:
                entries.append(value)
        return entries

    def _resolve_as_module(self, request: str, context_dir: Path) -> Optional[Path]:
        for directory in [context_dir, *context_dir.parents]:
            for modules in self.config.modules:
                base = directory / modules
                if not base.is_dir():
                    continue
                candidate = base / request
                resolved = self._resolve_as_file(candidate) or self._resolve_as_directory(candidate)
                if resolved is not None:
                    return resolved
        return None
