"""Resolution of ``@value`` statements within one stylesheet."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional

from cssvalues.errors import CssValuesWarning, InvalidDefinitionWarning
from cssvalues.stylesheet import AtRule, Root, replace_value_symbols
from .grammar import DefinitionStatement, ImportStatement, extract_statement, parse_aliases, unquote
from .symbol_table import ImportBinding, RequiredSet, Scope, Symbol


logger = logging.getLogger(__name__)

# (path, source_dir, required, importer) -> values keyed by local alias
ImportLoader = Callable[[str, Path, RequiredSet, str], Awaitable[Dict[str, Optional[str]]]]
WarningSink = Callable[[CssValuesWarning], None]

ANONYMOUS_SOURCE = "<input>"


@dataclass
class WalkResult:
    """Outcome of walking one stylesheet."""

    scope: Scope
    # Rewritten parameters of plain definition statements
    patches: Dict[AtRule, str] = field(default_factory=dict)


class DefinitionWalker:
    """Builds the scope of a stylesheet by walking its statements in order.

    Order matters: a definition sees only the names bound before it, a
    later definition shadows an earlier one, and an import may only name
    a path constant that is already defined.
    """

    def __init__(self, load_import: ImportLoader, warn: Optional[WarningSink] = None) -> None:
        self.load_import = load_import
        self.warn = warn or (lambda warning: None)

    async def walk(self, root: Root, collect_patches: bool = False) -> WalkResult:
        """Resolve every ``@value`` statement of ``root``.

        Args:
            root: Parsed stylesheet; ``root.source`` anchors relative imports
            collect_patches: Record rewritten statement parameters

        Returns:
            The complete scope and, when requested, the statement patches
        """
        source = Path(root.source) if root.source else None
        source_dir = source.parent if source is not None else Path.cwd()
        importer = str(source.resolve()) if source is not None else ANONYMOUS_SOURCE

        result = WalkResult(scope=Scope(source))

        for rule in root.walk_at_rules("value"):
            statement = extract_statement(rule.params, rule.line, rule.column)

            if isinstance(statement, ImportStatement):
                await self._walk_import(statement, result.scope, source_dir, importer)
            else:
                self._walk_definitions(statement, rule, result, collect_patches)

        return result

    def _walk_definitions(
        self,
        statement: DefinitionStatement,
        rule: AtRule,
        result: WalkResult,
        collect_patches: bool
    ) -> None:
        scope = result.scope
        if statement.invalid:
            self.warn(InvalidDefinitionWarning(
                statement.params,
                source=scope.file,
                line=statement.line,
                column=statement.column,
            ))

        for definition in statement.definitions:
            resolved = replace_value_symbols(definition.expression, scope.values())
            scope.define(definition, resolved)

            if collect_patches and not statement.invalid and resolved != definition.expression:
                result.patches[rule] = definition.rewrite(resolved)

    async def _walk_import(
        self,
        statement: ImportStatement,
        scope: Scope,
        source_dir: Path,
        importer: str
    ) -> None:
        if statement.quoted:
            path = unquote(statement.source)
        else:
            # Path constants must be defined before the import naming them
            constant = scope.resolve(statement.source)
            path = unquote(constant) if constant is not None else None

        if path is None:
            logger.debug(
                "Skipping @value import at line %s: %r does not name a path",
                statement.line,
                statement.source,
            )
            return

        required = RequiredSet(tuple(
            ImportBinding(
                remote_name=remote,
                local_name=local,
                module_path=path,
                source_dir=str(source_dir),
            )
            for remote, local in parse_aliases(statement.aliases)
        ))

        values = await self.load_import(path, source_dir, required, importer)

        for binding in required:
            value = values.get(binding.local_name)
            if value is None:
                # Not exported by the imported file
                scope.unbind(binding.local_name)
                continue
            scope.bind(Symbol(
                name=binding.local_name,
                value=value,
                source="imported",
                file=path,
                line=statement.line,
            ))
