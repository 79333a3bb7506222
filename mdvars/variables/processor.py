"""
Template processing for Markdown documents.

Documents declare local variables with ``<!-- @var name: value -->`` lines
and reference variables with ``{{name}}`` placeholders. Local declarations
win over global variables; unknown placeholders are left as written.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from .store import VariableStore
from .types import Variable


logger = logging.getLogger(__name__)


class TemplateProcessor:
    """
    Expands ``{{name}}`` placeholders in document text.

    Processing runs in two passes:
    - declarations: ``<!-- @var name: value -->`` lines are collected into a
      document-local map and removed, ``<!-- @include:... -->`` lines are removed
    - expansion: each placeholder is replaced from the local map, then the
      global store, otherwise kept verbatim
    """

    VAR_PREFIX = '<!-- @var '
    INCLUDE_PREFIX = '<!-- @include:'
    COMMENT_SUFFIX = ' -->'

    # Matches {{...}} up to the first closing brace
    PLACEHOLDER_PATTERN = re.compile(r'\{\{([^}]+)\}\}')

    def __init__(self, store: Optional[VariableStore] = None):
        """Initialize the processor with the global store used for fallback lookups."""
        self.store = store if store is not None else VariableStore()

    def process(self, content: str) -> str:
        """
        Strip declarations from a document and expand its placeholders.

        Args:
            content: Raw document text

        Returns:
            Expanded text
        """
        declarations, body = self.extract_declarations(content)

        local_vars: Dict[str, str] = {}
        for variable in declarations:
            local_vars[variable.name] = variable.value

        return self.expand(body, local_vars)

    def extract_declarations(self, content: str) -> Tuple[List[Variable], str]:
        """
        Collect ``@var`` declarations and remove declaration/include lines.

        Args:
            content: Raw document text

        Returns:
            Tuple of (declarations in document order, remaining text)
        """
        declarations: List[Variable] = []
        kept_lines: List[str] = []

        for line in content.split('\n'):
            trimmed = line.strip()

            if self._is_comment(trimmed, self.VAR_PREFIX):
                declaration = trimmed[len(self.VAR_PREFIX):-len(self.COMMENT_SUFFIX)]
                name, sep, value = declaration.partition(':')
                if sep:
                    declarations.append(Variable(name=name.strip(), value=value.strip()))
                    continue
                # No colon: not a declaration, keep the line as written
                logger.debug(f"Ignoring @var line without ':': {trimmed}")
                kept_lines.append(line)
            elif self._is_comment(trimmed, self.INCLUDE_PREFIX):
                # Reserved marker, includes are not performed
                continue
            else:
                kept_lines.append(line)

        return declarations, '\n'.join(kept_lines)

    def expand(self, text: str, local_vars: Optional[Dict[str, str]] = None) -> str:
        """
        Replace placeholders in text. Inserted values are not rescanned.

        Args:
            text: Text with declarations already removed
            local_vars: Document-local variables, checked before the store

        Returns:
            Text with resolvable placeholders replaced
        """
        local_vars = local_vars or {}
        global_vars = self.store.get_all()

        def replace_var(match):
            name = match.group(1).strip()
            if name in local_vars:
                return local_vars[name]
            if name in global_vars:
                return global_vars[name]
            logger.debug(f"Unresolved placeholder: {match.group(0)}")
            return match.group(0)

        return self.PLACEHOLDER_PATTERN.sub(replace_var, text)

    def find_placeholders(self, content: str) -> List[str]:
        """Return the unique lookup names referenced by a document, in order of appearance."""
        _, body = self.extract_declarations(content)
        names: List[str] = []
        for match in self.PLACEHOLDER_PATTERN.finditer(body):
            name = match.group(1).strip()
            if name not in names:
                names.append(name)
        return names

    def unresolved(self, content: str) -> List[str]:
        """Return placeholder names that neither the document nor the store defines."""
        declarations, _ = self.extract_declarations(content)
        local_names = {variable.name for variable in declarations}
        global_vars = self.store.get_all()
        return [
            name for name in self.find_placeholders(content)
            if name not in local_names and name not in global_vars
        ]

    def _is_comment(self, trimmed: str, prefix: str) -> bool:
        return (
            trimmed.startswith(prefix)
            and trimmed.endswith(self.COMMENT_SUFFIX)
            and len(trimmed) >= len(prefix) + len(self.COMMENT_SUFFIX)
        )
