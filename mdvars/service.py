"""Variable service: the operations callers use to expand documents and
manage global variables.

Failures of ``load_globals`` and ``export_globals`` are returned as result
values rather than raised.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from mdvars.exceptions import VariablesParseError, VariablesSerializationError
from mdvars.variables import TemplateProcessor, VariableStore


logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Outcome of an operation that returns no data."""
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class ExportResult:
    """Outcome of exporting the global variables."""
    yaml_content: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {"error": self.error}
        return {"yamlContent": self.yaml_content}


class VariableService:
    """
    Owns one global variable store and the processor that reads it.

    A single instance is meant to be shared by concurrent callers; the
    store serializes access internally.
    """

    def __init__(self, store: Optional[VariableStore] = None):
        """Initialize with an empty store unless one is given."""
        self.store = store if store is not None else VariableStore()
        self.processor = TemplateProcessor(self.store)

    def process(self, content: str) -> str:
        """Expand a document using its own declarations, then global variables."""
        return self.processor.process(content)

    def set_global(self, name: str, value: str) -> OperationResult:
        """Set one global variable."""
        self.store.set(name, value)
        logger.debug(f"Set global variable: {name}")
        return OperationResult(success=True)

    def get_all_globals(self) -> Dict[str, str]:
        """Return a copy of the global variables."""
        return self.store.get_all()

    def load_globals(self, yaml_content: str) -> OperationResult:
        """
        Merge global variables from a variables document.

        Args:
            yaml_content: YAML text with a ``variables`` list

        Returns:
            OperationResult; on failure the store is unchanged
        """
        try:
            count = self.store.load_from_yaml(yaml_content)
        except VariablesParseError as e:
            logger.error(f"Failed to load variables: {e}")
            return OperationResult(success=False, error=f"Failed to load variables: {e}")

        logger.info(f"Loaded {count} global variable(s), {len(self.store)} defined")
        return OperationResult(success=True)

    def export_globals(self) -> ExportResult:
        """Render the global variables as a variables document."""
        try:
            yaml_content = self.store.export_to_yaml()
        except VariablesSerializationError as e:
            logger.error(f"Failed to export variables: {e}")
            return ExportResult(error=f"Failed to export variables: {e}")

        return ExportResult(yaml_content=yaml_content)
