"""Global variable store shared by every ``process()`` call of a service.

All access goes through one lock; callers never see the underlying dict.
"""

import logging
import threading
from typing import Dict, Mapping, Optional, Tuple

from mdvars.loader import VariablesLoader


logger = logging.getLogger(__name__)


class VariableStore:
    """Thread-safe mapping of global variable name -> value."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._lock = threading.Lock()
        self._vars: Dict[str, str] = dict(initial or {})

    def set(self, name: str, value: str) -> None:
        """Insert or overwrite a variable."""
        with self._lock:
            self._vars[name] = value

    def get(self, name: str) -> Tuple[str, bool]:
        """
        Look up a variable.

        Returns:
            ``(value, True)`` if present, ``('', False)`` otherwise
        """
        with self._lock:
            if name in self._vars:
                return self._vars[name], True
            return '', False

    def get_all(self) -> Dict[str, str]:
        """Return a copy of every variable, taken atomically."""
        with self._lock:
            return dict(self._vars)

    def update(self, variables: Mapping[str, str]) -> None:
        """Set many variables in one critical section."""
        with self._lock:
            self._vars.update(variables)

    def load_from_yaml(self, text: str) -> int:
        """
        Merge variables from a variables document.

        The whole document is parsed before anything is applied, so a
        parse failure leaves the store unchanged. Existing names not in
        the document are kept.

        Returns:
            Number of records applied

        Raises:
            VariablesParseError: If the document is malformed
        """
        variables = VariablesLoader().parse(text)

        with self._lock:
            for variable in variables:
                self._vars[variable.name] = variable.value

        logger.debug(f"Loaded {len(variables)} global variable(s)")
        return len(variables)

    def export_to_yaml(self) -> str:
        """
        Render every variable as a variables document.

        Raises:
            VariablesSerializationError: If rendering fails
        """
        return VariablesLoader().dump(self.get_all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._vars)
