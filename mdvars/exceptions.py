"""mdvars exceptions."""

from typing import List
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single problem found in a variables document."""
    message: str
    path: str = ""
    exit_code: int = 2


class MdvarsError(Exception):
    """Base class for mdvars errors."""


class VariablesParseError(MdvarsError):
    """Raised when a variables document cannot be parsed.

    Carries every problem found so the CLI can report them all and map
    the failure to a validation exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"{error.path}: {error.message}")
            else:
                messages.append(error.message)

        super().__init__("\n".join(messages))


class VariablesSerializationError(MdvarsError):
    """Raised when the global variables cannot be rendered as YAML."""


class DocumentError(MdvarsError):
    """Raised when a document cannot be read or written."""
    exit_code = 1


class DocumentNotFoundError(DocumentError):
    pass


class DocumentTooLargeError(DocumentError):
    pass


class UnsupportedDocumentError(DocumentError):
    exit_code = 2
