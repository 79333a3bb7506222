"""CLI command handlers."""

from .process import process_document
from .export import export_variables, list_declarations

__all__ = ['process_document', 'export_variables', 'list_declarations']
