"""Markdown variable expansion.

Expands ``{{name}}`` placeholders using document-local ``<!-- @var -->``
declarations first and a shared global variable store second.
"""

from mdvars.service import VariableService

__all__ = ['VariableService']
__version__ = '0.1.0'
