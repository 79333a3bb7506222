"""
Variable storage and template processing.
"""

from .types import Variable
from .store import VariableStore
from .processor import TemplateProcessor

__all__ = ['Variable', 'VariableStore', 'TemplateProcessor']
