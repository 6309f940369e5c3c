"""
Built-in language configurations.
"""

from .java import JAVA_CONFIG
from .python import PYTHON_CONFIG

BUILTIN_LANGUAGES = [JAVA_CONFIG, PYTHON_CONFIG]

__all__ = ['JAVA_CONFIG', 'PYTHON_CONFIG', 'BUILTIN_LANGUAGES']
