"""
Target-specific code generators.

This module contains the generators for each supported output target.
"""

from .java import JavaGenerator, create_java_generator
from .mongoose import MongooseGenerator
from .typescript import TypeScriptGenerator

__all__ = [
    "JavaGenerator",
    "MongooseGenerator",
    "TypeScriptGenerator",
    "create_java_generator",
]
