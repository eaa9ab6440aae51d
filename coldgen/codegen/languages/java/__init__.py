"""
Java code generator module.

Generates builder-style Java classes, enums and a Maven pom.xml from the
domain model.
"""

from .generator import JavaGenerator, create_java_generator
from .naming import JAVA_RESERVED_WORDS, create_java_sanitizer
from .types import JavaTypeMapper, format_annotation_arguments, import_package

__all__ = [
    "JavaGenerator",
    "JavaTypeMapper",
    "JAVA_RESERVED_WORDS",
    "create_java_generator",
    "create_java_sanitizer",
    "format_annotation_arguments",
    "import_package",
]
