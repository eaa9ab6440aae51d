"""
TypeScript code generator module.

Generates interface/class model pairs and const enums from the domain model.
"""

from .generator import NodePackageGenerator, TypeScriptGenerator
from .types import TypeScriptTypeMapper, import_statement, module_path

__all__ = [
    "NodePackageGenerator",
    "TypeScriptGenerator",
    "TypeScriptTypeMapper",
    "import_statement",
    "module_path",
]
