"""
Mongoose schema generator module.

Generates mongoose schema modules for the concrete classes of the domain model.
"""

from .generator import MongooseGenerator
from .types import MIXED_TYPE, MongooseTypeMapper, enum_descriptor, schema_name

__all__ = [
    "MongooseGenerator",
    "MongooseTypeMapper",
    "MIXED_TYPE",
    "enum_descriptor",
    "schema_name",
]
