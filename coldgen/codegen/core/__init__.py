"""
Core code generation components.

Provides the domain model, type registries and base classes used by all
target generators.
"""

from .errors import (
    GeneratorError,
    DomainError,
    ClassNotFoundError,
    NotAnEnumError,
    DuplicateClassError,
)
from .generator import (
    CodeGenerator,
    GenerationResult,
    ProgressSink,
    generate_code,
    load_percentage,
)
from .domain import (
    ClassDef,
    ClassRef,
    ClassType,
    AttributeDef,
    Annotation,
    EnumConstant,
    TypeParam,
    parse_domain,
)
from .resolver import DomainModel
from .types import TypeEntry, TypeRegistry, TypeRegistries
from .naming import NameSanitizer, NamingCase, first_lower, first_upper, kebab_case
from .comments import comment_block
from .descriptors import build_json, build_xml
from .config import (
    ProjectConfig,
    TargetPaths,
    DefinitionPaths,
    Definitions,
    ConfigManager,
    ConfigError,
    build_config,
    load_config,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Errors
    "GeneratorError",
    "DomainError",
    "ClassNotFoundError",
    "NotAnEnumError",
    "DuplicateClassError",
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "ProgressSink",
    "generate_code",
    "load_percentage",
    # Domain model
    "ClassDef",
    "ClassRef",
    "ClassType",
    "AttributeDef",
    "Annotation",
    "EnumConstant",
    "TypeParam",
    "parse_domain",
    "DomainModel",
    # Type registries
    "TypeEntry",
    "TypeRegistry",
    "TypeRegistries",
    # Naming and formatting utilities
    "NameSanitizer",
    "NamingCase",
    "first_lower",
    "first_upper",
    "kebab_case",
    "comment_block",
    "build_json",
    "build_xml",
    # Configuration system
    "ProjectConfig",
    "TargetPaths",
    "DefinitionPaths",
    "Definitions",
    "ConfigManager",
    "ConfigError",
    "build_config",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
