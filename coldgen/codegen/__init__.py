"""
coldgen Code Generation Module

Generates java classes, typescript models and mongoose schemas from one
domain definition document.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_registry,
    get_generator,
    list_supported_targets,
    is_target_supported,
)
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    ProgressSink,
    generate_code,
    load_percentage,
)
from .core.errors import GeneratorError, DomainError
from .core.resolver import DomainModel
from .core.types import TypeRegistries
from .core.config import (
    ConfigError,
    ConfigManager,
    Definitions,
    ProjectConfig,
    load_config,
)


# Convenience functions
def load_project(
    config_dir: Optional[Union[str, Path]] = None,
) -> Tuple[ProjectConfig, Definitions, DomainModel]:
    """
    Load the configuration, the definition documents and the domain model.

    Args:
        config_dir: Directory containing coldConfig.json (default: cwd)

    Returns:
        (config, definitions, model) shared by every target of a run

    Raises:
        ConfigError: If the configuration or a definition document is invalid
        DomainError: If the domain document is inconsistent
    """
    manager = ConfigManager(config_dir)
    config = manager.load_config()
    definitions = manager.load_definitions(config)
    registries = TypeRegistries.from_definitions(
        definitions.java, definitions.javascript
    )
    model = DomainModel.from_document(definitions.domain, registries)
    return config, definitions, model


def generate_target(
    target: str,
    config: ProjectConfig,
    definitions: Definitions,
    model: DomainModel,
    progress: Optional[ProgressSink] = None,
) -> GenerationResult:
    """
    Generate one target tree.

    Args:
        target: Target name or alias
        config: Run configuration
        definitions: Parsed definition documents
        model: Resolved domain model
        progress: Optional progress sink

    Returns:
        GenerationResult of the run

    Raises:
        RegistryError: If the target is not registered
    """
    generator = get_generator(target, model, config, definitions, progress)
    return generate_code(generator)


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "ProgressSink",
    "GeneratorError",
    "DomainError",
    "DomainModel",
    "TypeRegistries",
    "ConfigError",
    "ConfigManager",
    "Definitions",
    "ProjectConfig",
    "load_config",
    "load_project",
    "generate_target",
    "generate_code",
    "load_percentage",
    "get_registry",
    "get_generator",
    "list_supported_targets",
    "is_target_supported",
]
