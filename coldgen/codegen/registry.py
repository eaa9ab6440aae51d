"""
Generator registry system for managing available code generators.

Provides registration by target name and alias, and instantiation of
target generators.
"""

from typing import Dict, Type, Optional, Any, List

from .core.config import Definitions, ProjectConfig
from .core.errors import GeneratorError
from .core.generator import CodeGenerator, ProgressSink
from .core.resolver import DomainModel


class RegistryError(GeneratorError):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available code generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        target: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a target.

        Args:
            target: Primary target name (e.g., 'java', 'mongoose')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this target
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, CodeGenerator
        ):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        target_key = target.lower()

        # Already registered, skip silently
        if target_key in self._generators and not replace:
            return

        self._generators[target_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == target_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary target"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != target_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = target_key

    def unregister(self, target: str):
        """
        Unregister a generator and its aliases.

        Args:
            target: Target name to unregister
        """
        target_key = target.lower()
        self._generators.pop(target_key, None)

        aliases_to_remove = [
            alias for alias, primary in self._aliases.items() if primary == target_key
        ]
        for alias in aliases_to_remove:
            del self._aliases[alias]

    def resolve_name(self, target: str) -> str:
        """
        Primary name of a target given its name or an alias.

        Raises:
            RegistryError: If target not found
        """
        target_key = target.lower()
        if target_key in self._generators:
            return target_key
        if target_key in self._aliases:
            return self._aliases[target_key]

        raise RegistryError(
            f"No generator registered for target: {target}. "
            f"Available: {', '.join(self.list_targets())}"
        )

    def get_generator_class(self, target: str) -> Type[CodeGenerator]:
        """
        Get generator class for target.

        Args:
            target: Target name or alias

        Returns:
            Generator class

        Raises:
            RegistryError: If target not found
        """
        return self._generators[self.resolve_name(target)]

    def create_generator(
        self,
        target: str,
        model: DomainModel,
        config: ProjectConfig,
        definitions: Definitions,
        progress: Optional[ProgressSink] = None,
    ) -> CodeGenerator:
        """
        Create generator instance for target.

        Args:
            target: Target name or alias
            model: Resolved domain model
            config: Run configuration
            definitions: Parsed definition documents
            progress: Optional progress sink

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If generator creation fails
        """
        generator_class = self.get_generator_class(target)
        try:
            return generator_class(model, config, definitions, progress)
        except GeneratorError as e:
            raise RegistryError(f"Failed to create {target} generator: {e}") from e

    def list_targets(self) -> List[str]:
        """Get list of registered primary target names."""
        return sorted(self._generators.keys())

    def get_aliases_for_target(self, target: str) -> List[str]:
        """
        Get all aliases for a specific target.

        Args:
            target: Primary target name

        Returns:
            List of aliases for this target
        """
        target_key = target.lower()
        return sorted(
            alias for alias, primary in self._aliases.items() if primary == target_key
        )

    def list_all_names(self) -> Dict[str, List[str]]:
        """
        Get all registered names including aliases.

        Returns:
            Dict mapping primary target to list of all names (including aliases)
        """
        return {
            target: [target] + self.get_aliases_for_target(target)
            for target in self._generators
        }

    def is_supported(self, target: str) -> bool:
        """
        Check if target is supported.

        Args:
            target: Target name or alias

        Returns:
            True if supported
        """
        target_key = target.lower()
        return target_key in self._generators or target_key in self._aliases

    def get_target_info(self, target: str) -> Dict[str, Any]:
        """
        Get information about a registered target.

        Args:
            target: Target name or alias

        Returns:
            Dict with target information

        Raises:
            RegistryError: If target not found
        """
        target_key = self.resolve_name(target)
        generator_class = self._generators[target_key]
        return {
            "name": target_key,
            "class": generator_class.__name__,
            "aliases": self.get_aliases_for_target(target_key),
            "module": generator_class.__module__,
        }


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """
    Register the built-in generators with their aliases.

    This is the single source of truth for generator registration.
    """
    from .languages.java import JavaGenerator
    from .languages.mongoose import MongooseGenerator
    from .languages.typescript import TypeScriptGenerator

    registry.register("java", JavaGenerator)
    registry.register(
        "typescript", TypeScriptGenerator, aliases=["ts", "javascript", "js"]
    )
    registry.register("mongoose", MongooseGenerator, aliases=["schema"])


# Public API functions using the global registry


def register_generator(
    target: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    """
    Register a generator in the global registry.

    Args:
        target: Target name
        generator_class: Generator class
        aliases: Optional aliases
    """
    get_registry().register(target, generator_class, aliases)


def get_generator(
    target: str,
    model: DomainModel,
    config: ProjectConfig,
    definitions: Definitions,
    progress: Optional[ProgressSink] = None,
) -> CodeGenerator:
    """
    Get generator instance from global registry.

    Returns:
        Generator instance
    """
    return get_registry().create_generator(target, model, config, definitions, progress)


def list_supported_targets() -> List[str]:
    """List all supported targets from global registry."""
    return get_registry().list_targets()


def is_target_supported(target: str) -> bool:
    """Check if target is supported by global registry."""
    return get_registry().is_supported(target)


def get_target_info(target: str) -> Dict[str, Any]:
    """Get information about a supported target."""
    return get_registry().get_target_info(target)


def list_all_target_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all supported targets."""
    return {target: get_target_info(target) for target in list_supported_targets()}
