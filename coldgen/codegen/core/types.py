"""
Type registries for the generation targets.

Each registry maps a target type name to the set of domain type names it
satisfies. Lookups go the other way (domain type -> target type) with a
linear scan; the tables are small and order matters (first hit wins).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from ...logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TypeEntry:
    """Target type with its domain aliases and optional import reference."""

    name: str
    aliases: FrozenSet[str] = frozenset()
    dependency: Optional[str] = None

    def matches(self, domain_type: str) -> bool:
        return domain_type in self.aliases


class TypeRegistry:
    """Alias table for a single target."""

    def __init__(self, target: str, entries: Iterable[TypeEntry] = ()):
        self.target = target
        self._entries: Tuple[TypeEntry, ...] = tuple(entries)

    @classmethod
    def from_type_map(
        cls,
        target: str,
        type_map: Optional[Dict[str, Any]],
        dependency_map: Optional[Dict[str, str]] = None,
    ) -> "TypeRegistry":
        """
        Build a registry from a ``{targetType: alias | [aliases]}`` mapping.

        Args:
            target: Registry name, used in log messages
            type_map: Target type -> domain alias or list of aliases
            dependency_map: Target type -> import reference

        Returns:
            TypeRegistry instance
        """
        dependency_map = dependency_map or {}
        entries: List[TypeEntry] = []
        for name, aliases in (type_map or {}).items():
            if isinstance(aliases, str):
                alias_set = frozenset([aliases])
            else:
                alias_set = frozenset(aliases or ())
            entries.append(TypeEntry(name, alias_set, dependency_map.get(name)))
        logger.debug("Loaded %d %s type entries", len(entries), target)
        return cls(target, entries)

    @classmethod
    def from_dependency_map(
        cls,
        target: str,
        dependency_map: Optional[Dict[str, str]],
        type_map: Optional[Dict[str, Any]] = None,
    ) -> "TypeRegistry":
        """Build a registry where every dependency key is its own alias."""
        registry = cls.from_type_map(target, type_map, dependency_map)
        known = {entry.name for entry in registry._entries}
        extra = [
            TypeEntry(name, frozenset([name]), dependency)
            for name, dependency in (dependency_map or {}).items()
            if name not in known
        ]
        return cls(target, registry._entries + tuple(extra))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def lookup(self, domain_type: Optional[str]) -> Optional[TypeEntry]:
        """Return the first entry whose alias set contains ``domain_type``."""
        if not domain_type:
            return None
        for entry in self._entries:
            if entry.matches(domain_type):
                return entry
        return None

    def get(self, name: str) -> Optional[TypeEntry]:
        """Return the entry registered under the exact target name."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def dependency_of(self, name: Optional[str]) -> Optional[str]:
        """Import reference registered for the exact target name, if any."""
        if not name:
            return None
        entry = self.get(name)
        return entry.dependency if entry else None

    def contains(self, name: Optional[str]) -> bool:
        if not name:
            return False
        return self.lookup(name) is not None or self.get(name) is not None


@dataclass(frozen=True)
class TypeRegistries:
    """The three per-target registries, loaded once per run."""

    java: TypeRegistry = field(default_factory=lambda: TypeRegistry("java"))
    typescript: TypeRegistry = field(
        default_factory=lambda: TypeRegistry("typescript")
    )
    mongoose: TypeRegistry = field(default_factory=lambda: TypeRegistry("mongoose"))

    @classmethod
    def from_definitions(
        cls,
        java_definition: Optional[Dict[str, Any]] = None,
        javascript_definition: Optional[Dict[str, Any]] = None,
    ) -> "TypeRegistries":
        """
        Load the registries from the java and javascript definition documents.

        Args:
            java_definition: Document with ``dependencyMap`` (and optional ``typeMap``)
            javascript_definition: Document with ``javascriptTypeMap``,
                ``mongooseTypeMap`` and ``dependencyMap``

        Returns:
            TypeRegistries instance
        """
        java_definition = java_definition or {}
        javascript_definition = javascript_definition or {}
        return cls(
            java=TypeRegistry.from_dependency_map(
                "java",
                java_definition.get("dependencyMap"),
                java_definition.get("typeMap"),
            ),
            typescript=TypeRegistry.from_type_map(
                "typescript",
                javascript_definition.get("javascriptTypeMap"),
                javascript_definition.get("dependencyMap"),
            ),
            mongoose=TypeRegistry.from_type_map(
                "mongoose", javascript_definition.get("mongooseTypeMap")
            ),
        )

    def contains(self, name: Optional[str]) -> bool:
        return any(
            registry.contains(name)
            for registry in (self.java, self.typescript, self.mongoose)
        )
