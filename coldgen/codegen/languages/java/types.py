"""
Java type rendering and import resolution.

Maps domain types onto Java type expressions and resolves the imports a
class declaration needs from the java registry and the domain index.
"""

import re
from typing import Callable, Iterable, List, Optional, Set, Tuple

from ...core.domain import CONTAINER_TYPES, Annotation, AttributeDef, ClassDef
from ...core.resolver import DomainModel

# Strips the class part of a fully qualified import, leaving its package
_IMPORT_CLASS_PART = re.compile(r"\.[A-Z].*")

UnresolvedCallback = Callable[[str, str], None]


def import_package(qualified_name: str) -> str:
    """Package of a fully qualified import (``a.b.Foo.Bar`` -> ``a.b``)."""
    return _IMPORT_CLASS_PART.sub("", qualified_name)


def format_annotation_value(value) -> str:
    """Render one annotation argument value as Java source."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str) and not value.endswith(".class"):
        return f'"{value}"'
    return str(value)


def format_annotation_arguments(arguments: Iterable[Tuple[str, object]]) -> str:
    """``(key = value, ...)`` or an empty string when there are no arguments."""
    pairs = [
        f"{key} = {format_annotation_value(value)}"
        for key, value in arguments
        if value is not None
    ]
    return f"({', '.join(pairs)})" if pairs else ""


class JavaTypeMapper:
    """Resolves Java type names, expressions and import dependencies."""

    def __init__(
        self,
        model: DomainModel,
        package_root: str,
        on_unresolved: Optional[UnresolvedCallback] = None,
    ):
        """
        Initialize the mapper.

        Args:
            model: Domain model
            package_root: Java package the domain root maps to
            on_unresolved: Called with (name, context) for a dependency miss
        """
        self.model = model
        self.registry = model.registries.java
        self.package_root = package_root
        self.on_unresolved = on_unresolved

    def package_of(self, class_def: ClassDef) -> str:
        """Java package of a domain class, rooted at ``package_root``."""
        return ".".join((self.package_root,) + tuple(class_def.namespace[1:]))

    def java_name(self, domain_type: str) -> str:
        entry = self.registry.lookup(domain_type)
        return entry.name if entry else domain_type

    def type_expression(self, type_name: str, type_args: Tuple[str, ...] = ()) -> str:
        """``Type`` or ``Type<A, B>`` with every part mapped to its Java name."""
        name = self.java_name(type_name)
        if not type_args:
            return name
        return f"{name}<{', '.join(self.java_name(arg) for arg in type_args)}>"

    def attribute_type(self, attribute: AttributeDef) -> str:
        return self.type_expression(attribute.type, attribute.type_args)

    # Dependencies

    def dependency(
        self, name: Optional[str], context: str, generic_names: Iterable[str] = ()
    ) -> Optional[str]:
        """
        Fully qualified import for ``name``: java registry first, then the
        domain class index. Misses return None.
        """
        if not name or name in generic_names:
            return None

        dependency = self.registry.dependency_of(self.java_name(name))
        if dependency:
            return dependency

        class_def = self.model.find_class(name)
        if class_def is not None:
            return f"{self.package_of(class_def)}.{class_def.name}"

        if not self.model.is_known_type(name) and self.on_unresolved:
            self.on_unresolved(name, context)
        return None

    def annotation_dependency(self, annotation: Annotation, context: str) -> Optional[str]:
        dependency = self.registry.dependency_of(f"@{annotation.name}")
        if not dependency and self.on_unresolved:
            self.on_unresolved(f"@{annotation.name}", context)
        return dependency

    def collect_imports(self, class_def: ClassDef) -> List[str]:
        """
        Sorted, deduplicated imports of a class declaration.

        Imports from the class's own package are dropped.
        """
        generic_names = class_def.type_param_names
        found: Set[Optional[str]] = set()

        def add(name: Optional[str], context: str):
            found.add(self.dependency(name, context, generic_names))

        for annotation in class_def.annotations:
            found.add(self.annotation_dependency(annotation, class_def.name))

        for attribute in class_def.attributes:
            context = f"{class_def.name}.{attribute.name}"
            for annotation in attribute.annotations:
                found.add(self.annotation_dependency(annotation, context))
            add(attribute.type, context)
            if attribute.is_container:
                add(CONTAINER_TYPES[attribute.type], context)
            for arg in attribute.type_args:
                add(arg, context)

        if class_def.extends is not None:
            context = f"extends of {class_def.name}"
            add(class_def.extends.name, context)
            for arg in class_def.extends.type_args:
                add(arg, context)

        for interface in class_def.implements:
            add(interface, f"implements of {class_def.name}")

        for param in class_def.type_params:
            add(param.bound, f"bound of {param.name} in {class_def.name}")

        for dependency in class_def.dependencies:
            add(dependency, f"dependencies of {class_def.name}")

        package = self.package_of(class_def)
        return sorted(
            dependency
            for dependency in found
            if dependency and import_package(dependency) != package
        )
