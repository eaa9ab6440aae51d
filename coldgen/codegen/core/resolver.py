"""
Domain model resolver.

Holds the normalized class index and answers the lookup, inheritance and
generic substitution queries shared by every emitter.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ...logging_config import get_logger
from .domain import (
    DEFAULT_ROOT_PACKAGE,
    AttributeDef,
    ClassDef,
    EnumConstant,
    parse_domain,
)
from .errors import ClassNotFoundError, DomainError, DuplicateClassError, NotAnEnumError
from .types import TypeRegistries

logger = get_logger(__name__)

Binding = Dict[str, str]


class DomainModel:
    """Immutable view over the classes of one domain document."""

    def __init__(
        self,
        classes: Iterable[ClassDef],
        registries: Optional[TypeRegistries] = None,
        root_package: str = DEFAULT_ROOT_PACKAGE,
    ):
        self.registries = registries or TypeRegistries()
        self.root_package = root_package
        self._classes: Tuple[ClassDef, ...] = tuple(classes)
        self._index: Dict[str, ClassDef] = {}

        for class_def in self._classes:
            existing = self._index.get(class_def.name)
            if existing is not None:
                raise DuplicateClassError(
                    class_def.name, existing.package, class_def.package
                )
            self._index[class_def.name] = class_def

        logger.debug("Indexed %d domain classes", len(self._index))

    @classmethod
    def from_document(
        cls,
        document: Dict[str, Any],
        registries: Optional[TypeRegistries] = None,
        root_package: str = DEFAULT_ROOT_PACKAGE,
    ) -> "DomainModel":
        """Build a model from a parsed domain document."""
        if document is None:
            raise DomainError("Domain document is missing")
        return cls(parse_domain(document, root_package), registries, root_package)

    # Lookup

    def classes(self) -> List[ClassDef]:
        """All classes in depth-first tree order."""
        return list(self._classes)

    def class_count(self) -> int:
        return len(self._classes)

    def find_class(self, name: Optional[str]) -> Optional[ClassDef]:
        if not name:
            return None
        return self._index.get(name)

    def resolve_class(self, name: str) -> ClassDef:
        """
        Return the class declared under ``name``.

        Raises:
            ClassNotFoundError: If no class has that name
        """
        class_def = self.find_class(name)
        if class_def is None:
            raise ClassNotFoundError(name)
        return class_def

    def qualified_package_of(self, name: str) -> str:
        """Dotted namespace path of the package declaring ``name``."""
        return self.resolve_class(name).package

    def qualified_name_of(self, name: str) -> Optional[str]:
        class_def = self.find_class(name)
        if class_def is None:
            return None
        return f"{class_def.package}.{class_def.name}"

    def is_enum(self, name: Optional[str]) -> bool:
        class_def = self.find_class(name)
        return class_def is not None and class_def.is_enum

    def is_generic(self, name: Optional[str]) -> bool:
        class_def = self.find_class(name)
        return class_def is not None and bool(class_def.type_params)

    def enum_constants(self, name: str) -> Tuple[EnumConstant, ...]:
        """
        Constants declared by an enum class.

        Raises:
            ClassNotFoundError: If the class does not exist
            NotAnEnumError: If the class is not an enum
        """
        class_def = self.resolve_class(name)
        if not class_def.is_enum:
            raise NotAnEnumError(name)
        return class_def.constants

    def is_known_type(self, name: Optional[str]) -> bool:
        """True if ``name`` is a domain class or present in any registry."""
        if not name:
            return False
        return name in self._index or self.registries.contains(name)

    def require_known(self, name: str, context: str) -> None:
        if not self.is_known_type(name):
            raise ClassNotFoundError(name, context)

    # Inheritance

    def binding_for(self, class_def: ClassDef, type_args: Tuple[str, ...]) -> Binding:
        """
        Bind the generic parameters of ``class_def`` to concrete type arguments.

        Parameters whose name is itself a known type are not generic
        placeholders and are left unbound.
        """
        binding: Binding = {}
        for param, arg in zip(class_def.type_params, type_args):
            if not self.is_known_type(param.name):
                binding[param.name] = arg
        return binding

    def ancestors(self, name: str) -> List[Tuple[ClassDef, Binding]]:
        """
        Walk the extends chain of ``name``, nearest parent first.

        Each ancestor is paired with the binding declared by the extends
        reference that points at it. A parent that is not a domain class
        but is a registered type ends the chain.

        Raises:
            ClassNotFoundError: If a parent is neither a class nor a known type
        """
        chain: List[Tuple[ClassDef, Binding]] = []
        seen = {name}
        current = self.resolve_class(name)

        while current.extends is not None:
            ref = current.extends
            parent = self.find_class(ref.name)
            if parent is None:
                if self.registries.contains(ref.name):
                    break
                raise ClassNotFoundError(ref.name, f"extended by {current.name}")
            if parent.name in seen:
                raise DomainError(f"Cyclic inheritance involving '{parent.name}'")
            seen.add(parent.name)
            chain.append((parent, self.binding_for(parent, ref.type_args)))
            current = parent

        return chain

    def substitute_injection(
        self, attribute: AttributeDef, binding: Optional[Binding]
    ) -> AttributeDef:
        """
        Replace generic parameter references in ``attribute`` using ``binding``.

        Substitution is one hop only: bound values are used as given and are
        never resolved further.
        """
        if not binding:
            return attribute
        new_type = binding.get(attribute.type, attribute.type)
        new_args = tuple(binding.get(arg, arg) for arg in attribute.type_args)
        if new_type == attribute.type and new_args == attribute.type_args:
            return attribute
        return replace(attribute, type=new_type, type_args=new_args)

    def merged_attributes(self, name: str) -> List[AttributeDef]:
        """
        Own attributes unioned with those of the whole extends chain.

        Own attributes come first, then each ancestor's new ones. On a name
        collision the most-derived declaration wins.
        """
        class_def = self.resolve_class(name)
        merged: Dict[str, AttributeDef] = {a.name: a for a in class_def.attributes}

        for ancestor, binding in self.ancestors(name):
            for attribute in ancestor.attributes:
                if attribute.name not in merged:
                    merged[attribute.name] = self.substitute_injection(
                        attribute, binding
                    )

        return list(merged.values())

    def inherited_type_params(self, name: str) -> Tuple[str, ...]:
        """Generic parameter names declared by the class or any ancestor."""
        names = list(self.resolve_class(name).type_param_names)
        for ancestor, _ in self.ancestors(name):
            names.extend(ancestor.type_param_names)
        return tuple(names)

    def implements_marker(self, name: str, marker: str) -> bool:
        """True if the class or any ancestor declares ``implements marker``."""
        class_def = self.resolve_class(name)
        if marker in class_def.implements:
            return True
        return any(marker in ancestor.implements for ancestor, _ in self.ancestors(name))
