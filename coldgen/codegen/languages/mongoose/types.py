"""
Mongoose schema type mapping.

Resolves each attribute of a domain class to the schema token it is stored
as, collecting the nested schema imports along the way.
"""

from typing import Callable, Iterable, Optional, Set

from ...core.domain import AttributeDef, ClassDef
from ...core.resolver import DomainModel
from ..typescript.types import import_statement, module_path

MIXED_TYPE = "Schema.Types.Mixed"
SCHEMA_SUFFIX = ".schema"

UnresolvedCallback = Callable[[str, str], None]


def schema_name(class_name: str) -> str:
    return f"{class_name}Schema"


def enum_descriptor(constants: Iterable[str]) -> str:
    """Inline descriptor of a string enum: ``{ type: String, enum: ['A', 'B'] }``."""
    members = ", ".join(f"'{name}'" for name in constants)
    return f"{{ type: String, enum: [{members}] }}"


class MongooseTypeMapper:
    """Maps domain types onto mongoose schema tokens."""

    def __init__(
        self, model: DomainModel, on_unresolved: Optional[UnresolvedCallback] = None
    ):
        self.model = model
        self.registry = model.registries.mongoose
        self.on_unresolved = on_unresolved

    def is_schema_class(self, class_def: Optional[ClassDef]) -> bool:
        """True if a standalone schema module is generated for the class."""
        return class_def is not None and not class_def.is_enum and not class_def.is_abstract

    def type_token(
        self,
        name: Optional[str],
        generic_names: Iterable[str] = (),
        imports: Optional[Set[str]] = None,
    ) -> Optional[str]:
        """
        Schema token of a single (non-container) type, or None if unresolved.

        Nested schema references are added to ``imports``.
        """
        if not name:
            return None

        entry = self.registry.lookup(name)
        if entry is not None:
            return entry.name

        class_def = self.model.find_class(name)
        if class_def is not None:
            if class_def.is_enum:
                return enum_descriptor(constant.name for constant in class_def.constants)
            if class_def.is_abstract:
                return MIXED_TYPE
            if imports is not None:
                imports.add(
                    import_statement(schema_name(name), module_path(class_def, SCHEMA_SUFFIX))
                )
            return schema_name(name)

        if name in generic_names:
            return MIXED_TYPE
        return None

    def attribute_token(
        self,
        attribute: AttributeDef,
        context: str,
        generic_names: Iterable[str] = (),
        imports: Optional[Set[str]] = None,
    ) -> Optional[str]:
        """Schema token of an attribute; containers wrap their element token."""
        if attribute.is_container:
            element = self.type_token(attribute.element_type, generic_names, imports)
            if element is None:
                self._unresolved(attribute.element_type or attribute.type, context)
                return None
            return f"[ {element} ]"

        token = self.type_token(attribute.type, generic_names, imports)
        if token is None:
            self._unresolved(attribute.type, context)
        return token

    def _unresolved(self, name: str, context: str):
        if self.on_unresolved:
            self.on_unresolved(name, context)
