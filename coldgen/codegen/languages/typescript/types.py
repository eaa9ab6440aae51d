"""
TypeScript type rendering and module resolution.

Domain classes are referenced through their ``I<Name>`` interface (enums by
their own name) and imported from ``src/<namespace>/<kebab-name>.model``.
"""

from typing import Callable, Iterable, List, Optional, Set, Tuple

from ...core.domain import AttributeDef, ClassDef
from ...core.naming import kebab_case
from ...core.resolver import DomainModel

ANY_TYPE = "any"

UnresolvedCallback = Callable[[str, str], None]


def module_path(class_def: ClassDef, suffix: str) -> str:
    """Import path of a generated module (``src/domain/pets/pet-owner.model``)."""
    parts = ("src",) + tuple(class_def.namespace) + (kebab_case(class_def.name) + suffix,)
    return "/".join(parts)


def import_statement(symbol: str, module: str) -> str:
    return f"import {{ {symbol} }} from '{module}';"


class TypeScriptTypeMapper:
    """Maps domain types onto TypeScript type expressions and imports."""

    MODEL_SUFFIX = ".model"

    def __init__(
        self, model: DomainModel, on_unresolved: Optional[UnresolvedCallback] = None
    ):
        self.model = model
        self.registry = model.registries.typescript
        self.on_unresolved = on_unresolved

    def symbol(self, name: str) -> str:
        """Name a domain type is referenced by: ``I<Name>`` unless it is an enum."""
        class_def = self.model.find_class(name)
        if class_def is not None and not class_def.is_enum:
            return f"I{name}"
        return name

    def type_expression(self, name: Optional[str], type_args: Tuple[str, ...] = ()) -> str:
        """
        TypeScript type of a domain type reference.

        Registry types use their mapped name, domain classes their symbol.
        A generic class referenced without arguments is closed with ``<any>``.
        """
        if not name:
            return ANY_TYPE
        entry = self.registry.lookup(name)
        expression = entry.name if entry else self.symbol(name)
        if type_args:
            expression += f"<{', '.join(self.type_expression(arg) for arg in type_args)}>"
        elif entry is None and self.model.is_generic(name):
            expression += f"<{ANY_TYPE}>"
        return expression

    def attribute_type(self, attribute: AttributeDef) -> str:
        if attribute.is_container:
            return f"{self.type_expression(attribute.element_type)}[]"
        return self.type_expression(attribute.type, attribute.type_args)

    def parent_type(self, class_def: ClassDef) -> Optional[str]:
        """Interface extended by the class's interface, if it has a parent."""
        ref = class_def.extends
        if ref is None:
            return None
        if self.model.find_class(ref.name) is not None:
            name = f"I{ref.name}"
        else:
            entry = self.registry.lookup(ref.name)
            name = entry.name if entry else ref.name
        if ref.type_args:
            name += f"<{', '.join(self.type_expression(arg) for arg in ref.type_args)}>"
        return name

    # Imports

    def import_for(
        self, name: Optional[str], context: str, generic_names: Iterable[str] = ()
    ) -> Optional[str]:
        """Import statement for a referenced type, or None if nothing is imported."""
        if not name or name in generic_names:
            return None

        entry = self.registry.lookup(name)
        if entry is not None:
            if entry.dependency:
                return import_statement(entry.name, entry.dependency)
            return None

        class_def = self.model.find_class(name)
        if class_def is not None:
            return import_statement(
                self.symbol(name), module_path(class_def, self.MODEL_SUFFIX)
            )

        if not self.model.is_known_type(name) and self.on_unresolved:
            self.on_unresolved(name, context)
        return None

    def collect_imports(self, class_def: ClassDef) -> List[str]:
        """Sorted, deduplicated imports of a model module. Never imports itself."""
        generic_names = self.model.inherited_type_params(class_def.name)
        found: Set[Optional[str]] = set()

        def add(name: Optional[str], context: str):
            if name != class_def.name:
                found.add(self.import_for(name, context, generic_names))

        for attribute in self.model.merged_attributes(class_def.name):
            context = f"{class_def.name}.{attribute.name}"
            add(attribute.element_type if attribute.is_container else attribute.type, context)
            for arg in attribute.type_args:
                add(arg, context)

        if class_def.extends is not None:
            context = f"extends of {class_def.name}"
            add(class_def.extends.name, context)
            for arg in class_def.extends.type_args:
                add(arg, context)

        return sorted(statement for statement in found if statement)
