"""
Mongoose schema generator implementation.

Generates one exported mongoose schema per concrete domain class, with
inherited attributes flattened into the schema body. Enums only ever appear
inline and abstract classes are stored as mixed values, so neither gets a
module of its own.
"""

from pathlib import Path
from typing import Dict, Any, List, Optional, Set

from ....logging_config import get_logger
from ...core.domain import ClassDef
from ..typescript.generator import NodePackageGenerator
from ..typescript.types import import_statement, module_path
from .types import SCHEMA_SUFFIX, MongooseTypeMapper, schema_name

logger = get_logger(__name__)


class MongooseGenerator(NodePackageGenerator):
    """Code generator for mongoose schemas."""

    module_suffix = SCHEMA_SUFFIX

    def __init__(self, *args, **kwargs):
        """Initialize mongoose generator."""
        super().__init__(*args, **kwargs)
        self.type_mapper = MongooseTypeMapper(
            self.model, on_unresolved=self.record_unresolved
        )

    def get_template_directory(self) -> Optional[Path]:
        """Return the mongoose templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "mongoose"

    @property
    def package_manifest(self) -> Dict[str, Any]:
        return self.definitions.package_mongoose

    def should_emit(self, class_def: ClassDef) -> bool:
        """Enums and abstract classes get no schema module."""
        return self.type_mapper.is_schema_class(class_def)

    def generate_class(self, class_def: ClassDef) -> str:
        """Generate the schema module of a single class using templates."""
        generic_names = self.model.inherited_type_params(class_def.name)
        imports: Set[str] = set()
        members: List[Dict[str, Any]] = []

        for attribute in self.model.merged_attributes(class_def.name):
            context = f"{class_def.name}.{attribute.name}"
            token = self.type_mapper.attribute_token(
                attribute, context, generic_names, imports
            )
            if token is None:
                logger.debug("Omitting %s from %s schema", attribute.name, class_def.name)
                continue
            members.append(
                {
                    "name": attribute.name,
                    "schema": token,
                    "comment": self.comment(attribute.desc),
                }
            )

        imports.discard(
            import_statement(
                schema_name(class_def.name), module_path(class_def, SCHEMA_SUFFIX)
            )
        )

        return self.render_template(
            "schema.ts.j2",
            {
                "indent": self.indent,
                "name": class_def.name,
                "comment": self.comment(class_def.desc),
                "imports": sorted(imports),
                "members": members,
            },
        )
