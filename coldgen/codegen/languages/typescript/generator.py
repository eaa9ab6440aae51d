"""
TypeScript code generator implementation.

Generates an exported interface plus an implementing class for every
domain class, and a const enum with a companion lookup object for every
enum. The Node package descriptors shared with the schema target live here
as well.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from ....logging_config import get_logger
from ...core.descriptors import build_json
from ...core.domain import ClassDef
from ...core.generator import CodeGenerator
from ...core.naming import kebab_case
from .types import TypeScriptTypeMapper

logger = get_logger(__name__)


class NodePackageGenerator(CodeGenerator):
    """Base for targets that ship as a Node package of ``.ts`` modules."""

    module_suffix = ""

    @property
    def file_extension(self) -> str:
        return ".ts"

    @property
    def package_manifest(self) -> Dict[str, Any]:
        """package.json template of the target."""
        return {}

    def file_name(self, class_def: ClassDef) -> str:
        return f"{kebab_case(class_def.name)}{self.module_suffix}{self.file_extension}"

    def write_descriptors(self):
        """Write package.json (stamped with the library version) and tsconfig.json."""
        manifest = dict(self.package_manifest)
        manifest["version"] = self.config.lib_version
        indentation = self.config.indentation
        self.write_file(self.output_dir / "package.json", build_json(manifest, indentation))
        self.write_file(
            self.output_dir / "tsconfig.json",
            build_json(self.definitions.tsconfig, indentation),
        )


class TypeScriptGenerator(NodePackageGenerator):
    """Code generator for TypeScript interface/class models."""

    module_suffix = TypeScriptTypeMapper.MODEL_SUFFIX

    def __init__(self, *args, **kwargs):
        """Initialize TypeScript generator."""
        super().__init__(*args, **kwargs)
        self.type_mapper = TypeScriptTypeMapper(
            self.model, on_unresolved=self.record_unresolved
        )

    def get_template_directory(self) -> Optional[Path]:
        """Return the TypeScript templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def package_manifest(self) -> Dict[str, Any]:
        return self.definitions.package_javascript

    def generate_class(self, class_def: ClassDef) -> str:
        """Generate a TypeScript model module for a single class or enum."""
        context = {
            "indent": self.indent,
            "name": class_def.name,
            "comment": self.comment(class_def.desc),
        }

        if class_def.is_enum:
            context["constants"] = [
                {"name": constant.name, "comment": self.comment(constant.desc)}
                for constant in class_def.constants
            ]
            return self.render_template("enum.ts.j2", context)

        params = ""
        if class_def.type_params:
            params = f"<{', '.join(class_def.type_param_names)}>"

        interface = f"I{class_def.name}{params}"
        parent = self.type_mapper.parent_type(class_def)
        interface_declaration = f"{interface} extends {parent}" if parent else interface

        context.update(
            {
                "imports": self.type_mapper.collect_imports(class_def),
                "interface_declaration": interface_declaration,
                "class_declaration": f"{class_def.name}{params} implements {interface}",
                "members": [
                    {
                        "name": attribute.name,
                        "type": self.type_mapper.attribute_type(attribute),
                        "comment": self.comment(attribute.desc),
                    }
                    for attribute in class_def.attributes
                ],
                "params": [
                    {
                        "name": attribute.name,
                        "type": self.type_mapper.attribute_type(attribute),
                    }
                    for attribute in self.model.merged_attributes(class_def.name)
                ],
            }
        )
        return self.render_template("model.ts.j2", context)
